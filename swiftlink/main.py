from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from swiftlink.api import health, shortener
from swiftlink.core.config import Settings
from swiftlink.core.exceptions import StorageFault
from swiftlink.db.repository import LinkStore, create_store
from swiftlink.RateLimitHelper import (
    RATE_LIMIT_KEY_PREFIX,
    check_rate_limit,
    create_redis_client,
    get_client_ip,
    is_rate_limited_path,
)
from swiftlink.services.shortener import LinkRegistry

logger = logging.getLogger(__name__)


def create_app(settings: Settings, store: Optional[LinkStore] = None) -> FastAPI:
    """
    Build the HTTP application around an explicitly constructed configuration.

    The links table is created here; any database failure propagates so the
    process never starts in a degraded mode.
    """
    if store is None:
        store = create_store(settings.database)
    store.ensure_schema()

    registry = LinkRegistry(
        store,
        code_size=settings.base.code_size,
        max_code_attempts=settings.base.max_code_attempts,
    )

    redis_client = None
    if settings.rate_limit.enabled:
        redis_client = create_redis_client(settings.rate_limit)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")
        yield
        logger.info("Shutting down gracefully...")
        try:
            store.dispose()
        except Exception:
            logger.debug("Error disposing DB engine")
        if redis_client is not None:
            try:
                redis_client.close()
            except Exception:
                logger.debug("Error closing Redis client")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Short link registry",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.redis_client = redis_client

    app.include_router(health.router)
    app.include_router(shortener.router)

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        if redis_client is None or not is_rate_limited_path(request.method, request.url.path):
            return await call_next(request)

        limit, window = settings.rate_limit.limit, settings.rate_limit.window
        key = f"{RATE_LIMIT_KEY_PREFIX}:{get_client_ip(request)}"

        allowed = check_rate_limit(redis_client, key, limit, window)
        if allowed is False:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(window)},
                content={"detail": f"Too many requests. Limit is {limit} per {window} seconds."}
            )

        return await call_next(request)

    @app.exception_handler(StorageFault)
    async def storage_fault_handler(request: Request, exc: StorageFault):
        logger.error(f"Storage fault on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app
