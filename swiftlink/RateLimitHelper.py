import logging
from typing import Optional

from fastapi import Request
import redis
import redis.exceptions

from swiftlink.core.config import RateLimitConfig

logger = logging.getLogger(__name__)
RATE_LIMIT_KEY_PREFIX = "rate_limit"


def create_redis_client(config: RateLimitConfig) -> redis.Redis:
    pool = redis.ConnectionPool(
        host=config.redis_host,
        port=config.redis_port,
        decode_responses=True,
        max_connections=50,
        socket_connect_timeout=2,
        socket_keepalive=True,
        retry_on_timeout=True,
    )
    return redis.Redis(connection_pool=pool)


def get_client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def is_rate_limited_path(method: str, path: str) -> bool:
    """Only the mutating routes are limited: link creation and deletion."""
    if method == "POST":
        return path == "/api/create"
    if method == "DELETE":
        return path.count("/") == 1 and len(path) > 1
    return False


def check_rate_limit(redis_client: redis.Redis, key: str, limit: int, window: int) -> Optional[bool]:
    try:
        pipe = redis_client.pipeline()
        pipe.incr(key, 1)
        pipe.ttl(key)
        current, ttl = pipe.execute()
        if ttl is None or ttl < 0:
            redis_client.expire(key, window)
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
        logger.warning(f"Redis unavailable ({e}). Rate limiting skipped (fail open).")
        return None  # Skip rate limiting if Redis is down

    return int(current) <= limit
