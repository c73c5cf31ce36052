import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from swiftlink.core.config import Settings
from swiftlink.services.shortener import LinkRegistry

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> LinkRegistry:
    return request.app.state.registry


def require_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> None:
    """FastAPI dependency: reject the request unless it carries the configured bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    configured = settings.base.bearer_token
    if not configured:
        logger.error("Bearer token was somehow not set in configuration.")
        raise HTTPException(status_code=500, detail="Server misconfiguration")

    if not hmac.compare_digest(credentials.credentials.encode(), configured.encode()):
        logger.warning("Rejected delete with invalid bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
