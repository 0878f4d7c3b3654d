"""FastAPI dependency injection — current user & services."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import UpstreamFailure
from app.schemas.auth import CurrentUser
from app.services import get_file_service, get_usage_service, get_user_resolver
from app.services.file_service import FileService
from app.services.usage_service import UsageService
from app.services.user_service import UserResolver

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def file_service() -> FileService:
    return get_file_service()


def usage_service() -> UsageService:
    return get_usage_service()


def user_resolver() -> UserResolver:
    return get_user_resolver()


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    resolver: UserResolver = Depends(user_resolver),
) -> Optional[CurrentUser]:
    """Return the user for the bearer credential, else None."""
    if credentials is None:
        return None
    try:
        return await resolver.resolve(credentials.credentials)
    except UpstreamFailure as exc:
        logger.warning("User lookup failed: %s", exc)
        return None


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
) -> CurrentUser:
    """Require an authenticated user."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
