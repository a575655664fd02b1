"""Bearer token authentication and role checks."""

import logging
from typing import Callable, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.data.uow import create_uow
from core.domain.entities import User
from core.domain.enums import UserRole
from core.domain.exceptions import AuthenticationError, ForbiddenError
from core.settings.sections.auth import AuthSettings

from apps.api.deps import get_container

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(settings: AuthSettings, user_id: str, **claims) -> str:
    """Issue a signed token carrying the user id in the ``id`` claim."""
    payload = {"id": user_id, **claims}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: AuthSettings, token: str) -> str:
    """
    Decode a bearer token.

    Returns:
        The user id from the ``id`` claim

    Raises:
        AuthenticationError: If the token is invalid, expired or has no id
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected bearer token: {type(e).__name__}")
        raise AuthenticationError("Not authorized, token failed") from e

    user_id = payload.get("id")
    if not user_id:
        raise AuthenticationError("Not authorized, token failed")
    return str(user_id)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the authenticated, active user for this request."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    container = get_container(request)
    user_id = decode_access_token(container.settings.auth, credentials.credentials)

    uow = create_uow(container.session_factory)
    async with uow:
        user = await uow.users.get(user_id)

    if user is None or not user.is_active:
        raise AuthenticationError("Not authorized, user not found or inactive")
    return user


def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory restricting a route to the given roles."""
    allowed = tuple(role.value for role in roles)

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not user.has_role(*allowed):
            raise ForbiddenError(f"Role {user.role.value} is not allowed to access this resource")
        return user

    return dependency


def is_staff(user: User) -> bool:
    return user.has_role(UserRole.ADMIN.value, UserRole.MANAGER.value)
