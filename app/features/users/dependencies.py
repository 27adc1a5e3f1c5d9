"""
FastAPI dependencies for authentication and role checks.
"""
from typing import Annotated
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.features.authorization.dependencies import get_store
from app.features.authorization.engine import require_user
from app.features.authorization.exceptions import Forbidden, Unauthenticated
from app.features.authorization.store import HierarchyStore
from app.features.users.auth import resolve_token_subject
from app.features.users.models import Role, User


# auto_error=False so a missing header surfaces as Unauthenticated (401)
security = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[HierarchyStore, Depends(get_store)]
) -> User | None:
    """
    Resolve the bearer credential to a user, or None when no header is sent.

    An unknown or deactivated user is treated as unauthenticated.
    """
    if credentials is None:
        return None

    user_id = resolve_token_subject(credentials.credentials)
    user = await store.get_user(user_id)
    if user is None or not user.is_active:
        raise Unauthenticated()
    return user


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)]
) -> User:
    """
    Get the current authenticated user.

    Usage:
        @router.get("/me")
        async def get_me(user: User = Depends(get_current_user)):
            return user
    """
    return require_user(user)


async def get_current_director(
    user: Annotated[User, Depends(get_current_user)]
) -> User:
    """Require the DIRECTOR role."""
    if user.role != Role.DIRECTOR:
        raise Forbidden("Director privileges required")
    return user


def get_authorization_header(request) -> str:
    """
    Extract authorization header for rate limiting.
    Used with slowapi Limiter.
    """
    auth = request.headers.get("Authorization", "")
    return auth or "anonymous"
