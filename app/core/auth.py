"""Authentication dependencies for FastAPI routes.

This module provides FastAPI dependency injection functions that resolve
the bearer token into the current Staff Hub user and gate admin routes.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.auth_client import SupabaseAuthClient, get_auth_client
from app.core.dependencies import get_session_resolver
from app.core.exceptions import AuthenticationRequired, PermissionDeniedError
from app.schemas.auth import CurrentUser
from app.services.session_service import SessionResolver
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Get the bearer token from the Authorization header, if any."""
    return credentials.credentials if credentials else None


async def get_current_user_optional(
    access_token: Annotated[Optional[str], Depends(get_access_token)],
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
) -> Optional[CurrentUser]:
    """Get the current user if there is an active session, None otherwise.

    Raises:
        BackendError: If the auth service fails (mapped to 502)
    """
    return await resolver.current_user(access_token)


async def get_current_user(
    user: Annotated[Optional[CurrentUser], Depends(get_current_user_optional)],
    auth_client: Annotated[SupabaseAuthClient, Depends(get_auth_client)],
) -> CurrentUser:
    """Get the current authenticated user.

    When there is no session the response is a 401 carrying the login
    redirect URL in the ``X-Login-Url`` header.

    Raises:
        AuthenticationRequired: If there is no active session
    """
    if user is None:
        LOGGER.info("No active session, login required")
        raise AuthenticationRequired("Authentication required", login_url=auth_client.login_redirect_url())

    LOGGER.debug(f"Authenticated user: {user.id} ({user.email})")
    return user


def require_role(required_role: str):
    """Create a dependency that requires a specific user role.

    Args:
        required_role: The role required for access

    Returns:
        Dependency function that checks user role
    """
    async def role_checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role != required_role:
            LOGGER.warning(f"Access denied for user {user.id}: insufficient role '{user.role}', required '{required_role}'")
            raise PermissionDeniedError(f"Insufficient permissions. Required role: {required_role}")
        return user

    return role_checker


require_admin = require_role("admin")
