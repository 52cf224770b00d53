from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.auth import get_access_token, get_current_user
from app.core.auth_client import SupabaseAuthClient, get_auth_client
from app.schemas.auth import CurrentUser, LoginRedirect
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/me",
    response_model=CurrentUser,
    summary="Get current user",
    description="Get the signed-in user: auth identity merged with the team profile",
    operation_id="get_current_user",
)
async def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Get current user.

    Returns 401 with an ``X-Login-Url`` header when there is no session.
    """
    return current_user


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout user",
    description="End the current session with the auth service",
    operation_id="logout_user",
)
async def logout_user(
    access_token: Annotated[Optional[str], Depends(get_access_token)],
    auth_client: Annotated[SupabaseAuthClient, Depends(get_auth_client)],
) -> None:
    if access_token:
        await auth_client.sign_out(access_token)


@router.get(
    "/login-url",
    response_model=LoginRedirect,
    summary="Get login URL",
    description="Get the URL that starts the hosted login flow",
    operation_id="get_login_url",
)
async def get_login_url(
    auth_client: Annotated[SupabaseAuthClient, Depends(get_auth_client)],
    redirect_to: Annotated[Optional[str], Query(description="Where to return after login")] = None,
) -> LoginRedirect:
    return LoginRedirect(login_url=auth_client.login_redirect_url(redirect_to))
