"""Client for the Supabase authentication service (GoTrue).

Resolves bearer tokens into sessions, signs users out, builds the login
redirect URL and sends admin invitations.
"""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx
import jwt

from app.core.config import Settings, settings
from app.core.exceptions import BackendError
from app.schemas.auth import AuthSession, AuthUser, JWTClaims
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class SupabaseAuthClient:
    """Thin async wrapper around the GoTrue REST endpoints.

    When a JWT secret is configured, tokens are verified locally (HS256) and no
    network call is made to resolve a session.
    """

    def __init__(
        self,
        auth_url: str,
        api_key: str,
        jwt_secret: str = "",
        service_role_key: str = "",
        redirect_url: str = "",
        provider: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the auth client.

        Args:
            auth_url: Base URL of the auth service (``{SUPABASE_URL}/auth/v1``)
            api_key: Public (anon) API key sent as ``apikey``
            jwt_secret: Secret for local HS256 verification; empty disables it
            service_role_key: Key used for admin calls such as invitations
            redirect_url: Default post-login redirect target
            provider: Optional OAuth provider for the login redirect
            timeout: HTTP timeout in seconds
            client: Optional pre-built httpx client (used by tests)
        """
        self.auth_url = auth_url.rstrip("/")
        self.api_key = api_key
        self.jwt_secret = jwt_secret
        self.service_role_key = service_role_key
        self.redirect_url = redirect_url
        self.provider = provider
        self.expected_issuer = self.auth_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, bearer: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {bearer or self.api_key}",
            "Accept": "application/json",
        }

    async def get_session(self, access_token: Optional[str]) -> Optional[AuthSession]:
        """Resolve an access token into the session it belongs to.

        Args:
            access_token: Bearer token presented by the browser

        Returns:
            The session, or None when the token is missing, invalid or expired

        Raises:
            BackendError: If the auth service fails for any other reason
        """
        if not access_token:
            return None

        if self.jwt_secret:
            return self._verify_locally(access_token)

        url = f"{self.auth_url}/user"
        try:
            response = await self._client.get(url, headers=self._headers(access_token))
        except httpx.HTTPError as e:
            LOGGER.error(f"Auth service unreachable: {e}", exc_info=True)
            raise BackendError("Auth service request failed", original_error=e) from e

        if response.status_code in (401, 403):
            LOGGER.debug("Auth service rejected the access token")
            return None
        if response.status_code >= 400:
            raise BackendError(
                f"Auth service returned {response.status_code}",
                status_code=response.status_code,
                detail=response.text,
            )

        data = response.json()
        return AuthSession(
            access_token=access_token,
            user=AuthUser(
                id=str(data.get("id")),
                email=data.get("email") or "",
                app_metadata=data.get("app_metadata") or {},
                user_metadata=data.get("user_metadata") or {},
            ),
        )

    def _verify_locally(self, access_token: str) -> Optional[AuthSession]:
        try:
            payload = jwt.decode(
                access_token,
                self.jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
                issuer=self.expected_issuer,
            )
            claims = JWTClaims(**payload)
        except jwt.InvalidTokenError as e:
            LOGGER.warning(f"Invalid token: {e}")
            return None
        except ValueError as e:
            LOGGER.warning(f"Token claims incomplete: {e}")
            return None

        return AuthSession(
            access_token=access_token,
            user=AuthUser(
                id=claims.sub,
                email=claims.email,
                app_metadata=claims.app_metadata or {},
                user_metadata=claims.user_metadata or {},
            ),
        )

    async def sign_out(self, access_token: str) -> None:
        """End the session the token belongs to.

        Raises:
            BackendError: If the auth service refuses or cannot be reached
        """
        url = f"{self.auth_url}/logout"
        try:
            response = await self._client.post(url, headers=self._headers(access_token))
        except httpx.HTTPError as e:
            raise BackendError("Sign-out request failed", original_error=e) from e

        if response.status_code >= 400 and response.status_code != 401:
            raise BackendError(
                f"Sign-out failed with {response.status_code}",
                status_code=response.status_code,
                detail=response.text,
            )
        LOGGER.info("Session signed out")

    def login_redirect_url(self, redirect_to: Optional[str] = None, provider: Optional[str] = None) -> str:
        """Build the URL that starts the hosted login flow."""
        params = {"redirect_to": redirect_to or self.redirect_url}
        provider = provider or self.provider
        if provider:
            params = {"provider": provider, **params}
        return f"{self.auth_url}/authorize?{urlencode(params)}"

    async def invite_user(self, email: str) -> Dict[str, Any]:
        """Send an invitation email through the admin API.

        Returns:
            The invited auth user as returned by the service

        Raises:
            BackendError: If no service-role key is configured or the call fails
        """
        if not self.service_role_key:
            raise BackendError("Inviting users requires SUPABASE_SERVICE_ROLE_KEY")

        url = f"{self.auth_url}/invite"
        headers = {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
            "Accept": "application/json",
        }
        try:
            response = await self._client.post(url, headers=headers, json={"email": email})
        except httpx.HTTPError as e:
            raise BackendError("Invite request failed", original_error=e) from e

        if response.status_code >= 400:
            raise BackendError(
                f"Invite failed with {response.status_code}",
                status_code=response.status_code,
                detail=response.text,
            )
        LOGGER.info(f"Invitation sent to {email}")
        return response.json() if response.content else {}

    async def close(self) -> None:
        await self._client.aclose()


def build_auth_client(app_settings: Settings = settings) -> SupabaseAuthClient:
    supabase = app_settings.supabase
    return SupabaseAuthClient(
        auth_url=supabase.auth_url,
        api_key=supabase.anon_key or supabase.service_role_key,
        jwt_secret=supabase.jwt_secret,
        service_role_key=supabase.service_role_key,
        redirect_url=supabase.auth_redirect_url,
        provider=supabase.login_provider,
        timeout=app_settings.http_timeout,
    )


_auth_client: Optional[SupabaseAuthClient] = None


def init_auth_client(app_settings: Settings = settings) -> SupabaseAuthClient:
    global _auth_client
    if _auth_client is None:
        _auth_client = build_auth_client(app_settings)
    return _auth_client


async def close_auth_client() -> None:
    global _auth_client
    if _auth_client is not None:
        await _auth_client.close()
        _auth_client = None


def get_auth_client() -> SupabaseAuthClient:
    """FastAPI dependency for the shared auth client."""
    return init_auth_client()
