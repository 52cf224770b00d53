"""Tests for the auth service client."""

import time
from urllib.parse import parse_qs, urlparse

import httpx
import jwt
import pytest

from app.core.auth_client import SupabaseAuthClient
from app.core.exceptions import BackendError

AUTH_URL = "https://test.supabase.co/auth/v1"
SECRET = "test-jwt-secret"


def make_token(secret: str = SECRET, **overrides) -> str:
    now = int(time.time())
    claims = {
        "sub": "auth-1",
        "email": "rep@byteblitz.co.uk",
        "aud": "authenticated",
        "iss": AUTH_URL,
        "iat": now,
        "exp": now + 3600,
        "user_metadata": {"full_name": "Riley Rep"},
    }
    claims.update(overrides)
    return jwt.encode(claims, secret, algorithm="HS256")


def make_client(handler=None, **kwargs) -> SupabaseAuthClient:
    transport = httpx.MockTransport(handler or (lambda request: httpx.Response(500)))
    return SupabaseAuthClient(
        auth_url=AUTH_URL,
        api_key="anon-key",
        redirect_url="https://hub.byteblitz.co.uk",
        client=httpx.AsyncClient(transport=transport),
        **kwargs,
    )


class TestLocalVerification:
    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        session = await make_client(jwt_secret=SECRET).get_session(make_token())

        assert session.user.id == "auth-1"
        assert session.user.email == "rep@byteblitz.co.uk"
        assert session.user.user_metadata == {"full_name": "Riley Rep"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token",
        [
            make_token(secret="wrong-secret"),
            make_token(exp=int(time.time()) - 60),
            make_token(aud="anon"),
            make_token(iss="https://elsewhere.example/auth/v1"),
            "not-a-jwt",
        ],
    )
    async def test_invalid_tokens_have_no_session(self, token: str) -> None:
        assert await make_client(jwt_secret=SECRET).get_session(token) is None

    @pytest.mark.asyncio
    async def test_missing_token(self) -> None:
        assert await make_client(jwt_secret=SECRET).get_session(None) is None


class TestRemoteSession:
    @pytest.mark.asyncio
    async def test_user_endpoint_resolves_session(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json={"id": "auth-1", "email": "rep@byteblitz.co.uk"})

        session = await make_client(handler).get_session("token-123")

        assert seen == {"url": f"{AUTH_URL}/user", "auth": "Bearer token-123"}
        assert session.user.email == "rep@byteblitz.co.uk"
        assert session.user.app_metadata == {}

    @pytest.mark.asyncio
    async def test_rejected_token_has_no_session(self) -> None:
        client = make_client(lambda request: httpx.Response(401, json={"msg": "expired"}))

        assert await client.get_session("expired") is None

    @pytest.mark.asyncio
    async def test_service_failure_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(BackendError) as excinfo:
            await client.get_session("token")

        assert excinfo.value.status_code == 500


class TestAuthActions:
    def test_login_redirect_url(self) -> None:
        url = urlparse(make_client(provider="google").login_redirect_url())

        assert f"{url.scheme}://{url.netloc}{url.path}" == f"{AUTH_URL}/authorize"
        assert parse_qs(url.query) == {"provider": ["google"], "redirect_to": ["https://hub.byteblitz.co.uk"]}

    def test_login_redirect_url_override(self) -> None:
        url = urlparse(make_client().login_redirect_url("https://hub.byteblitz.co.uk/Leads"))

        assert parse_qs(url.query) == {"redirect_to": ["https://hub.byteblitz.co.uk/Leads"]}

    @pytest.mark.asyncio
    async def test_sign_out_tolerates_expired_session(self) -> None:
        client = make_client(lambda request: httpx.Response(401))

        await client.sign_out("expired")

    @pytest.mark.asyncio
    async def test_invite_uses_service_role_key(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["apikey"] = request.headers["apikey"]
            return httpx.Response(200, json={"email": "new@byteblitz.co.uk"})

        client = make_client(handler, service_role_key="service-key")

        assert await client.invite_user("new@byteblitz.co.uk") == {"email": "new@byteblitz.co.uk"}
        assert seen == {"path": "/auth/v1/invite", "apikey": "service-key"}

    @pytest.mark.asyncio
    async def test_invite_without_service_key(self) -> None:
        with pytest.raises(BackendError):
            await make_client().invite_user("new@byteblitz.co.uk")
