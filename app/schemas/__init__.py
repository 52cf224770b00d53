"""Pydantic schemas for requests, responses and stored entities."""

from app.schemas.auth import AuthSession, AuthUser, CurrentUser, JWTClaims, LoginRedirect

__all__ = [
    "AuthSession",
    "AuthUser",
    "CurrentUser",
    "JWTClaims",
    "LoginRedirect",
]
