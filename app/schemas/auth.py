"""Authentication schemas for Supabase sessions.

This module defines Pydantic models for JWT claims, the session returned by
the auth service, and the merged current-user record.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.entities import RowId


class JWTClaims(BaseModel):
    """JWT claims extracted from a Supabase access token."""

    sub: str = Field(..., description="Subject (auth user ID)")
    email: str = Field(..., description="User email")
    role: str = Field(default="authenticated", description="Postgres role")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    iss: str = Field(..., description="Token issuer")

    # Optional Supabase-specific claims
    aud: Optional[str] = Field(None, description="Audience")
    app_metadata: Optional[Dict[str, Any]] = Field(None, description="Application metadata")
    user_metadata: Optional[Dict[str, Any]] = Field(None, description="User metadata")
    session_id: Optional[str] = Field(None, description="Session ID")


class AuthUser(BaseModel):
    """Identity held by the auth service."""

    id: str = Field(..., description="Auth user ID")
    email: str = Field(..., description="User email")
    app_metadata: Dict[str, Any] = Field(default_factory=dict, description="Provider metadata")
    user_metadata: Dict[str, Any] = Field(default_factory=dict, description="User-editable metadata")


class AuthSession(BaseModel):
    """An active session: the bearer token and the identity it belongs to."""

    access_token: str = Field(..., description="JWT access token")
    user: AuthUser


class CurrentUser(BaseModel):
    """Current user: auth identity with profile fields merged over it.

    Profile columns beyond the declared ones (rep_code, phone, ...) are kept
    as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    id: RowId = Field(..., description="Profile row ID, or auth ID when no profile exists")
    email: str = Field(..., description="User email")
    role: Optional[str] = Field(default="user", description="Application role (admin or user)")
    full_name: Optional[str] = Field(None, description="User's full name")
    commission_rate: Optional[float] = Field(None, description="Commission rate between 0 and 1")

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, value: Any) -> Any:
        # A NULL role column means a regular team member
        return "user" if value is None else value

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginRedirect(BaseModel):
    """Where the browser should go to sign in."""

    login_url: str = Field(..., description="Auth service authorize URL")


__all__ = [
    "JWTClaims",
    "AuthUser",
    "AuthSession",
    "CurrentUser",
    "LoginRedirect",
]
