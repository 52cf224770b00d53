"""Application configuration."""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


# Find .env file - check multiple possible locations
def find_env_file() -> Optional[Path]:
    """Find .env file in multiple possible locations."""
    current_dir = os.path.dirname(os.path.abspath(__file__))

    possible_paths = [
        os.path.join(current_dir, ".env"),
        os.path.join(os.path.dirname(current_dir), ".env"),
        os.path.join(os.path.dirname(os.path.dirname(current_dir)), ".env"),
    ]

    for path_str in possible_paths:
        if os.path.exists(path_str):
            path = Path(path_str)
            LOGGER.info(f"Found .env file at: {path}")
            return path

    LOGGER.warning("No .env file found in expected locations")
    return None


ENV_FILE = find_env_file()


class DatabaseSettings(BaseSettings):
    """Direct SQL connection settings, used when STORE_BACKEND=sql."""
    url: str = Field(default="sqlite+aiosqlite:///./staff_hub.db", validation_alias="DATABASE_URL")
    pool_size: int = Field(default=10, validation_alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(default=20, validation_alias="DATABASE_MAX_OVERFLOW")
    echo: bool = Field(default=False, validation_alias="DATABASE_ECHO")
    create_tables: bool = Field(default=False, validation_alias="DATABASE_CREATE_TABLES")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",  # No prefix for nested settings
    )

    @property
    def connection_url(self) -> str:
        """Get the connection URL with an async driver prefix."""
        raw_url = self.url
        if raw_url.startswith("postgres://"):
            raw_url = raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif raw_url.startswith("postgresql://"):
            raw_url = raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif raw_url.startswith("sqlite:///"):
            raw_url = raw_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return raw_url


class SupabaseSettings(BaseSettings):
    """Supabase database (PostgREST) and authentication settings."""
    url: str = Field(default="", validation_alias="SUPABASE_URL")
    anon_key: str = Field(default="", validation_alias="SUPABASE_ANON_KEY")
    service_role_key: str = Field(default="", validation_alias="SUPABASE_SERVICE_ROLE_KEY")
    jwt_secret: str = Field(default="", validation_alias="SUPABASE_JWT_SECRET")
    auth_redirect_url: str = Field(default="http://localhost:5173/Dashboard", validation_alias="AUTH_REDIRECT_URL")
    login_provider: Optional[str] = Field(default=None, validation_alias="AUTH_LOGIN_PROVIDER")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )

    @property
    def rest_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.url.rstrip('/')}/auth/v1"


class Settings(BaseSettings):
    """Unified application settings with nested models."""

    # Application Settings
    app_name: str = Field(default="Staff Hub", validation_alias="APP_NAME")
    app_version: str = "0.1.0"
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=True, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://127.0.0.1:5173"],
        validation_alias="CORS_ORIGINS"
    )

    # API Settings
    api_v1_prefix: str = "/api/v1"
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    # Timeout Settings
    http_timeout: int = Field(default=30, validation_alias="HTTP_TIMEOUT")

    # Which RowStore implementation backs the entity repositories
    store_backend: Literal["postgrest", "sql"] = Field(default="postgrest", validation_alias="STORE_BACKEND")

    # Nested Settings - Initialize with env file explicitly
    db: DatabaseSettings = Field(default_factory=lambda: DatabaseSettings())
    supabase: SupabaseSettings = Field(default_factory=lambda: SupabaseSettings())

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        return self.db.connection_url

    @property
    def supabase_url(self) -> str:
        return self.supabase.url

    @property
    def supabase_anon_key(self) -> str:
        return self.supabase.anon_key

    @property
    def supabase_service_role_key(self) -> str:
        return self.supabase.service_role_key

    @property
    def supabase_jwt_secret(self) -> str:
        return self.supabase.jwt_secret


# Initialize settings
settings = Settings()

LOGGER.info(f"Settings initialized with environment: {settings.environment}")
LOGGER.info(f"Store backend: {settings.store_backend}")
