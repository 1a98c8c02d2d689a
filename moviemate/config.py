"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values that ship in sample .env files and must never sign production tokens
INSECURE_SECRETS = frozenset({
    "your-secret-key",
    "change-me",
    "changeme",
    "secret",
})

MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Security. No default: a missing signing key is a startup failure.
    jwt_secret: str = Field(..., min_length=1)

    # Database
    database_url: str = "sqlite+aiosqlite:///./moviemate.db"

    # Chat provider (Gemini when a key is set, canned replies otherwise)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash-latest"
    gemini_system_prompt: str = ""
    gemini_timeout_seconds: float = 30.0
    chat_debug: bool = False

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_prefix: str = "/api"
    project_name: str = "MovieMate"
    version: str = "1.0.0"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite default
        "http://localhost:5174",
    ]

    # Rate limiting
    rate_limit_auth_per_minute: int = 10   # per IP for login/register
    rate_limit_chat_per_minute: int = 60   # per IP for chat
    rate_limit_enabled: bool = True

    @model_validator(mode="after")
    def check_production_secret(self) -> "Settings":
        if self.environment != "production":
            return self
        if self.jwt_secret.strip().lower() in INSECURE_SECRETS:
            raise ValueError("JWT_SECRET is a known placeholder; set a real secret in production")
        if len(self.jwt_secret) < MIN_PRODUCTION_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be at least {MIN_PRODUCTION_SECRET_LENGTH} characters in production"
            )
        return self

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
