"""
Centralized configuration for the mygram account service.

All settings are loaded from environment variables with sensible defaults.
Settings are namespaced by concern (e.g., SUPABASE_*, JWT_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Mygram API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Token signing
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "http://mygram-account"
    jwt_audience: str = "http://mygram"

    # Token lifetimes
    identity_token_ttl_minutes: int = 24 * 60
    access_token_ttl_minutes: int = 20
    refresh_token_ttl_minutes: int = 60
    token_issue_timeout_seconds: float = 5.0

    # Password hashing
    bcrypt_rounds: int = 12


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
