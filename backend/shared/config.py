"""
Centralized configuration for the BuildScape backend.

All settings are loaded from environment variables (or a .env file).
Module-specific settings are namespaced (e.g., SUPABASE_*, JWT_*, UPLOAD_*).
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
    app_name: str = "BuildScape API"
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
    supabase_db_url: str = ""

    # JWT (the secret has no usable default; startup fails while it is empty)
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_hours: int = 24

    # Uploads
    upload_dir: str = "uploads"
    base_url: str = "http://localhost:8000"
    max_upload_size: int = 10 * 1024 * 1024  # bytes
    max_upload_files: int = 10

    # Passwords
    bcrypt_rounds: int = 12


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
