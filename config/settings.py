"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Shared by the backend (catalog + user places API) and the
place picker client.
"""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # STORAGE
    # ===================
    data_dir: Path = Field(
        default=Path(__file__).resolve().parent.parent / "data",
        description="Directory holding the catalog and user places files"
    )
    places_file: str = Field(
        default="places.json",
        description="Catalog file name (inside data_dir)"
    )
    user_places_file: str = Field(
        default="user-places.json",
        description="Selected places file name (inside data_dir)"
    )

    # ===================
    # CLIENT
    # ===================
    api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the places API used by the picker client"
    )
    remote_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="HTTP timeout for the picker client (None waits indefinitely)"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=3000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        description="Origins allowed to call the API"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def places_path(self) -> Path:
        """Full path of the catalog file."""
        return self.data_dir / self.places_file

    @property
    def user_places_path(self) -> Path:
        """Full path of the selected places file."""
        return self.data_dir / self.user_places_file


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
