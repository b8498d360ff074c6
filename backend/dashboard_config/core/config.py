"""Service configuration using pydantic-settings.

Read everything through ``settings``; values come from the environment or a
local ``.env`` file and are validated once at import.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Database - venue, module and feature override records
    database_url: str = "sqlite:///./dashboard_config.db"
    sql_echo: bool = False

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Rate limiting
    rate_limit_enabled: bool = True

    # ==========================================================================
    # White-label resolution
    # ==========================================================================
    # Locale used when neither ?locale= nor Accept-Language is present
    default_locale: str = "es-MX"
    # Module code whose VenueModule row switches the white-label dashboard on
    white_label_module_code: str = "WHITE_LABEL_DASHBOARD"
    # TTL for memoized ResolvedWhiteLabelConfig objects (0 disables caching)
    resolution_cache_ttl_seconds: int = 60

    @field_validator("resolution_cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("resolution_cache_ttl_seconds cannot be negative")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
