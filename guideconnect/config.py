"""
Configuration management using Pydantic Settings.
Loads environment variables with validation and type checking.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Nepal Guide Connect", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(default=True, description="Write rotating log files under logs/")
    environment: str = Field(default="development", description="Environment name")

    # Database
    database_url: str = Field(
        ...,
        description="Async SQLAlchemy connection URL (postgresql+asyncpg://...)",
    )

    # Redis
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL used for the statistics cache",
    )
    cache_ttl_stats: int = Field(
        default=300, description="Cache TTL for dashboard statistics in seconds"
    )

    # Security
    secret_key: str = Field(..., description="Secret key for signing session tokens")
    admin_email: str = Field(
        default="admin@nepalguideconnect.com",
        description="Email of the account allowed to manage destinations and guides",
    )
    session_cookie_name: str = Field(
        default="guideconnect_session", description="Session cookie name"
    )
    session_ttl_hours: int = Field(default=24, description="Session lifetime in hours")
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        description="Allowed CORS origins (comma-separated)",
    )

    # Brave web search
    brave_search_api_key: Optional[str] = Field(
        default=None, description="Brave Search API subscription token"
    )
    brave_search_url: str = Field(
        default="https://api.search.brave.com/res/v1/web/search",
        description="Brave Search web endpoint",
    )
    search_timeout: int = Field(default=10, description="Search request timeout in seconds")
    search_max_retries: int = Field(default=3, description="Maximum search retries")

    # Pagination
    default_page_size: int = Field(default=10, description="Default list page size")

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Use the asyncpg driver for plain postgres URLs."""
        if isinstance(v, str):
            if v.startswith("postgres://"):
                v = v.replace("postgres://", "postgresql://", 1)
            if v.startswith("postgresql://"):
                v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    def get_allowed_origins_list(self) -> List[str]:
        """Get list of allowed origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_postgres(self) -> bool:
        """Whether the configured database is PostgreSQL."""
        return self.database_url.startswith("postgresql")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid re-reading environment variables.
    """
    return Settings()


# Global settings instance
settings = get_settings()
