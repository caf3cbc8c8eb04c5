"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Both tiers read from the same Settings class:
- The API server uses the database, CORS, logging and rate limit settings
- The client package uses the endpoint list, timeouts and cart storage path

PATTERN: Settings Singleton
===========================
We create a single Settings instance that's cached using @lru_cache.
This ensures:
- Configuration is loaded once at startup
- All parts of the app use the same configuration
- No repeated file I/O for .env loading

Usage:
    from bookstore.config import get_settings

    settings = get_settings()
    print(settings.app_name)
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic Settings automatically:
    1. Reads from environment variables (case-insensitive)
    2. Falls back to .env file if env var not found
    3. Validates types and raises errors for invalid values
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Online Bookstore",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, auto-reload)"
    )
    api_version: str = Field(
        default="1.0.0",
        description="API version reported in docs and health checks"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=5300,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite:///./bookstore.sqlite",
        description="SQLAlchemy database URL"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections (server databases only)"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )
    auto_create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (use Alembic in production)"
    )

    # -------------------------------------------------------------------------
    # HTTP Settings
    # -------------------------------------------------------------------------
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Rate Limiting Settings
    # -------------------------------------------------------------------------
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable per-client rate limiting"
    )
    rate_limit_storage_uri: str = Field(
        default="memory://",
        description="slowapi storage backend (memory:// or redis://...)"
    )
    rate_limit_default: str = Field(
        default="100/minute",
        description="Limit for read endpoints"
    )
    rate_limit_write: str = Field(
        default="30/minute",
        description="Limit for create, update and delete endpoints"
    )

    # -------------------------------------------------------------------------
    # Client Settings
    # -------------------------------------------------------------------------
    api_endpoints: str = Field(
        default=(
            "http://localhost:5300/api,"
            "https://localhost:7300/api,"
            "http://localhost:5017/api,"
            "https://localhost:7043/api,"
            "https://localhost:5001/api,"
            "http://localhost:5000/api"
        ),
        description="Comma-separated API base URLs, probed in order"
    )
    api_probe_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for each endpoint probe"
    )
    api_request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for catalog and admin requests"
    )
    cart_storage_path: str = Field(
        default="~/.bookstore/storage.json",
        description="Local key/value file holding the persisted cart"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def api_endpoints_list(self) -> List[str]:
        """
        Parse the comma-separated endpoint list, keeping priority order.

        Trailing slashes are dropped so paths can be appended directly.
        """
        return [
            endpoint.strip().rstrip("/")
            for endpoint in self.api_endpoints.split(",")
            if endpoint.strip()
        ]

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    lru_cache turns this into a singleton: the first call loads .env and
    validates, later calls return the same instance.

    Returns:
        Cached Settings instance
    """
    return Settings()
