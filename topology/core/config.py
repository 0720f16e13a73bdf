"""Service configuration (settings and environment).

Single source of truth for configuration. Uses pydantic-settings with .env
support. Nothing is required at load time: a missing DATABASE_URL only
fails when a request first needs the SQL stores.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment and .env."""

    # App
    app_name: str = "topology"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg); engine is created lazily
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Caller identity headers
    tenant_header_name: str = "X-Tenant-ID"
    customer_header_name: str = "X-Customer-ID"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Paging for list endpoints
    default_page_size: int = 100
    max_page_size: int = 1000

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_paging_and_sampling(self) -> "Settings":
        """Reject page sizes that cannot be served and out-of-range sample rates."""
        if self.default_page_size < 1:
            raise ValueError("DEFAULT_PAGE_SIZE must be at least 1")
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"DEFAULT_PAGE_SIZE ({self.default_page_size}) must not exceed "
                f"MAX_PAGE_SIZE ({self.max_page_size})"
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() after changing env vars.
    """
    return Settings()
