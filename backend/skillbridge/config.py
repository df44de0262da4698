"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets and API keys come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Optional third-party keys default to None: price/currency lookups degrade to
      fixed fallback rates instead of failing startup
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://skillbridge:skillbridge@db:5432/skillbridge"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_connect_max_attempts: int = 3
    database_connect_retry_delay_ms: int = 1000

    # Price / currency providers
    coingecko_api_key: str | None = None
    currency_converter_api_key: str | None = None
    price_request_timeout_seconds: float = 5.0

    # Identity proof (simulated)
    zkp_private_key: str = "zkp-demo-key-12345"
    zkp_verification_delay_ms: int = 1500

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
