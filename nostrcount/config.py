"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), single instance per process
    - fetch_limit bounds every relay query (relays cap responses at 100 records)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: the app runs out-of-the-box against the in-process relay
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Relay queries
    fetch_limit: int = Field(100, ge=1, le=500)
    fetch_timeout_seconds: float = Field(10.0, gt=0)

    # Optional JSON file of raw records loaded into the in-process relay at startup
    seed_records_path: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
