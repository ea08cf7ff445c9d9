"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a WIREBIND_-prefixed environment variable
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults for everything: the engine works with no environment at all
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine and host settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WIREBIND_", env_file=".env", case_sensitive=False,
    )

    # Engine
    default_representation: str = "default"
    detect_cycles: bool = True

    # API
    cors_origins: list[str] = []

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        if v not in ("json", "plain"):
            raise ValueError("log_format must be 'json' or 'plain'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
