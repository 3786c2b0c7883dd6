"""Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the package works with no environment at all
    - get_settings() is cached (lru_cache): one instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - OBJECT_RECORD_ prefix: the package is embedded in larger hosts, avoid env clashes
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OBJECT_RECORD_", env_file=".env",
        case_sensitive=False, extra="ignore",
    )

    # Records
    typename_key: str = "__typename"

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_cache_misses: bool = True

    @field_validator("typename_key")
    @classmethod
    def typename_key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("typename_key cannot be empty or whitespace")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
