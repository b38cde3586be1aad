"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - expand_max_depth >= 1 and foreign_key_suffix non-empty (validated)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for every setting: `uvicorn jsonexpand.main:app` works next to a db.json
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from jsonexpand.core.domain_types import (
    DEFAULT_EXPAND_PARAM,
    DEFAULT_FOREIGN_KEY_SUFFIX,
    DEFAULT_MAX_DEPTH,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    db_path: str = "db.json"
    db_persist: bool = True
    read_only: bool = False

    # Expansion
    expand_param: str = DEFAULT_EXPAND_PARAM
    foreign_key_suffix: str = DEFAULT_FOREIGN_KEY_SUFFIX
    expand_max_depth: int = DEFAULT_MAX_DEPTH

    @field_validator("foreign_key_suffix", "expand_param")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("expand_max_depth")
    @classmethod
    def positive_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("expand_max_depth must be >= 1")
        return v

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
