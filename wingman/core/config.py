"""
Configuration helpers for the Wingman backend.

Routers, services and store factories read settings from here instead of
fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = {"sql", "json", "memory"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    database_url: str
    data_file: str
    key_prefix: str
    seed_on_empty: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "json"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL", "sqlite:///wingman.db"),
        data_file=os.getenv("DATA_FILE", "data.json"),
        key_prefix=os.getenv("STORAGE_KEY_PREFIX", "@wingman_"),
        seed_on_empty=_bool(os.getenv("SEED_ON_EMPTY"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
