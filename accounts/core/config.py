"""
Configuration helpers for the accounts backend.

Settings is a frozen view of the environment so that routers/services do not
fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    db_timeout_seconds: int
    jwt_secret: str
    jwt_algorithm: str
    token_ttl_seconds: int
    token_blacklist_backend: str
    sample_data_enabled: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", ""),
        db_timeout_seconds=max(1, _int(os.getenv("DB_TIMEOUT_SECONDS", "10"), 10)),
        jwt_secret=os.getenv("JWT_SECRET", ""),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl_seconds=_int(os.getenv("TOKEN_TTL_SECONDS", "3600"), 3600),
        token_blacklist_backend=(os.getenv("TOKEN_BLACKLIST_BACKEND") or "memory").strip().lower(),
        sample_data_enabled=_bool(os.getenv("SAMPLE_DATA_ENABLED"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
