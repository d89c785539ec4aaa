"""Application configuration utilities."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from typing import List

from dotenv import load_dotenv

from .logging_config import get_logger

# Ensure environment variables are available as soon as the package is imported.
load_dotenv()

DEFAULT_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 365
DEFAULT_CONNECT_TIMEOUT_SECONDS = 5

log = get_logger(__name__)


@dataclass(frozen=True)
class DatabaseConfig:
    """Immutable container for database connection parameters."""

    dbname: str
    user: str
    password: str
    host: str
    port: str
    options: str | None
    connect_timeout: int


@dataclass(frozen=True)
class ApiConfig:
    """Immutable container for API specific configuration."""

    allowed_origins: List[str]
    default_window_days: int
    max_window_days: int


def _int_from_env(name: str, default: int) -> int:
    raw = getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default
    if value < 1:
        log.warning("Ignoring non-positive %s=%d, using %d", name, value, default)
        return default
    return value


@lru_cache(maxsize=1)
def get_database_config() -> DatabaseConfig:
    """Return database configuration from the current environment."""

    return DatabaseConfig(
        dbname=getenv("DB_NAME", "attention"),
        user=getenv("DB_USER", "postgres"),
        password=getenv("DB_PASSWORD", ""),
        host=getenv("DB_HOST", "localhost"),
        port=getenv("DB_PORT", "5432"),
        options=getenv("DB_OPTIONS", "-c search_path=attention"),
        connect_timeout=_int_from_env("DB_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT_SECONDS),
    )


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Return API specific configuration derived from environment variables."""

    origins = getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:8080",
    )
    allowed = [origin.strip() for origin in origins.split(",") if origin.strip()]

    max_days = _int_from_env("MAX_WINDOW_DAYS", MAX_WINDOW_DAYS)
    default_days = min(_int_from_env("DEFAULT_WINDOW_DAYS", DEFAULT_WINDOW_DAYS), max_days)
    return ApiConfig(
        allowed_origins=allowed,
        default_window_days=default_days,
        max_window_days=max_days,
    )
