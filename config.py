"""
orderkeep configuration.

This module centralizes configuration for the storage adapter and the HTTP
surface. Values are loaded from environment variables (and a local `.env`
file when present) into an immutable `Settings` object that is passed
explicitly to the components that need it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    """Load environment variables from a local `.env` file if present."""

    # Variables already set in the process win over the file.
    load_dotenv(override=False)


def _env_bool(name: str, default: bool) -> bool:
    """Parse a boolean environment variable safely."""

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    """Parse an integer environment variable safely."""

    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    """Parse a float environment variable safely."""

    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _default_database_path() -> str:
    """Return the default SQLite database path (relative to project root)."""

    return "data/orderkeep.db"


def _project_root() -> Path:
    """Return the project root path (directory containing this file)."""

    return Path(__file__).resolve().parent


def _abs_path(maybe_relative: str) -> str:
    """Convert a relative path to an absolute path anchored at project root."""

    p = Path(maybe_relative)
    if p.is_absolute():
        return str(p)
    return str((_project_root() / p).resolve())


@dataclass(frozen=True)
class Settings:
    """Typed configuration object for orderkeep."""

    database_path: str
    max_document_length: int
    store_retry_attempts: int
    store_retry_backoff_seconds: float
    log_level: str
    debug: bool
    port: int


def get_settings() -> Settings:
    """Load environment variables and return a Settings instance."""

    _load_env()
    database_path = _abs_path(os.getenv("DATABASE_PATH") or _default_database_path())

    return Settings(
        database_path=database_path,
        max_document_length=_env_int("MAX_DOCUMENT_LENGTH", 5_000_000),
        store_retry_attempts=_env_int("STORE_RETRY_ATTEMPTS", 3),
        store_retry_backoff_seconds=_env_float("STORE_RETRY_BACKOFF_SECONDS", 0.05),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        debug=_env_bool("DEBUG", False),
        port=_env_int("PORT", 8000),
    )


def validate_settings(settings: Settings) -> None:
    """Reject settings the storage adapter cannot work with."""

    if settings.max_document_length <= 0:
        raise ValueError("MAX_DOCUMENT_LENGTH must be positive.")
    if settings.store_retry_attempts < 1:
        raise ValueError(f"STORE_RETRY_ATTEMPTS must be >= 1, got {settings.store_retry_attempts}.")
    if settings.store_retry_backoff_seconds < 0:
        raise ValueError("STORE_RETRY_BACKOFF_SECONDS must be non-negative.")
