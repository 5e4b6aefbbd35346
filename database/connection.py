"""
SQLite connection manager for orderkeep.

This module provides a small, safe wrapper around sqlite3 for:
- creating connections with sane defaults
- initializing the `documents` schema on first run
- resetting the table for demo runs
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from config import Settings


logger = logging.getLogger(__name__)

_init_lock = threading.Lock()
_initialized_paths: set[str] = set()


def _connect(db_path: str) -> sqlite3.Connection:
    """Create a SQLite connection with recommended settings."""

    conn = sqlite3.connect(
        db_path,
        check_same_thread=False,
        isolation_level=None,  # autocommit; we use explicit BEGIN for transactions
        timeout=30,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn


@contextmanager
def get_connection(settings: Settings) -> Iterator[sqlite3.Connection]:
    """
    Yield an initialized SQLite connection.

    The schema is created the first time the database is accessed.
    """

    initialize_database(settings)
    conn = _connect(settings.database_path)
    try:
        yield conn
    finally:
        conn.close()


def initialize_database(settings: Settings) -> None:
    """Initialize the database schema if it hasn't been created yet."""

    db_path = settings.database_path
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    with _init_lock:
        if db_path in _initialized_paths:
            return

        conn = _connect(db_path)
        try:
            conn.execute("BEGIN;")
            # normalized_json is the JSON-typed column; the engine validates it.
            # The two text columns hold their strings untransformed.
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    normalized_json TEXT NOT NULL CHECK (json_valid(normalized_json)),
                    order_preserved_text TEXT NOT NULL,
                    raw_original_text TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_documents_created_at
                ON documents(created_at);
                """
            )
            conn.execute("COMMIT;")
        except Exception:
            # SQLite may already have rolled back on IOERR/FULL.
            if conn.in_transaction:
                conn.execute("ROLLBACK;")
            raise
        finally:
            conn.close()

        _initialized_paths.add(db_path)
        logger.debug("Initialized schema at %s", db_path)


def reset_database(settings: Settings) -> None:
    """Delete every stored document and restart id numbering at 1."""

    with get_connection(settings) as conn:
        conn.execute("BEGIN;")
        try:
            conn.execute("DELETE FROM documents;")
            # AUTOINCREMENT keeps its high-water mark here.
            conn.execute("DELETE FROM sqlite_sequence WHERE name = 'documents';")
            conn.execute("COMMIT;")
        except Exception:
            # SQLite may already have rolled back on IOERR/FULL.
            if conn.in_transaction:
                conn.execute("ROLLBACK;")
            raise
    logger.info("Reset documents table at %s", settings.database_path)
