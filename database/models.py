"""
Record shapes exchanged with the storage adapter.

The schema itself is created in `database/connection.py` on initialization.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""

    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class PreparedDocument:
    """The three forms of one document, ready to be written together."""

    normalized: str
    order_preserved: str
    raw: str


@dataclass(frozen=True)
class StoredDocument:
    """A persisted record as read back from the database."""

    id: int
    normalized: str
    order_preserved: str
    raw: str
    created_at: str


@dataclass(frozen=True)
class DocumentSummary:
    """Listing entry for a stored document."""

    id: int
    raw_length: int
    created_at: str
