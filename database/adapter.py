"""
Dual-write / dual-read storage adapter.

`DocumentStore.store` turns raw JSON text into three strings and persists them
as one record:

- normalized: passed through the standard (order-erasing) JSON tree
- order_preserved: re-serialized from the order-preserving tree
- raw: the untouched input

The text is parsed exactly once and both serialized forms are derived from
that single tree, so the two paths can never disagree on grammar details
(duplicate keys, number precision, escapes). The pure transform is kept
separate from I/O so a retried write never redoes parse/serialize work.
"""

from __future__ import annotations

import logging
import sqlite3
import time

from config import Settings, validate_settings
from database import operations
from database.errors import DocumentTooLarge, NotFound, ParseFailure, PersistenceFailure
from database.models import DocumentSummary, PreparedDocument, StoredDocument
from ordered_json.model import ParseError, parse_ordered, serialize
from ordered_json.standard import dumps_standard, to_standard_value


logger = logging.getLogger(__name__)

_TRANSIENT_MARKERS = ("locked", "busy")


def _is_transient(exc: sqlite3.Error) -> bool:
    """Lock contention is worth retrying; everything else is not."""

    if not isinstance(exc, sqlite3.OperationalError):
        return False
    message = str(exc).lower()
    return any(m in message for m in _TRANSIENT_MARKERS)


class DocumentStore:
    """Store and fetch documents in their normalized, order-preserved and raw forms."""

    def __init__(self, settings: Settings) -> None:
        validate_settings(settings)
        self.settings = settings

    def prepare(self, raw: str) -> PreparedDocument:
        """Build all three forms of `raw` without touching the database."""

        limit = self.settings.max_document_length
        if len(raw) > limit:
            raise DocumentTooLarge(len(raw), limit)
        try:
            tree = parse_ordered(raw)
        except ParseError as e:
            raise ParseFailure(e) from e

        try:
            normalized = dumps_standard(to_standard_value(tree))
            order_preserved = serialize(tree)
        except ValueError as e:
            raise ParseFailure(ParseError(str(e))) from e
        return PreparedDocument(normalized=normalized, order_preserved=order_preserved, raw=raw)

    def store(self, raw: str) -> int:
        """
        Persist `raw` in all three forms and return the new record id.

        Raises `ParseFailure` for malformed input, `DocumentTooLarge` past the
        configured limit, and `PersistenceFailure` if the write fails after
        all retry attempts. A failed store leaves no row behind.
        """

        doc = self.prepare(raw)
        doc_id = self._write(doc)
        logger.info(
            "Stored document %d (raw=%d chars, order_preserved=%d chars)",
            doc_id,
            len(doc.raw),
            len(doc.order_preserved),
        )
        return doc_id

    def _write(self, doc: PreparedDocument) -> int:
        attempts = self.settings.store_retry_attempts
        backoff = self.settings.store_retry_backoff_seconds
        for attempt in range(1, attempts + 1):
            try:
                return operations.insert_document(self.settings, doc)
            except sqlite3.Error as e:
                if attempt < attempts and _is_transient(e):
                    logger.warning("Transient write failure (attempt %d/%d): %s", attempt, attempts, e)
                    time.sleep(backoff * attempt)
                    continue
                logger.exception("Document write failed after %d attempt(s)", attempt)
                raise PersistenceFailure(f"Failed to persist document: {e}") from e
        # unreachable: attempts >= 1
        raise PersistenceFailure("Failed to persist document")

    def fetch(self, record_id: int) -> StoredDocument:
        """Return the stored forms of a record; raises `NotFound` if absent."""

        try:
            doc = operations.get_document(self.settings, record_id)
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Failed to read document {record_id}: {e}") from e
        if doc is None:
            raise NotFound(record_id)
        return doc

    def recent(self, limit: int = 25) -> list[DocumentSummary]:
        """Return summaries of the most recently stored documents."""

        try:
            return operations.get_recent_documents(self.settings, limit=limit)
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Failed to list documents: {e}") from e
