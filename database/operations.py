"""
SQL statements for the `documents` table.

All reads and writes go through here so the adapter can stay focused on the
prepare / retry / error-mapping contract.
"""

from __future__ import annotations

import sqlite3

from config import Settings
from database.connection import get_connection
from database.models import DocumentSummary, PreparedDocument, StoredDocument, utc_now_iso


class StoredRowMismatch(sqlite3.DatabaseError):
    """The row read back inside the write transaction differs from what was inserted."""


def _check_stored_row(conn: sqlite3.Connection, doc_id: int, doc: PreparedDocument) -> None:
    """
    Read the new row back before commit.

    The JSON column must be accepted by the engine and both text columns must
    hold exactly the strings that were bound.
    """

    row = conn.execute(
        """
        SELECT json_valid(normalized_json) AS valid, order_preserved_text, raw_original_text
        FROM documents
        WHERE id = ?;
        """,
        (doc_id,),
    ).fetchone()
    if row is None:
        raise StoredRowMismatch(f"Row {doc_id} missing after insert")
    if not row["valid"]:
        raise StoredRowMismatch(f"Row {doc_id}: normalized_json rejected by engine")
    if row["order_preserved_text"] != doc.order_preserved or row["raw_original_text"] != doc.raw:
        raise StoredRowMismatch(f"Row {doc_id}: text columns were transformed on write")


def insert_document(settings: Settings, doc: PreparedDocument) -> int:
    """
    Insert all three forms of a document in one transaction.

    Returns the new row ID. On any error the transaction is rolled back and
    the exception propagates, so no partial row is ever visible.
    """

    with get_connection(settings) as conn:
        conn.execute("BEGIN IMMEDIATE;")
        try:
            cur = conn.execute(
                """
                INSERT INTO documents (
                    normalized_json, order_preserved_text, raw_original_text, created_at
                ) VALUES (?, ?, ?, ?);
                """,
                (doc.normalized, doc.order_preserved, doc.raw, utc_now_iso()),
            )
            doc_id = int(cur.lastrowid)
            _check_stored_row(conn, doc_id, doc)
            conn.execute("COMMIT;")
            return doc_id
        except Exception:
            # SQLite may already have rolled back on IOERR/FULL.
            if conn.in_transaction:
                conn.execute("ROLLBACK;")
            raise


def get_document(settings: Settings, doc_id: int) -> StoredDocument | None:
    """Return the stored record, or None if the id does not exist."""

    with get_connection(settings) as conn:
        row = conn.execute(
            """
            SELECT id, normalized_json, order_preserved_text, raw_original_text, created_at
            FROM documents
            WHERE id = ?;
            """,
            (int(doc_id),),
        ).fetchone()
    if row is None:
        return None
    return StoredDocument(
        id=int(row["id"]),
        normalized=row["normalized_json"],
        order_preserved=row["order_preserved_text"],
        raw=row["raw_original_text"],
        created_at=row["created_at"],
    )


def get_recent_documents(settings: Settings, *, limit: int = 25) -> list[DocumentSummary]:
    """Return the most recently stored documents, newest first."""

    limit = max(1, min(int(limit), 200))
    with get_connection(settings) as conn:
        rows = conn.execute(
            """
            SELECT id, length(raw_original_text) AS raw_length, created_at
            FROM documents
            ORDER BY id DESC
            LIMIT ?;
            """,
            (limit,),
        ).fetchall()
    return [
        DocumentSummary(id=int(r["id"]), raw_length=int(r["raw_length"]), created_at=r["created_at"])
        for r in rows
    ]


def count_documents(settings: Settings) -> int:
    """Return the number of stored documents."""

    with get_connection(settings) as conn:
        row = conn.execute("SELECT COUNT(*) AS n FROM documents;").fetchone()
    return int(row["n"])
