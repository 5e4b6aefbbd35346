"""Storage adapter error taxonomy."""

from __future__ import annotations

from ordered_json.model import ParseError


class StorageError(Exception):
    """Base class for storage adapter failures."""


class ParseFailure(StorageError):
    """The raw text was not valid JSON; nothing was written."""

    def __init__(self, parse_error: ParseError) -> None:
        super().__init__(str(parse_error))
        self.parse_error = parse_error


class PersistenceFailure(StorageError):
    """The database write or read failed; a caller-directed retry may succeed."""


class NotFound(StorageError):
    """No record exists for the requested id."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Document {record_id} not found")
        self.record_id = record_id


class DocumentTooLarge(StorageError):
    """The raw text exceeds the configured maximum length."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Document too large ({length} chars, max {limit})")
        self.length = length
        self.limit = limit
