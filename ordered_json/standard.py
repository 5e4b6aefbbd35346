"""
Conversion between the order-preserving tree and the standard JSON value tree.

The standard tree uses plain dicts and mirrors what a JSON-typed database column
hands back: member order is decided by the engine, not by the source. Objects
are rebuilt in the canonical key order PostgreSQL `jsonb` uses (shorter keys
first, then UTF-8 byte order), so the normalizing path never carries the
original order through.
"""

from __future__ import annotations

import json
from typing import Any

from ordered_json.model import OrderedObject, OrderedValue


JSONValue = Any


def engine_key_order(key: str) -> tuple[int, bytes]:
    """Sort key for object members in the storage engine's canonical order."""

    raw = key.encode("utf-8")
    return (len(raw), raw)


def to_standard_value(value: OrderedValue) -> JSONValue:
    """Convert an order-preserving tree into a standard (order-erasing) tree."""

    if isinstance(value, dict):
        return {k: to_standard_value(value[k]) for k in sorted(value, key=engine_key_order)}
    if isinstance(value, list):
        return [to_standard_value(v) for v in value]
    return value


def from_standard_value(value: JSONValue) -> OrderedValue:
    """
    Convert a standard tree into an order-preserving one.

    The source carries no meaningful order, so members are taken in the
    mapping's iteration order; the result is deterministic for a given input.
    """

    if isinstance(value, dict):
        obj = OrderedObject()
        for k, v in value.items():
            obj.set(k, from_standard_value(v))
        return obj
    if isinstance(value, (list, tuple)):
        return [from_standard_value(v) for v in value]
    return value


def dumps_standard(value: JSONValue) -> str:
    """Serialize a standard tree the way a `jsonb` column prints it."""

    return json.dumps(value, ensure_ascii=False, separators=(", ", ": "), allow_nan=False)
