"""
Order-preserving JSON value model.

Objects parse into `OrderedObject`, an `OrderedDict` whose iteration order is
the order in which keys first appeared in the source text. Arrays, strings,
numbers, booleans and null map to the usual Python types.

Comparing two `OrderedObject`s is order-sensitive (an `OrderedDict` property),
so `parse_ordered(a) == parse_ordered(b)` means "same members, same order".
"""

from __future__ import annotations

import json
import math
from collections import OrderedDict
from typing import Any, Iterable, Union


OrderedValue = Union[None, bool, int, float, str, list, "OrderedObject"]


class ParseError(ValueError):
    """Malformed JSON text. Carries the offending location when known."""

    def __init__(self, msg: str, *, pos: int | None = None, lineno: int | None = None, colno: int | None = None) -> None:
        self.msg = msg
        self.pos = pos
        self.lineno = lineno
        self.colno = colno
        if lineno is not None and colno is not None:
            super().__init__(f"{msg}: line {lineno} column {colno} (char {pos})")
        else:
            super().__init__(msg)

    @classmethod
    def from_decode_error(cls, exc: json.JSONDecodeError) -> "ParseError":
        return cls(exc.msg, pos=exc.pos, lineno=exc.lineno, colno=exc.colno)


class OrderedObject(OrderedDict):
    """
    JSON object with observable insertion order.

    Updating an existing key keeps its original position; only new keys are
    appended. `set` returns the object so a document can be declared in order:

        OrderedObject().set("title", "Inception").set("genre", "Sci-Fi")
    """

    def set(self, key: str, value: Any) -> "OrderedObject":
        if not isinstance(key, str):
            raise TypeError(f"JSON object keys must be str, got {type(key).__name__}")
        self[key] = value
        return self

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> "OrderedObject":
        """Build from (key, value) pairs; a repeated key keeps its first slot and last value."""

        obj = cls()
        for key, value in pairs:
            obj[key] = value
        return obj

    def __repr__(self) -> str:
        return f"OrderedObject({list(self.items())!r})"


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity by default; RFC 8259 does not.
    raise ParseError(f"Non-standard JSON constant {name!r}")


def _parse_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ParseError(f"Number out of range: {literal}")
    return value


def _check_encodable(value: OrderedValue) -> None:
    """Reject strings holding unpaired surrogates (e.g. a lone "\\ud800" escape)."""

    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParseError(f"Unpaired surrogate in string at index {e.start}") from e
    elif isinstance(value, dict):
        for key, child in value.items():
            _check_encodable(key)
            _check_encodable(child)
    elif isinstance(value, list):
        for child in value:
            _check_encodable(child)


def parse_ordered(text: str) -> OrderedValue:
    """
    Parse JSON text into an order-preserving tree.

    Raises `ParseError` for malformed text, numbers that overflow a double, and
    strings that are not valid Unicode; no partial tree is ever returned.
    """

    if not isinstance(text, str):
        raise TypeError(f"parse_ordered expects str, got {type(text).__name__}")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError("Unpaired surrogate in input", pos=e.start) from e
    try:
        tree = json.loads(
            text,
            object_pairs_hook=OrderedObject.from_pairs,
            parse_constant=_reject_constant,
            parse_float=_parse_float,
        )
    except json.JSONDecodeError as e:
        raise ParseError.from_decode_error(e) from e
    except ParseError:
        raise
    except ValueError as e:
        # e.g. integers past sys.get_int_max_str_digits()
        raise ParseError(str(e)) from e
    except RecursionError as e:
        raise ParseError("Nesting too deep") from e
    _check_encodable(tree)
    return tree


def serialize(value: OrderedValue, *, indent: int | None = None) -> str:
    """
    Serialize a tree to JSON text, emitting object members in iteration order.

    Compact by default; pass `indent` for display output. Non-finite floats
    raise `ValueError`.
    """

    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    return json.dumps(value, ensure_ascii=False, indent=indent, allow_nan=False)


def key_paths(value: OrderedValue, prefix: str = "") -> list[str]:
    """
    List JSON-pointer paths of every object member, depth-first, in iteration order.

    Array indices appear as path segments but do not produce entries of their own.
    """

    paths: list[str] = []
    if isinstance(value, dict):
        for key, child in value.items():
            path = f"{prefix}/{_escape_pointer(key)}"
            paths.append(path)
            paths.extend(key_paths(child, path))
    elif isinstance(value, list):
        for i, child in enumerate(value):
            paths.extend(key_paths(child, f"{prefix}/{i}"))
    return paths


def _escape_pointer(key: str) -> str:
    return key.replace("~", "~0").replace("/", "~1")
