"""
Quotable Values - The closed set of value kinds a dialect knows how to quote.

Dialects dispatch on the ValueKind returned by classify_value() instead of
probing values for attributes.
"""

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Any


class RawLiteral(str):
    """A string holding literal SQL, emitted without quoting."""

    def __repr__(self) -> str:
        return f"RawLiteral({str.__repr__(self)})"


@dataclass(frozen=True)
class PreQuoted:
    """A value carrying its own, already quoted, SQL identity."""
    quoted_id: str


class ValueKind(Enum):
    """Tags for quotable values."""
    RAW_LITERAL = "raw_literal"
    PRE_QUOTED = "pre_quoted"
    TEXT = "text"
    BINARY = "binary"
    INTEGER = "integer"
    TIME = "time"
    TIMESTAMP = "timestamp"
    OTHER = "other"


def classify_value(value: Any) -> ValueKind:
    """Return the ValueKind of a value."""
    # Order matters: RawLiteral is a str, bool is an int, datetime is a date
    if isinstance(value, PreQuoted):
        return ValueKind.PRE_QUOTED
    if isinstance(value, RawLiteral):
        return ValueKind.RAW_LITERAL
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BINARY
    if isinstance(value, bool):
        return ValueKind.OTHER
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, time):
        return ValueKind.TIME
    return ValueKind.OTHER
