"""Supported value types and their SQL binding / literal forms.

Values handed to the helper are restricted to the types SQLite stores
natively: text, integer, real, boolean (stored as integer), null and
byte sequences.
"""

from __future__ import annotations

import re
from typing import Union

from .errors import UnsupportedValueError

SqlValue = Union[str, int, float, bool, bytes, None]

# SQLite INTEGER is a signed 64-bit value
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_REAL_PATTERN = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


def to_param(value: object) -> SqlValue:
    """Convert a value to the form bound to a `?` placeholder.

    Args:
        value: Value to bind.

    Returns:
        The value as sqlite3 expects it (bools become 0/1, bytearray and
        memoryview become bytes).

    Raises:
        UnsupportedValueError: If the type is not supported or an integer
            does not fit in 64 bits.
    """
    if value is None or isinstance(value, (str, float, bytes)):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        if not _INT64_MIN <= value <= _INT64_MAX:
            msg = f"Integer out of SQLite range: {value}"
            raise UnsupportedValueError(msg)
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    msg = f"Unsupported value type: {type(value).__name__}"
    raise UnsupportedValueError(msg)


def to_literal(value: object) -> str:
    """Return the text interpolated into SQL when parameter binding is off.

    The string form is used as-is: text is *not* quoted, so callers must
    pass ready-made literals such as ``"'abc'"``. None renders as an
    empty string, which leaves an empty slot in the SQL text; pass the
    literal ``"NULL"`` to write a null in this mode.
    """
    if value is None:
        return ""
    return str(value)


def parse_cli_value(text: str) -> SqlValue:
    """Interpret a command-line token as a typed value.

    ``NULL`` (any case) becomes None, integer and real notation become
    numbers, a token wrapped in single quotes is unwrapped, anything else
    is kept as text.
    """
    stripped = text.strip()
    if stripped.upper() == "NULL":
        return None
    if _INT_PATTERN.match(stripped):
        return int(stripped)
    if _REAL_PATTERN.match(stripped):
        return float(stripped)
    if len(stripped) >= 2 and stripped[0] == stripped[-1] == "'":
        return stripped[1:-1].replace("''", "'")
    return text
