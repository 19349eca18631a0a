"""String helpers for assembling SQL fragments."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .values import to_literal


def pairs_to_string(pairs: Sequence[tuple[str, Any]]) -> tuple[str, str]:
    """Join (column, value) pairs into a column list and a value list.

    Both lists are comma-separated and keep input order. A value of None
    contributes an empty segment rather than being omitted, so interior
    None values leave a dangling comma (``"1,,3"``).

    Args:
        pairs: Ordered (column name, value) pairs. May be empty.

    Returns:
        Tuple of (comma-joined names, comma-joined stringified values).
        Empty input returns ``("", "")``.
    """
    names = ",".join(name for name, _ in pairs)
    values = ",".join(to_literal(value) for _, value in pairs)
    return names, values
