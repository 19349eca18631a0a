"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: the `SQLiteHelper`, its configuration and diagnostics, and the
lower-level connection and formatting helpers it is built on.
"""

from .config import HelperConfig
from .connection import get_connection, open_connection, transaction
from .errors import (
    DatabaseError,
    Diagnostic,
    DiagnosticKind,
    IntegrityError,
    UnsupportedValueError,
)
from .formatting import pairs_to_string
from .helper import RowMap, SQLiteHelper
from .values import SqlValue, parse_cli_value, to_literal, to_param

__all__ = [
    "SQLiteHelper",
    "HelperConfig",
    "RowMap",
    "get_connection",
    "open_connection",
    "transaction",
    "DatabaseError",
    "IntegrityError",
    "UnsupportedValueError",
    "Diagnostic",
    "DiagnosticKind",
    "pairs_to_string",
    "SqlValue",
    "to_param",
    "to_literal",
    "parse_cli_value",
]
