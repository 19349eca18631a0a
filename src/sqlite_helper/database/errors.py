"""Database-specific exception types and diagnostic records."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum


class DatabaseError(Exception):
    """Base exception for database-related errors."""


class IntegrityError(DatabaseError):
    """Raised when a constraint violation occurs."""


class UnsupportedValueError(DatabaseError, TypeError):
    """Raised when a value cannot be bound to a SQLite statement."""


# sqlite3.Warning (e.g. several statements in one execute() before 3.12)
# does not derive from sqlite3.Error. ValueError covers text that cannot be
# encoded as UTF-8 (lone surrogates) and paths with embedded NUL bytes.
SQLITE_ERRORS = (sqlite3.Error, sqlite3.Warning, ValueError)


def from_sqlite_error(error: Exception) -> DatabaseError:
    """Map a raw sqlite3 error to a project-level DatabaseError.

    Converts sqlite3 exceptions to project-specific exception types.
    IntegrityError is mapped to IntegrityError, all others to DatabaseError.

    Args:
        error: SQLite exception to convert.

    Returns:
        DatabaseError or IntegrityError instance with error message.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(str(error))
    return DatabaseError(str(error))


class DiagnosticKind(str, Enum):
    """Non-fatal conditions reported by `SQLiteHelper`."""

    UNBOUND_HANDLE = "unbound_handle"
    MISSING_FILE = "missing_file"
    FILE_EXISTS = "file_exists"
    CONNECTION_FAILED = "connection_failed"
    STATEMENT_FAILED = "statement_failed"
    UNSUPPORTED_VALUE = "unsupported_value"
    COLUMN_READ_FAILED = "column_read_failed"


@dataclass(frozen=True)
class Diagnostic:
    """A failure the helper absorbed instead of raising.

    Attributes:
        kind: Category of the failure.
        operation: Public helper method that recorded it.
        message: Human-readable description (usually the exception text).
        sql: Statement involved, if any.
        column: Column name for per-column read failures.
        row: 1-based row sequence number for per-column read failures.
    """

    kind: DiagnosticKind
    operation: str
    message: str
    sql: str | None = None
    column: str | None = None
    row: int | None = None

    def describe(self) -> str:
        """Return a one-line summary suitable for CLI output."""
        parts = [f"[{self.kind.value}] {self.operation}: {self.message}"]
        if self.column is not None:
            parts.append(f"column={self.column} row={self.row}")
        if self.sql:
            parts.append(f"sql={self.sql!r}")
        return " | ".join(parts)
