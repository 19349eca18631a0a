"""Basic query execution helpers.

These wrap low-level sqlite3 operations with logging and the return
shapes used by `SQLiteHelper`.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence

from .values import SqlValue

logger = logging.getLogger(__name__)


def execute_query(
    conn: sqlite3.Connection,
    sql: str,
    params: Sequence[SqlValue] | None = None,
) -> sqlite3.Cursor:
    """Execute a SQL statement and return the cursor.

    Args:
        conn: Database connection.
        sql: Single SQL statement.
        params: Values bound to `?` placeholders. Defaults to none.

    Returns:
        SQLite cursor with query results.

    Raises:
        sqlite3.Error: If execution fails.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
    """
    cursor = conn.execute(sql, tuple(params or ()))
    logger.debug("Executed query: %s", sql[:80])
    return cursor


def execute_update(
    conn: sqlite3.Connection,
    sql: str,
    params: Sequence[SqlValue] | None = None,
) -> int:
    """Execute a write statement and return the number of affected rows.

    Statements that report no row count (DDL, SELECT) count as 0.

    Raises:
        sqlite3.Error: If execution fails.
    """
    cursor = execute_query(conn, sql, params)
    rowcount = max(cursor.rowcount, 0)
    logger.debug("%s rows affected from %r", rowcount, sql)
    return rowcount


def iter_rows(conn: sqlite3.Connection, sql: str) -> Iterator[tuple[int, sqlite3.Row]]:
    """Yield (row_seq, row) for every row of a query, row_seq starting at 1."""
    cursor = execute_query(conn, sql)
    yield from enumerate(cursor, start=1)
