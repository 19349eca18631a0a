"""Transaction-wrapped convenience helper around a single SQLite file.

`SQLiteHelper` binds to one database path and exposes small CRUD
operations. Every operation opens its own connection, runs its
statement(s) inside a transaction and closes the connection before
returning. Failures never propagate to the caller: the operation returns
a zero/empty result, logs the failure and appends a `Diagnostic` to
`SQLiteHelper.diagnostics`.

Table names, column names and condition strings are inserted into the
SQL text as given. Only *values* are bound as parameters, so those
fragments must come from trusted code.

Example usage:
    helper = SQLiteHelper("app.sqlite")
    helper.execute_sql("CREATE TABLE people (name TEXT, age INTEGER)")
    helper.insert_values("people", ("name", "Ada"), ("age", 36))
    rows = helper.retrieve_values("people", "age > 30", "name", "age")
    # {"name_1": "Ada", "age_1": 36}
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections import deque
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from .config import HelperConfig
from .connection import open_connection, transaction
from .errors import SQLITE_ERRORS, Diagnostic, DiagnosticKind, UnsupportedValueError, from_sqlite_error
from .formatting import pairs_to_string
from .queries import execute_update, iter_rows
from .values import SqlValue, to_literal, to_param

logger = logging.getLogger(__name__)

RowMap = dict[str, Any]


class SQLiteHelper:
    """Convenience wrapper running CRUD statements against one SQLite file.

    The helper is either unbound (no path) or bound to a path. While
    unbound every operation is a no-op returning 0, an empty dict or False.
    Instances are not safe to share between threads.
    """

    def __init__(self, path: str | Path | None = None, *, config: HelperConfig | None = None) -> None:
        """Create a helper, optionally bound to `path`.

        The path is bound even if no file exists there yet; SQLite creates
        the file the first time an operation opens it.
        """
        self.config = config or HelperConfig()
        self._db_path: Path | None = None
        self._diagnostics: deque[Diagnostic] = deque(maxlen=max(self.config.max_diagnostics, 0))

        if path is not None:
            resolved = Path(path)
            if not resolved.exists():
                logger.warning("Database not found at %s; it will be created on first use", resolved)
            self._db_path = resolved

    def __repr__(self) -> str:
        return f"SQLiteHelper(path={self._db_path!r})"

    # --- Handle ---------------------------------------------------------------------

    @property
    def database_path(self) -> Path | None:
        """Path the helper is bound to, or None when unbound."""
        return self._db_path

    @property
    def is_bound(self) -> bool:
        return self._db_path is not None

    def set_database(self, path: str | Path) -> None:
        """Bind the helper to an existing database file.

        If no file exists at `path` the current binding is kept and a
        MISSING_FILE diagnostic is recorded.
        """
        resolved = Path(path)
        if not resolved.is_file():
            self._record(
                DiagnosticKind.MISSING_FILE,
                "set_database",
                f"Database not found in ({resolved})",
            )
            return
        self._db_path = resolved
        logger.debug("Database set to %s", resolved)

    def create_database(self, path: str | Path) -> None:
        """Create an empty database file at `path` if none exists.

        An existing file is left untouched and a FILE_EXISTS diagnostic is
        recorded. The helper's binding does not change.
        """
        resolved = Path(path)
        if resolved.exists():
            self._record(
                DiagnosticKind.FILE_EXISTS,
                "create_database",
                f"Database file in ({resolved}) already exists",
            )
            return
        try:
            resolved.parent.mkdir(parents=True, exist_ok=True)
            resolved.touch(exist_ok=False)
        except (OSError, ValueError) as exc:
            self._record(
                DiagnosticKind.CONNECTION_FAILED,
                "create_database",
                f"Could not create database file in ({resolved}): {exc}",
                level=logging.ERROR,
            )
            return
        logger.info("Created database file at %s", resolved)

    # --- Diagnostics ----------------------------------------------------------------

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Most recent absorbed failures, oldest first."""
        return list(self._diagnostics)

    @property
    def last_diagnostic(self) -> Diagnostic | None:
        return self._diagnostics[-1] if self._diagnostics else None

    def clear_diagnostics(self) -> None:
        self._diagnostics.clear()

    # --- Statements -----------------------------------------------------------------

    def execute_sql(self, sql: str) -> int:
        """Execute a single SQL statement inside its own transaction.

        Args:
            sql: One SQL statement, used verbatim.

        Returns:
            Number of rows affected; 0 on failure, for statements that report
            no count, or when unbound.
        """
        operation = "execute_sql"
        with self._connection(operation) as conn:
            if conn is None:
                return 0
            return self._run_statement(conn, operation, sql)

    def execute_sqls(self, *sqls: str, atomic: bool = False) -> int:
        """Execute several SQL statements over one connection.

        By default each statement runs in its own transaction: a failing
        statement is rolled back and the remaining statements still run.
        With ``atomic=True`` the batch shares a single transaction and the
        first failure rolls back the whole batch.

        Args:
            *sqls: SQL statements, executed in order.
            atomic: Run the batch all-or-nothing.

        Returns:
            Total rows affected by the statements that were committed.
        """
        operation = "execute_sqls"
        with self._connection(operation) as conn:
            if conn is None:
                return 0
            if atomic:
                return self._run_batch(conn, operation, sqls)

            total = 0
            for sql in sqls:
                total += self._run_statement(conn, operation, sql)
            logger.debug("%d SQL commands executed, %d rows affected", len(sqls), total)
            return total

    # --- Retrieval ------------------------------------------------------------------

    def retrieve_table_content(self, table: str, *columns: str) -> RowMap:
        """Read `columns` from every row of `table`.

        Returns:
            Row map keyed by ``"<column>_<row>"`` with 1-based row numbers,
            e.g. ``{"a_1": ..., "b_1": ..., "a_2": ...}``. Values that could
            not be read are left out.
        """
        return self._retrieve("retrieve_table_content", f"SELECT * FROM {table}", columns)

    def retrieve_values(self, table: str, condition: str, *columns: str) -> RowMap:
        """Read `columns` from the rows of `table` matching `condition`.

        `condition` is a raw SQL expression placed after WHERE.
        """
        return self._retrieve(
            "retrieve_values",
            f"SELECT * FROM {table} WHERE {condition}",
            columns,
        )

    # --- Writes ---------------------------------------------------------------------

    def insert_value(self, table: str, column: str, value: SqlValue) -> int:
        """Insert one row setting a single column.

        With parameter binding off the value is written by `to_literal`, so
        None leaves an empty VALUES () and the statement fails.

        Returns:
            Number of rows affected.
        """
        operation = "insert_value"
        with self._connection(operation) as conn:
            if conn is None:
                return 0
            if self.config.bind_parameters:
                params = self._bind(operation, [value])
                if params is None:
                    return 0
                sql = f"INSERT INTO {table} ({column}) VALUES (?)"
            else:
                params = []
                sql = f"INSERT INTO {table} ({column}) VALUES ({to_literal(value)})"

            rows = self._run_statement(conn, operation, sql, params)
            if rows:
                logger.debug("Inserted: %r. Table: %s. Column: %s", value, table, column)
            return rows

    def insert_values(self, table: str, *pairs: tuple[str, SqlValue]) -> int:
        """Insert one row from (column, value) pairs.

        Returns:
            Number of rows affected.
        """
        operation = "insert_values"
        with self._connection(operation) as conn:
            if conn is None:
                return 0
            names, values = pairs_to_string(pairs)
            if self.config.bind_parameters:
                params = self._bind(operation, [value for _, value in pairs])
                if params is None:
                    return 0
                placeholders = ",".join("?" for _ in pairs)
                sql = f"INSERT INTO {table} ({names}) VALUES ({placeholders})"
            else:
                params = []
                sql = f"INSERT INTO {table} ({names}) VALUES ({values})"

            rows = self._run_statement(conn, operation, sql, params)
            if rows:
                logger.debug("Inserted: %s. Table: %s. Column: %s", values, table, names)
            return rows

    def update_value(self, table: str, column: str, condition: str, value: SqlValue) -> int:
        """Set `column` to `value` on the rows of `table` matching `condition`.

        With parameter binding off the value is written by `to_literal`; pass
        the literal "NULL" rather than None to clear a column in that mode.

        Returns:
            Number of rows affected.
        """
        operation = "update_value"
        with self._connection(operation) as conn:
            if conn is None:
                return 0
            if self.config.bind_parameters:
                params = self._bind(operation, [value])
                if params is None:
                    return 0
                sql = f"UPDATE {table} SET {column} = ? WHERE {condition}"
            else:
                params = []
                sql = f"UPDATE {table} SET {column} = {to_literal(value)} WHERE {condition}"

            rows = self._run_statement(conn, operation, sql, params)
            logger.debug("Updated: %s. Condition: %s. Column: %s = %r", table, condition, column, value)
            return rows

    def delete_value(self, table: str, condition: str) -> bool:
        """Delete the rows of `table` matching `condition`.

        Returns:
            True if at least one row was deleted.
        """
        operation = "delete_value"
        with self._connection(operation) as conn:
            if conn is None:
                return False
            rows = self._run_statement(conn, operation, f"DELETE FROM {table} WHERE {condition}")
            logger.debug("Deleted: %s. Condition: %s", table, condition)
            return rows > 0

    # --- Internal -------------------------------------------------------------------

    def _record(
        self,
        kind: DiagnosticKind,
        operation: str,
        message: str,
        *,
        sql: str | None = None,
        column: str | None = None,
        row: int | None = None,
        level: int = logging.WARNING,
        exc_info: BaseException | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, operation=operation, message=message, sql=sql, column=column, row=row)
        self._diagnostics.append(diagnostic)
        logger.log(level, "%s", diagnostic.describe(), exc_info=exc_info)
        return diagnostic

    @contextlib.contextmanager
    def _connection(self, operation: str) -> Iterator[sqlite3.Connection | None]:
        """Yield an open connection for one operation, or None if unavailable."""
        if self._db_path is None:
            self._record(DiagnosticKind.UNBOUND_HANDLE, operation, "Database is not set")
            yield None
            return

        with contextlib.ExitStack() as stack:
            conn: sqlite3.Connection | None
            try:
                conn = stack.enter_context(open_connection(self._db_path, self.config))
            except (sqlite3.Error, sqlite3.Warning, OSError, ValueError) as exc:
                self._record(
                    DiagnosticKind.CONNECTION_FAILED,
                    operation,
                    f"Could not open {self._db_path}: {exc}",
                    level=logging.ERROR,
                )
                conn = None
            yield conn

    def _bind(self, operation: str, values: Sequence[object]) -> list[SqlValue] | None:
        try:
            return [to_param(value) for value in values]
        except UnsupportedValueError as exc:
            self._record(DiagnosticKind.UNSUPPORTED_VALUE, operation, str(exc))
            return None

    def _run_statement(
        self,
        conn: sqlite3.Connection,
        operation: str,
        sql: str,
        params: Sequence[SqlValue] | None = None,
    ) -> int:
        """Run one statement in its own transaction; 0 and a diagnostic on failure."""
        try:
            with transaction(conn):
                return execute_update(conn, sql, params)
        except SQLITE_ERRORS as exc:
            error = from_sqlite_error(exc)
            self._record(
                DiagnosticKind.STATEMENT_FAILED,
                operation,
                f"{type(error).__name__}: {error}. Rolled back changes",
                sql=sql,
                level=logging.ERROR,
                exc_info=exc,
            )
            return 0

    def _run_batch(self, conn: sqlite3.Connection, operation: str, sqls: Sequence[str]) -> int:
        """Run all statements in one transaction; 0 if any of them fails."""
        total = 0
        current = None
        try:
            with transaction(conn):
                for current in sqls:
                    total += execute_update(conn, current)
        except SQLITE_ERRORS as exc:
            error = from_sqlite_error(exc)
            self._record(
                DiagnosticKind.STATEMENT_FAILED,
                operation,
                f"{type(error).__name__}: {error}. Rolled back {len(sqls)} statements",
                sql=current,
                level=logging.ERROR,
                exc_info=exc,
            )
            return 0
        logger.debug("Committed %d SQL commands in one transaction, %d rows affected", len(sqls), total)
        return total

    def _retrieve(self, operation: str, sql: str, columns: Sequence[str]) -> RowMap:
        results: RowMap = {}
        with self._connection(operation) as conn:
            if conn is None:
                return results
            try:
                for row_seq, row in iter_rows(conn, sql):
                    for column in columns:
                        self._read_cell(operation, results, row, row_seq, column)
            except SQLITE_ERRORS as exc:
                error = from_sqlite_error(exc)
                self._record(
                    DiagnosticKind.STATEMENT_FAILED,
                    operation,
                    f"{type(error).__name__}: {error}",
                    sql=sql,
                    level=logging.ERROR,
                    exc_info=exc,
                )
        return results

    def _read_cell(self, operation: str, results: RowMap, row: sqlite3.Row, row_seq: int, column: str) -> None:
        key = f"{column}_{row_seq}"
        if key in results:
            self._record(
                DiagnosticKind.COLUMN_READ_FAILED,
                operation,
                f"Duplicate key {key}",
                column=column,
                row=row_seq,
            )
            return
        try:
            value = row[column]
        except (IndexError, KeyError):
            self._record(
                DiagnosticKind.COLUMN_READ_FAILED,
                operation,
                f"No column named {column}",
                column=column,
                row=row_seq,
            )
            return
        results[key] = value
        logger.debug("Returned: %r. Column: %s. Row: %d (%s)", value, column, row_seq, key)
