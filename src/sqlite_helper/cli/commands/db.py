"""CLI commands wrapping `SQLiteHelper` operations."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from ... import global_config as g
from ...database import DiagnosticKind, HelperConfig, RowMap, SQLiteHelper, parse_cli_value
from ..base import BaseCLI

db_app = typer.Typer(help="Run statements against a SQLite database file.")

DbPathOption = Annotated[
    Path,
    typer.Option(
        "-d",
        "--db-path",
        help="Path to SQLite database file (defaults to global config)",
    ),
]


class DatabaseCLI(BaseCLI):
    """CLI helpers for database operations."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize DatabaseCLI with db domain name."""
        super().__init__("db")
        self.console = console

    def create_db(self, *, db_path: Path) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="db create",
            op_callable=lambda: self._create_operation(db_path=db_path),
            pre_message=f"Creating database at {db_path}...",
        )

    def exec_sql(self, *, db_path: Path, statements: list[str], atomic: bool) -> dict[str, Any]:
        """Execute statements, each in its own transaction unless `atomic`."""

        def _operation(helper: SQLiteHelper) -> dict[str, Any]:
            if len(statements) == 1 and not atomic:
                rows = helper.execute_sql(statements[0])
            else:
                rows = helper.execute_sqls(*statements, atomic=atomic)
            total = len(statements)
            kinds = [diagnostic.kind for diagnostic in helper.diagnostics]
            failed = kinds.count(DiagnosticKind.STATEMENT_FAILED)
            if len(kinds) > failed:
                # No statement ran
                failed = total
            # An atomic batch commits all statements or none
            succeeded = 0 if atomic and failed else total - failed
            return {
                "total": total,
                "succeeded": succeeded,
                "failed": failed,
                "rows_affected": rows,
            }

        # Keep one diagnostic per statement so none are evicted
        config = HelperConfig(max_diagnostics=len(statements) + 1)
        return self._run(db_path, "db exec", _operation, config=config)

    def select(self, *, db_path: Path, table: str, columns: list[str], where: str | None) -> dict[str, Any]:
        """Retrieve columns and print them as a table."""

        def _operation(helper: SQLiteHelper) -> dict[str, Any]:
            if where:
                row_map = helper.retrieve_values(table, where, *columns)
            else:
                row_map = helper.retrieve_table_content(table, *columns)
            row_count = self._print_rows(table, columns, row_map)
            return {"total": row_count}

        return self._run(db_path, "db select", _operation)

    def insert(self, *, db_path: Path, table: str, assignments: list[str]) -> dict[str, Any]:
        """Insert one row from ``column=value`` assignments."""

        def _operation(helper: SQLiteHelper) -> dict[str, Any]:
            pairs = [_parse_assignment(item) for item in assignments]
            if len(pairs) == 1:
                column, value = pairs[0]
                rows = helper.insert_value(table, column, value)
            else:
                rows = helper.insert_values(table, *pairs)
            return {"rows_affected": rows}

        return self._run(db_path, "db insert", _operation)

    def update(self, *, db_path: Path, table: str, column: str, value: str, where: str) -> dict[str, Any]:
        def _operation(helper: SQLiteHelper) -> dict[str, Any]:
            rows = helper.update_value(table, column, where, parse_cli_value(value))
            return {"rows_affected": rows}

        return self._run(db_path, "db update", _operation)

    def delete(self, *, db_path: Path, table: str, where: str) -> dict[str, Any]:
        def _operation(helper: SQLiteHelper) -> dict[str, Any]:
            deleted = helper.delete_value(table, where)
            return {"message": "Rows deleted" if deleted else "No rows matched"}

        return self._run(db_path, "db delete", _operation)

    def _run(
        self,
        db_path: Path,
        operation: str,
        body: Callable[[SQLiteHelper], dict[str, Any]],
        *,
        config: HelperConfig | None = None,
    ) -> dict[str, Any]:
        """Run `body` against a helper bound to `db_path` and fold in diagnostics."""

        def _op_callable() -> dict[str, Any]:
            helper = SQLiteHelper(db_path, config=config)
            result = body(helper)
            return _with_diagnostics(result, helper)

        return self.handle_cli_operation(operation=operation, op_callable=_op_callable)

    def _create_operation(self, *, db_path: Path) -> dict[str, Any]:
        helper = SQLiteHelper()
        helper.create_database(db_path)
        result = _with_diagnostics({}, helper)
        if result["success"]:
            result["message"] = f"Database created at {db_path}"
        return result

    def _print_rows(self, title: str, columns: list[str], row_map: RowMap) -> int:
        row_numbers = sorted({int(key.rsplit("_", 1)[1]) for key in row_map})
        table = Table(title=title)
        table.add_column("#", justify="right")
        for column in columns:
            table.add_column(column)
        for row_seq in row_numbers:
            cells = [
                "" if f"{column}_{row_seq}" not in row_map else repr(row_map[f"{column}_{row_seq}"])
                for column in columns
            ]
            table.add_row(str(row_seq), *cells)
        (self.console or Console()).print(table)
        return len(row_numbers)


def _parse_assignment(item: str) -> tuple[str, Any]:
    column, sep, raw_value = item.partition("=")
    if not sep or not column.strip():
        msg = f"Expected column=value, got {item!r}"
        raise typer.BadParameter(msg)
    return column.strip(), parse_cli_value(raw_value)


def _with_diagnostics(result: dict[str, Any], helper: SQLiteHelper) -> dict[str, Any]:
    diagnostics = helper.diagnostics
    result["success"] = not diagnostics
    if diagnostics:
        result["failures"] = [
            {"item": diagnostic.kind.value, "reason": diagnostic.describe()} for diagnostic in diagnostics
        ]
    return result


cli = DatabaseCLI()


@db_app.command("create")
def create_command(db_path: DbPathOption = g.DEFAULT_DB_PATH) -> None:
    """Create an empty database file if none exists.

    Exits with code 1 if a file already exists at the path.
    """
    result = cli.create_db(db_path=db_path)
    if not result.get("success"):
        raise typer.Exit(1)


@db_app.command("exec")
def exec_command(
    statements: Annotated[list[str], typer.Argument(help="SQL statements, executed in order")],
    db_path: DbPathOption = g.DEFAULT_DB_PATH,
    atomic: Annotated[
        bool,
        typer.Option("--atomic", help="Run all statements in one transaction"),
    ] = False,
) -> None:
    """Execute SQL statements, each in its own transaction.

    A failing statement is rolled back and the remaining statements still
    run, unless --atomic is given. Exits with code 1 if any statement fails.
    """
    result = cli.exec_sql(db_path=db_path, statements=statements, atomic=atomic)
    if not result.get("success"):
        raise typer.Exit(1)


@db_app.command("select")
def select_command(
    table: Annotated[str, typer.Argument(help="Table to read")],
    columns: Annotated[list[str], typer.Argument(help="Columns to show")],
    db_path: DbPathOption = g.DEFAULT_DB_PATH,
    where: Annotated[
        str | None,
        typer.Option("-w", "--where", help="Raw SQL condition placed after WHERE"),
    ] = None,
) -> None:
    """Print columns of a table, optionally filtered by a condition."""
    result = cli.select(db_path=db_path, table=table, columns=columns, where=where)
    if not result.get("success"):
        raise typer.Exit(1)


@db_app.command("insert")
def insert_command(
    table: Annotated[str, typer.Argument(help="Table to insert into")],
    assignments: Annotated[list[str], typer.Argument(help="column=value pairs")],
    db_path: DbPathOption = g.DEFAULT_DB_PATH,
) -> None:
    """Insert one row.

    Values are typed from their text: NULL, integers and reals are
    recognised, 'quoted' and bare words are text.
    """
    result = cli.insert(db_path=db_path, table=table, assignments=assignments)
    if not result.get("success"):
        raise typer.Exit(1)


@db_app.command("update")
def update_command(
    table: Annotated[str, typer.Argument(help="Table to update")],
    column: Annotated[str, typer.Argument(help="Column to set")],
    value: Annotated[str, typer.Argument(help="New value")],
    where: Annotated[str, typer.Option("-w", "--where", help="Raw SQL condition placed after WHERE")],
    db_path: DbPathOption = g.DEFAULT_DB_PATH,
) -> None:
    """Set a column on the rows matching a condition."""
    result = cli.update(db_path=db_path, table=table, column=column, value=value, where=where)
    if not result.get("success"):
        raise typer.Exit(1)


@db_app.command("delete")
def delete_command(
    table: Annotated[str, typer.Argument(help="Table to delete from")],
    where: Annotated[str, typer.Option("-w", "--where", help="Raw SQL condition placed after WHERE")],
    db_path: DbPathOption = g.DEFAULT_DB_PATH,
) -> None:
    """Delete the rows matching a condition."""
    result = cli.delete(db_path=db_path, table=table, where=where)
    if not result.get("success"):
        raise typer.Exit(1)


app = db_app
