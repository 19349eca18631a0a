"""Tests for the db CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sqlite_helper.cli.base import format_result
from sqlite_helper.cli.main import app

runner = CliRunner()


@pytest.mark.integration
def test_create_then_create_again(project_root: Path) -> None:
    db_path = project_root / "cli.sqlite"

    first = runner.invoke(app, ["db", "create", "-d", str(db_path)])
    second = runner.invoke(app, ["db", "create", "-d", str(db_path)])

    assert first.exit_code == 0, first.output
    assert "✓ db create" in first.output
    assert db_path.is_file()
    assert second.exit_code == 1
    assert "file_exists" in second.output


@pytest.mark.integration
def test_exec_reports_rows_affected(sqlite_path: Path) -> None:
    result = runner.invoke(
        app,
        [
            "db",
            "exec",
            "-d",
            str(sqlite_path),
            "CREATE TABLE t (x INTEGER)",
            "INSERT INTO t VALUES (1)",
            "INSERT INTO t VALUES (2)",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "total: 3 | succeeded: 3 | failed: 0 | rows affected: 2" in result.output


@pytest.mark.integration
def test_exec_failure_exits_non_zero(people_db: Path, count_rows: Callable[..., int]) -> None:
    result = runner.invoke(
        app,
        ["db", "exec", "-d", str(people_db), "INSERT INTO nowhere VALUES (1)", "DELETE FROM people"],
    )

    assert result.exit_code == 1
    assert "succeeded: 1 | failed: 1 | rows affected: 2" in result.output
    assert "statement_failed" in result.output
    assert count_rows("people") == 0


@pytest.mark.integration
def test_exec_atomic_rolls_back(people_db: Path, count_rows: Callable[..., int]) -> None:
    result = runner.invoke(
        app,
        ["db", "exec", "--atomic", "-d", str(people_db), "DELETE FROM people", "INSERT INTO nowhere VALUES (1)"],
    )

    assert result.exit_code == 1
    assert "succeeded: 0 | failed: 1" in result.output
    assert count_rows("people") == 2


@pytest.mark.integration
def test_exec_unopenable_database_counts_every_statement(project_root: Path) -> None:
    result = runner.invoke(
        app,
        ["db", "exec", "-d", str(project_root), "CREATE TABLE t (x)", "INSERT INTO t VALUES (1)"],
    )

    assert result.exit_code == 1
    assert "total: 2 | succeeded: 0 | failed: 2" in result.output
    assert "connection_failed" in result.output


@pytest.mark.integration
def test_exec_counts_failures_beyond_diagnostic_limit(people_db: Path) -> None:
    statements = [f"INSERT INTO nowhere VALUES ({n})" for n in range(105)]
    statements.append("SELECT 1")

    result = runner.invoke(app, ["db", "exec", "-d", str(people_db), *statements])

    assert result.exit_code == 1
    assert "total: 106 | succeeded: 1 | failed: 105" in result.output


@pytest.mark.integration
def test_select_prints_rows(people_db: Path) -> None:
    result = runner.invoke(app, ["db", "select", "-d", str(people_db), "people", "name", "age"])

    assert result.exit_code == 0, result.output
    assert "'Ada'" in result.output
    assert "'Grace'" in result.output
    assert "total: 2" in result.output


@pytest.mark.integration
def test_select_with_where(people_db: Path) -> None:
    result = runner.invoke(app, ["db", "select", "-d", str(people_db), "people", "name", "--where", "age > 40"])

    assert result.exit_code == 0, result.output
    assert "'Grace'" in result.output
    assert "'Ada'" not in result.output
    assert "total: 1" in result.output


@pytest.mark.integration
def test_insert_update_delete(people_db: Path, count_rows: Callable[..., int]) -> None:
    inserted = runner.invoke(app, ["db", "insert", "-d", str(people_db), "people", "name=Linus", "age=54"])
    updated = runner.invoke(app, ["db", "update", "-d", str(people_db), "people", "age", "55", "-w", "name = 'Linus'"])
    deleted = runner.invoke(app, ["db", "delete", "-d", str(people_db), "people", "-w", "name = 'Ada'"])

    assert inserted.exit_code == 0, inserted.output
    assert "rows affected: 1" in inserted.output
    assert updated.exit_code == 0, updated.output
    assert count_rows("people", "name = 'Linus' AND age = 55") == 1
    assert deleted.exit_code == 0, deleted.output
    assert "Rows deleted" in deleted.output
    assert count_rows("people") == 2


@pytest.mark.integration
def test_insert_single_column(people_db: Path, count_rows: Callable[..., int]) -> None:
    result = runner.invoke(app, ["db", "insert", "-d", str(people_db), "people", "name='Ken Thompson'"])

    assert result.exit_code == 0, result.output
    assert count_rows("people", "name = 'Ken Thompson'") == 1


@pytest.mark.integration
def test_insert_rejects_malformed_assignment(people_db: Path) -> None:
    result = runner.invoke(app, ["db", "insert", "-d", str(people_db), "people", "name"])

    assert result.exit_code == 1
    assert "✗ db insert failed" in result.output


@pytest.mark.unit
def test_format_result_renders_stats_and_failures() -> None:
    text = format_result(
        {
            "success": False,
            "total": 2,
            "succeeded": 1,
            "failed": 1,
            "failures": [{"item": "statement_failed", "reason": "no such table: nowhere"}],
        },
        operation="db exec",
    )

    assert text.splitlines() == [
        "✗ db exec",
        "  total: 2 | succeeded: 1 | failed: 1",
        "  Failures:",
        "    • statement_failed: no such table: nowhere",
    ]
