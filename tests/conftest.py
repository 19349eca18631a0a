from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from sqlite_helper.database import SQLiteHelper


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "data" / "out").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root (more realistic than :memory:).
    """
    return project_root / "data" / "out" / "test.sqlite"


@pytest.fixture
def db_conn(sqlite_path: Path, project_root: Path) -> Iterator[sqlite3.Connection]:
    """
    A SQLite connection that is always closed after each test.

    Used to seed and inspect the database independently of the helper.
    The DB must be under project_root (prevents touching real DBs).
    """
    try:
        sqlite_path.resolve().relative_to(project_root.resolve())
    except ValueError:
        raise AssertionError(
            f"SQLite path {sqlite_path} is not under project_root {project_root}. "
            "This prevents accidental writes to real databases."
        )

    conn = sqlite3.connect(sqlite_path)
    try:
        conn.execute("PRAGMA busy_timeout = 2000;")
        yield conn
    finally:
        conn.close()


@pytest.fixture
def people_db(db_conn: sqlite3.Connection, sqlite_path: Path) -> Path:
    """Database with a `people` table holding two rows."""
    db_conn.executescript(
        """
        CREATE TABLE people (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            age INTEGER,
            avatar BLOB
        );
        INSERT INTO people (name, age) VALUES ('Ada', 36);
        INSERT INTO people (name, age) VALUES ('Grace', 45);
        """
    )
    db_conn.commit()
    return sqlite_path


@pytest.fixture
def helper(people_db: Path) -> SQLiteHelper:
    """Helper bound to the seeded `people` database."""
    return SQLiteHelper(people_db)


@pytest.fixture
def count_rows(sqlite_path: Path) -> Callable[..., int]:
    """Return a function counting rows of a table in the test database."""

    def _count(table: str, where: str = "1") -> int:
        conn = sqlite3.connect(sqlite_path)
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {table} WHERE {where}").fetchone()[0]
        finally:
            conn.close()

    return _count
