"""Database connection helpers.

This module provides a small, synchronous API for obtaining SQLite
connections, scoping them to a block, and running explicit
transactions on them.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .config import HelperConfig

logger = logging.getLogger(__name__)


def _ensure_parent_dir(db_path: Path) -> None:
    """Ensure the parent directory for a database file exists.

    Args:
        db_path: Path to database file whose parent directory should exist.

    Side Effects:
        - Creates parent directory if it doesn't exist (with parents=True).
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _configure_connection(conn: sqlite3.Connection, config: HelperConfig) -> None:
    """Apply standard pragmas and row factory to a new connection.

    Configures the connection by:
    - Setting row_factory to sqlite3.Row for name-based column access
    - Enabling foreign key constraints when configured

    Args:
        conn: SQLite connection to configure.
        config: Helper settings.

    Side Effects:
        - Modifies connection settings (row_factory, pragmas).
    """
    conn.row_factory = sqlite3.Row
    if config.foreign_keys:
        conn.execute("PRAGMA foreign_keys = ON")


def get_connection(db_path: Path, config: HelperConfig | None = None) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    The connection runs with ``isolation_level=None`` so that transaction
    boundaries are controlled explicitly by `transaction`.

    Args:
        db_path: Path to SQLite database file.
        config: Helper settings. Defaults to `HelperConfig()`.

    Returns:
        Configured SQLite connection ready for use.

    Raises:
        sqlite3.Error: If the database cannot be opened.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.

    Side Effects:
        - Creates parent directory if it doesn't exist.
        - Creates database file if it doesn't exist.
    """
    config = config or HelperConfig()
    if not isinstance(db_path, Path):
        db_path = Path(db_path)

    _ensure_parent_dir(db_path)
    logger.debug("Opening SQLite database at %s", db_path)
    conn = sqlite3.connect(str(db_path), timeout=config.timeout, isolation_level=None)
    try:
        _configure_connection(conn, config)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


@contextlib.contextmanager
def open_connection(
    db_path: Path,
    config: HelperConfig | None = None,
) -> Iterator[sqlite3.Connection]:
    """Open a connection for the duration of a block and always close it.

    Args:
        db_path: Path to SQLite database file.
        config: Helper settings.

    Yields:
        Configured SQLite connection.

    Logs:
        - DEBUG: "Connection closed" on exit.
    """
    conn = get_connection(db_path, config)
    try:
        yield conn
    finally:
        conn.close()
        logger.debug("Connection closed")


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Context manager for a transactional block on an open connection.

    Issues BEGIN on entry, COMMIT on success and ROLLBACK on error. The
    connection itself is left open.

    Args:
        conn: Connection opened by `get_connection` (autocommit mode).

    Yields:
        The same connection.

    Raises:
        Exception: Whatever the block raised, after rolling back.

    Logs:
        - DEBUG: "Beginning transaction" at start
        - DEBUG: "Transaction committed" on success
        - DEBUG: "Transaction rolled back" on failure
    """
    logger.debug("Beginning transaction")
    conn.execute("BEGIN")
    try:
        yield conn
        conn.commit()
        logger.debug("Transaction committed")
    except BaseException:
        if conn.in_transaction:
            conn.rollback()
        logger.debug("Transaction rolled back")
        raise
