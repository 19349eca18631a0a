"""
sqlite_helper core package.

Provides:
- `SQLiteHelper`, a transaction-wrapped CRUD helper bound to one SQLite
  file (`sqlite_helper.database`)
- A minimal Typer-based CLI over the helper (`sqlite_helper.cli`)

Configuration:
- Shared, project-wide constants live in `sqlite_helper.global_config`.
- Helper settings live in `sqlite_helper.database.config.HelperConfig`.
"""

from .database import HelperConfig, SQLiteHelper, pairs_to_string

__all__ = ["SQLiteHelper", "HelperConfig", "pairs_to_string"]
