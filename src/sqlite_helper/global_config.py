"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and cross-cutting constants that many modules
can import.

Subpackages that need extra settings define their own `config.py`
building on top of these anchors (see `sqlite_helper.database.config`).
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/sqlite_helper/global_config.py, go up two levels: src/sqlite_helper -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent

# Core Names
PROJECT_NAME = "sqlite-helper"
PACKAGE_NAME = "sqlite_helper"

# Database defaults (used by the CLI when no --db-path is given)
DB_DIR: Path = PROJECT_ROOT / "db"
DEFAULT_DB_PATH: Path = DB_DIR / f"{PROJECT_NAME}.sqlite"

# SQLite busy timeout in seconds
DEFAULT_TIMEOUT_S: float = 5.0

# Upper bound on diagnostics kept in memory per helper instance
DEFAULT_MAX_DIAGNOSTICS: int = 100
