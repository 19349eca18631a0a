"""Settings for the database helper."""

from __future__ import annotations

from dataclasses import dataclass

from .. import global_config as g


@dataclass(frozen=True)
class HelperConfig:
    """Connection and behavior settings for `SQLiteHelper`.

    Attributes:
        timeout: Seconds SQLite waits on a locked database before failing.
        foreign_keys: Enable `PRAGMA foreign_keys` on every connection.
        bind_parameters: Bind values with `?` placeholders. When False,
            values are interpolated into the SQL text by their string form
            and text literals must be quoted by the caller.
        max_diagnostics: Number of most recent diagnostics kept.
    """

    timeout: float = g.DEFAULT_TIMEOUT_S
    foreign_keys: bool = True
    bind_parameters: bool = True
    max_diagnostics: int = g.DEFAULT_MAX_DIAGNOSTICS
