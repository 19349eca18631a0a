from __future__ import annotations

import logging
from typing import Annotated

import typer

from .base import configure_logging, set_log_level
from .commands.db import app as db_app

configure_logging()
app = typer.Typer(
    help="Project CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")


@app.callback()
def root(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log every statement, commit and retrieved value"),
    ] = False,
) -> None:
    """Convenience commands over a single SQLite database file."""
    if verbose:
        set_log_level(logging.DEBUG)


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.

    Side Effects:
        - Processes CLI arguments and executes commands.
        - May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
