"""CLI entry point for tabview. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from tabview.app import run_app
from tabview.navigation import NavigationState, View
from tabview.terminal import ProcessTerminal, TerminalError

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging(log_file: str | None, log_level: str) -> None:
    # The UI owns the terminal, so records only ever go to a file.
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, log_level.upper()),
            format=_LOG_FORMAT,
        )
    else:
        logging.basicConfig(handlers=[logging.NullHandler()])


@click.command()
@click.option(
    "--tab",
    type=click.IntRange(0, len(View) - 1),
    default=0,
    show_default=True,
    help="Index of the tab selected at startup",
)
@click.option(
    "--log-file",
    envvar="TABVIEW_LOG_FILE",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write log records to this file",
)
@click.option(
    "--log-level",
    envvar="TABVIEW_LOG_LEVEL",
    default="info",
    show_default=True,
    type=click.Choice(["debug", "info", "warning", "error"]),
)
def main(tab, log_file, log_level):
    """Tabbed layout demo. Left/right switch tabs, q quits."""
    _configure_logging(log_file, log_level)

    state = NavigationState()
    state.select(tab)

    try:
        with ProcessTerminal() as terminal:
            run_app(terminal, state)
    except TerminalError as err:
        logger.error("%s", err)
        click.echo(f"Error: {err}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
