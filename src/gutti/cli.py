"""Command-line entry point for Gutti."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import Config, ConfigModel
from .shell import Gutti
from .ui import Ui


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False), help="Task file to load and save")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--no-greeting", is_flag=True, help="Do not print the greeting banner")
def main(config_path: Optional[str], data_file: Optional[str], verbose: bool, no_greeting: bool):
    """Gutti - a chatty task list for the terminal.

    Reads one command per line from standard input until 'bye'.
    """
    config: ConfigModel = Config.reload(Path(config_path) if config_path else None)
    if data_file:
        config.data_file = str(Path(data_file).expanduser())
    if no_greeting:
        config.show_greeting = False

    setup_logging("DEBUG" if verbose else config.log_level)

    console = Console(no_color=config.no_color, highlight=False)
    session = Gutti.from_config(config, Ui(config, console=console))
    session.run()


if __name__ == "__main__":  # pragma: no cover
    main()
