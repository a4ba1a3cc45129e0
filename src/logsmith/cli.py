"""
Command-line entry point.

``logsmith demo`` walks through every feature of the library against the
configured handlers.
"""

import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import load_config
from .exceptions import ConfigurationError
from .log import Log
from .manager import configure_logging


@click.group()
@click.version_option(__version__, prog_name="logsmith")
def main():
    """logsmith: leveled logging with console channels, observers and stopwatches."""


@main.command()
@click.option("--config", "config_file", type=click.Path(path_type=Path, dir_okay=False),
              help="TOML file with a [logging] table")
@click.option("--level", help="Root log level (trace, debug, info, warn, error)")
@click.option("--format", "format_type", type=click.Choice(["console", "json", "rich"]),
              help="Record format")
@click.option("--sleep", default=0.6, show_default=True,
              help="Seconds the slow stopwatch sleeps")
def demo(config_file: Optional[Path], level: Optional[str], format_type: Optional[str], sleep: float):
    """Exercise every logsmith feature."""
    try:
        config = load_config(config_file)
        overrides = {k: v for k, v in (("level", level), ("format", format_type)) if v}
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})
    except (ConfigurationError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    configure_logging(config)

    log = Log.me()

    log.info("It is now %s", datetime.now())
    log.add_throwable_handler(lambda e: click.echo(f"Handled a throwable: {e}", err=True))

    def report_globally(e: BaseException) -> None:
        click.echo(f"GLOBALLY handled a throwable: {e}", err=True)

    Log.add_global_throwable_handler(report_globally)
    try:
        log.info.format("This is a simple message going to the {} logger.", "info")
        log.cwarn.print("This warning goes to the log and to the console with coloring")

        with log.info.stopwatch("simpleStopwatch") as sw:
            for i in range(5):
                sw.warn("log message %d", i)

        with log.debug.stopwatch("stopwatchdemo").warn_over(timedelta(milliseconds=250)).error_over(
            timedelta(milliseconds=500)
        ) as sw:
            sw.info("Going to sleep")
            time.sleep(sleep)
            sw.info("Woke up!")

        log.cout.format("[bold blue]This message is bright blue.[/]")
        log.warn.throwable(Exception("let's test the throwable handlers"), "uh-oh!")
        log.with_prefix("my prefix: ").info("and don't forget about log prefixes.")
    finally:
        Log.remove_global_throwable_handler(report_globally)
