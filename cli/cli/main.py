"""Main CLI entry point for fink-selfupdate.

This module defines the Typer application and the selfupdate commands.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from core import (
    AptInstaller,
    AptPackageDatabase,
    CommandRunner,
    ConfigManager,
    ExecProcessControl,
    LogLevel,
    SelfUpdateContext,
    SelfUpdateError,
    SelfUpdater,
)
from strategies import register_builtin_strategies

from . import __version__
from .ui import RichUserInterface

# Create the main Typer app
app = typer.Typer(
    name="fink-selfupdate",
    help="Update the package descriptions and the package manager itself.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Create console for rich output
console = Console()


@dataclass
class CliOptions:
    """Global options shared by all commands."""

    config_path: Path | None = None
    assume_yes: bool = False
    log_level: LogLevel | None = None


def configure_logging(log_level: str) -> None:
    """Configure structlog and standard logging with the specified level.

    Args:
        log_level: Log level string (debug, info, warning, error).
    """
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    level = level_map.get(log_level.lower(), logging.WARNING)

    logging.basicConfig(format="%(message)s", level=level, stream=sys.stderr, force=True)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]fink-selfupdate[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file. Defaults to $FINK_SELFUPDATE_CONFIG or the XDG location.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Answer every prompt with its default.",
        ),
    ] = False,
    log_level: Annotated[
        LogLevel | None,
        typer.Option(
            "--log-level",
            "-l",
            help="Log level; overrides LogLevel from the configuration file.",
            case_sensitive=False,
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """fink-selfupdate: refresh the package descriptions.

    Pick an update method (rsync, cvs or point releases), download the latest
    package descriptions and update the package manager and its essential
    packages.
    """
    ctx.obj = CliOptions(config_path=config, assume_yes=yes, log_level=log_level)


def build_context(options: CliOptions) -> SelfUpdateContext:
    """Load the configuration and wire up the production collaborators.

    Raises:
        ConfigError: If the configuration file cannot be read.
    """
    # stderr logging before the config file is read
    configure_logging((options.log_level or LogLevel.WARNING).value)

    config_manager = ConfigManager(options.config_path)
    settings = config_manager.get_settings()

    if options.log_level is None:
        configure_logging(settings.log_level.value)

    runner = CommandRunner(timeout=settings.command_timeout)
    return SelfUpdateContext(
        config=config_manager,
        settings=settings,
        registry=register_builtin_strategies(settings, runner=runner),
        database=AptPackageDatabase(runner),
        installer=AptInstaller(
            runner,
            install_command=settings.install_command,
            index_update_command=settings.index_update_command,
        ),
        process=ExecProcessControl(),
        ui=RichUserInterface(console, assume_yes=options.assume_yes),
    )


def _options(ctx: typer.Context) -> CliOptions:
    return ctx.obj if isinstance(ctx.obj, CliOptions) else CliOptions()


def _run_selfupdate(ctx: typer.Context, method: str | None) -> None:
    try:
        updater = SelfUpdater(build_context(_options(ctx)))
        updater.check(method)
    except SelfUpdateError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None


@app.command()
def selfupdate(
    ctx: typer.Context,
    method: Annotated[
        str | None,
        typer.Argument(
            help="Update method: rsync, cvs or point (legacy codes 0, 1, 2 accepted). "
            "Omit to use the saved method.",
        ),
    ] = None,
) -> None:
    """Update the package descriptions with the saved (or given) method.

    Use this for routine updating. Naming a method different from the
    saved one changes the default after confirmation.
    """
    _run_selfupdate(ctx, method)


@app.command("selfupdate-rsync")
def selfupdate_rsync(ctx: typer.Context) -> None:
    """Switch to (or keep using) the rsync method and update."""
    _run_selfupdate(ctx, "rsync")


@app.command("selfupdate-cvs")
def selfupdate_cvs(ctx: typer.Context) -> None:
    """Switch to (or keep using) the cvs method and update."""
    _run_selfupdate(ctx, "cvs")


@app.command("selfupdate-finish")
def selfupdate_finish(ctx: typer.Context) -> None:
    """Update the essential packages.

    Normally started automatically after the package manager has upgraded
    itself; run it by hand if that re-launch failed.
    """
    try:
        SelfUpdater(build_context(_options(ctx))).finish()
    except SelfUpdateError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None


if __name__ == "__main__":
    app()
