"""
screenwork command-line interface.

Thin: it reports the environment and configuration, and launches the demo.
"""
from __future__ import annotations

import platform
from pathlib import Path
from typing import Optional

import typer
from rich import print as rich_print
from rich.table import Table

from . import __version__
from .core.config import load_config
from .core.errors import ScreenworkError

_ctx = {"help_option_names": ["-h", "--help"]}
app = typer.Typer(
    help="screenwork - MVVM screen lifecycle for Qt windows",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings=_ctx,
)


def _fail(error: Exception) -> None:
    rich_print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """screenwork - Screens, windows and close guards."""
    if ctx.invoked_subcommand is None:
        rich_print(f"[bold blue]screenwork[/bold blue] {__version__}")
        rich_print("Use 'screenwork --help' for available commands")


@app.command()
def info():
    """Show versions and the Qt binding in use."""
    try:
        from .gui.qt import QT_BACKEND, QtCore
        qt_version = QtCore.qVersion()
    except ImportError:
        QT_BACKEND, qt_version = None, None

    table = Table(title="screenwork", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Version", __version__)
    table.add_row("Python", platform.python_version())
    table.add_row("Qt binding", QT_BACKEND or "[yellow]not installed[/yellow]")
    table.add_row("Qt version", qt_version or "-")
    rich_print(table)


@app.command("config")
def show_config(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="YAML configuration file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the log level"),
):
    """Print the effective configuration."""
    try:
        config = load_config(file, {"log_level": log_level})
    except ScreenworkError as e:
        _fail(e)

    table = Table(title="Effective configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config.model_dump().items():
        table.add_row(key, "-" if value is None else str(value))
    rich_print(table)


@app.command()
def demo(
    file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the log level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write a rotating log file"),
):
    """Launch the demo shell window."""
    from .main import main as run_demo

    try:
        code = run_demo(["screenwork"], file, {"log_level": log_level, "log_file": log_file})
    except ScreenworkError as e:
        _fail(e)
    raise typer.Exit(code=code)
