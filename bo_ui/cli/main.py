"""
Command-line interface for the back-office table engine.

Previews row files through the same render pipeline the GUI uses and launches
the PySide6 application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from bo_common.errors import BOError
from bo_common.logging import configure_logging
from bo_ui.cli.commands.pages import register_pages_command
from bo_ui.cli.commands.preview import register_preview_command

console = Console()

app = typer.Typer(help="Preview and browse back-office list tables.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Global entry point configuring logging."""
    configure_logging(debug=debug, force=True)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


register_preview_command(app, console)
register_pages_command(app, console)


@app.command("gui")
def gui(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file (defaults to BO_TABLE_CONFIG).",
    ),
) -> None:
    """Launch the desktop list screens."""
    try:
        from bo_gui.main import main as gui_main
    except ImportError as exc:
        console.print(f"[red]GUI dependencies are not installed: {exc}[/red]")
        raise typer.Exit(1)
    try:
        exit_code = gui_main(config)
    except BOError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    raise typer.Exit(exit_code)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
