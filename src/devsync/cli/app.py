from typing import Optional

import typer

from devsync import __version__
from devsync.config import init_cli_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        typer.echo(f"devsync version: {__version__}")
        raise typer.Exit()


app = typer.Typer(name="devsync", help="Search devsync workspaces, projects and knowledge")


@app.callback()
def app_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """devsync command line."""
    init_cli_logging()
