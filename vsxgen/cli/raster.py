"""Raster helper CLI: one raster operation per process."""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ..icon.raster import OPERATIONS, run_operation

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="vsxgen-raster",
    help="Run a single raster operation (composite, resize, tint, save, processSvg).",
    add_completion=False,
)


@app.command()
def raster(
    operation: Annotated[
        Optional[str],
        typer.Argument(help=f"One of: {', '.join(OPERATIONS)}.", show_default=False),
    ] = None,
    args: Annotated[
        Optional[List[str]],
        typer.Argument(help="Positional arguments for the operation.", show_default=False),
    ] = None,
) -> None:
    """Run one raster operation and exit."""
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")

    if not operation:
        typer.echo("Error: No operation specified", err=True)
        typer.echo("Usage: vsxgen-raster <operation> [args...]", err=True)
        typer.echo(f"Operations: {', '.join(OPERATIONS)}", err=True)
        raise typer.Exit(code=1)

    try:
        message = run_operation(operation, args or [])
    except Exception as e:
        typer.echo(f"Error in raster operation: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(message)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
