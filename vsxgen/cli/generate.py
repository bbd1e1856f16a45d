"""Scaffold materialization CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import ConfigError
from ..rendering import materializer
from ..settings import get_settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="vsxgen-generate",
    help="Render a template tree into an extension workspace using config.json.",
    add_completion=False,
)


@app.command()
def generate(
    config_dir: Annotated[
        Optional[Path],
        typer.Argument(help="Directory containing config.json.", show_default=False),
    ] = None,
    input_dir: Annotated[
        Optional[Path],
        typer.Argument(help="Template tree (default: ./template).", show_default=False),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Argument(help="Output tree (default: ./output).", show_default=False),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Materialize the template tree, then generate the icon if configured."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    if config_dir is None:
        logger.error("Please provide a directory containing config.json")
        typer.echo("Usage: vsxgen-generate <config_dir> [input_dir] [output_dir]", err=True)
        raise typer.Exit(code=1)

    settings = get_settings()
    input_dir = input_dir or settings.default_input_dir
    output_dir = output_dir or settings.default_output_dir

    try:
        report = materializer.materialize(
            config_dir, input_dir, output_dir, settings=settings
        )
    except ConfigError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    # Wait for icon generation
    if report.icon_job is not None:
        report.icon_job.wait()

    if report.failures:
        logger.error(f"{len(report.failures)} template(s) failed to render")
        raise typer.Exit(code=1)

    logger.debug(f"Completed: {len(report.rendered) + len(report.copied)} file(s) written")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
