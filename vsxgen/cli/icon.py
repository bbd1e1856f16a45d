"""Icon generation CLI."""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ..core.errors import IconInputError, RasterError
from ..icon import pipeline
from .parsers import parse_icon_args

logger = logging.getLogger(__name__)

USAGE = "Usage: vsxgen-icon #startColor #endColor [svgPath] [outputPath] [text]"

app = typer.Typer(
    name="vsxgen-icon",
    help="Draw a gradient extension icon with a label bar and optional SVG glyph.",
    add_completion=False,
)


@app.command()
def icon(
    args: Annotated[
        Optional[List[str]],
        typer.Argument(
            help="#START #END [SVG] [OUTPUT] [TEXT]. A third argument starting "
            "with '#' is read as OUTPUT.",
            metavar="#START #END [SVG] [OUTPUT] [TEXT]",
            show_default=False,
        ),
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
    """Generate a square PNG icon."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        spec = parse_icon_args(args or [])
    except IconInputError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=1) from e

    logger.debug(f"Icon spec: {spec.model_dump()}")

    try:
        output = pipeline.generate_icon(spec)
    except (RasterError, OSError, ValueError) as e:
        logger.error(f"Error generating icon: {e}")
        raise typer.Exit(code=1) from e

    typer.echo(f"Icon generated successfully at {output}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
