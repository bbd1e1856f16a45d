"""Icon generation: drawing in-process, raster work in child processes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PIL import Image

from .._utils import run_logged
from ..core.errors import RasterError
from ..core.models import IconSpec, RasterJob
from ..rendering.io import scratch_dir
from ..settings import get_settings
from .composer import LABEL_BAR_HEIGHT, SIZE, compose_background, glyph_layer
from .glyph import GlyphBox, whiten_svg

logger = logging.getLogger(__name__)

RasterRunner = Callable[..., None]

TEMP_DIRNAME = "temp"


def run_raster(operation: str, *args: object) -> None:
    """Run one raster operation in a separate process and wait for it.

    Raises:
        RasterError: The child exited non-zero
    """
    job = RasterJob(operation=operation, args=[str(arg) for arg in args])
    result = run_logged(
        job.argv(get_settings().python_executable),
        check=False,
        echo="never",
    )
    for line in result.stdout.splitlines():
        logger.debug(line)
    if result.returncode != 0:
        raise RasterError(
            f"Raster operation failed with code {result.returncode}: "
            f"{result.stderr.strip()}"
        )


def generate_icon(spec: IconSpec, *, runner: RasterRunner = run_raster) -> Path:
    """Render the icon described by ``spec`` and write it as PNG.

    A failure while adding the glyph is logged and the icon is saved
    without it. Intermediate files live in a ``temp`` directory next to
    the output, which is removed afterwards. When ``temp`` already exists
    a separate ``temp-*`` directory is used instead.

    Args:
        spec: Validated icon parameters
        runner: Executes raster operations (defaults to one process per call)

    Returns:
        Absolute path of the written icon

    Raises:
        RasterError: The final save or composite could not be completed
    """
    output_path = spec.output_path
    canvas = compose_background(spec.start_color, spec.end_color, spec.label)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with scratch_dir(output_path.parent / TEMP_DIRNAME) as temp_dir:
        if spec.svg_path is not None:
            try:
                _save_with_glyph(canvas, spec.svg_path, output_path, temp_dir, runner)
            except Exception as e:
                logger.error(f"Error processing SVG: {e}")
                _save_plain(canvas, output_path, temp_dir, runner)
        else:
            _save_plain(canvas, output_path, temp_dir, runner)

    return output_path.resolve()


def _save_plain(
    canvas: Image.Image, output_path: Path, temp_dir: Path, runner: RasterRunner
) -> None:
    staged = temp_dir / "_temp_output.png"
    canvas.save(staged, format="PNG")
    runner("save", staged, output_path)


def _save_with_glyph(
    canvas: Image.Image,
    svg_path: Path,
    output_path: Path,
    temp_dir: Path,
    runner: RasterRunner,
) -> None:
    box = GlyphBox(canvas_size=SIZE, bar_height=LABEL_BAR_HEIGHT)

    white_svg = temp_dir / "_temp_white.svg"
    white_svg.write_text(whiten_svg(svg_path.read_text(encoding="utf-8")), encoding="utf-8")

    white_png = temp_dir / "_temp_white.png"
    runner("processSvg", white_svg, white_png, box.available_width, box.available_height)

    with Image.open(white_png) as rasterized:
        width, height = box.fit(*rasterized.size)
    x, y = box.center(width, height)

    resized = temp_dir / "_temp_white_glyph.png"
    runner("resize", white_png, resized, width, height, "contain")

    with Image.open(resized) as glyph:
        layer = glyph_layer(glyph, (x, y))

    main_path = temp_dir / "_temp_main.png"
    glyph_path = temp_dir / "_temp_glyph.png"
    canvas.save(main_path, format="PNG")
    layer.save(glyph_path, format="PNG")

    runner("composite", main_path, glyph_path, output_path)
