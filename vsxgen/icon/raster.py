"""
Raster operations, each run once per process.

Drawing happens in the parent through Pillow's ImageDraw; decoding, SVG
rasterization and re-encoding happen here, one operation per process, so the
two stages never share process state. The contract is an operation name, a
fixed positional argument list and an exit code.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from PIL import Image, ImageOps

from ..core.errors import RasterError

logger = logging.getLogger(__name__)

FIT_MODES = ("cover", "contain", "fill", "inside", "outside")
SVG_DENSITY = 300
# SVG user units are rasterized at 72 dpi unless a density is given
BASE_DENSITY = 72
RESAMPLE = Image.Resampling.LANCZOS


def _dimension(value: str, name: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise RasterError(f"{name} must be an integer, got: {value!r}") from e
    if number <= 0:
        raise RasterError(f"{name} must be positive, got: {number}")
    return number


def fit_image(
    img: Image.Image,
    width: int,
    height: int,
    fit: str,
    *,
    without_enlargement: bool = False,
) -> Image.Image:
    """Resize ``img`` into a width x height box using the given fit mode."""
    if fit == "fill":
        return img.resize((width, height), RESAMPLE)
    if fit == "cover":
        return ImageOps.fit(img, (width, height), RESAMPLE)
    if fit == "contain":
        return ImageOps.pad(img, (width, height), RESAMPLE, color=(0, 0, 0, 0))
    if fit not in ("inside", "outside"):
        raise RasterError(f"Unknown fit mode: {fit} (expected one of {', '.join(FIT_MODES)})")

    ratios = (width / img.width, height / img.height)
    scale = min(ratios) if fit == "inside" else max(ratios)
    if without_enlargement:
        scale = min(scale, 1.0)

    size = (max(round(img.width * scale), 1), max(round(img.height * scale), 1))
    if size == img.size:
        return img.copy()
    return img.resize(size, RESAMPLE)


def whiten(img: Image.Image) -> Image.Image:
    """Keep the alpha channel, paint every pixel white."""
    img = img.convert("RGBA")
    white = Image.new("RGBA", img.size, (255, 255, 255, 255))
    white.putalpha(img.getchannel("A"))
    return white


def composite(base: str, overlay: str, output: str) -> Path:
    with Image.open(base) as base_img, Image.open(overlay) as overlay_img:
        canvas = base_img.convert("RGBA")
        canvas.alpha_composite(overlay_img.convert("RGBA"))
    canvas.save(output, format="PNG")
    return Path(output)


def resize(source: str, output: str, width: str, height: str, fit: str) -> Path:
    w, h = _dimension(width, "width"), _dimension(height, "height")
    with Image.open(source) as img:
        resized = fit_image(img.convert("RGBA"), w, h, fit)
    resized.save(output, format="PNG")
    return Path(output)


def tint(source: str, output: str) -> Path:
    with Image.open(source) as img:
        tinted = whiten(img)
    tinted.save(output, format="PNG")
    return Path(output)


def save(source: str, output: str) -> Path:
    with Image.open(source) as img:
        img.load()
        img.save(output, format="PNG")
    return Path(output)


def process_svg(source: str, output: str, width: str, height: str) -> Path:
    import cairosvg

    w, h = _dimension(width, "width"), _dimension(height, "height")
    png = cairosvg.svg2png(url=str(Path(source)), scale=SVG_DENSITY / BASE_DENSITY)
    with Image.open(io.BytesIO(png)) as img:
        fitted = fit_image(img.convert("RGBA"), w, h, "inside", without_enlargement=True)
    whiten(fitted).save(output, format="PNG")
    return Path(output)


@dataclass(frozen=True)
class Operation:
    label: str
    params: tuple[str, ...]
    handler: Callable[..., Path]


OPERATIONS: dict[str, Operation] = {
    "composite": Operation(
        "Composite", ("baseImagePath", "overlayImagePath", "outputPath"), composite
    ),
    "resize": Operation(
        "Resize", ("inputPath", "outputPath", "width", "height", "fit"), resize
    ),
    "tint": Operation("Tint", ("inputPath", "outputPath"), tint),
    "save": Operation("Save", ("inputPath", "outputPath"), save),
    "processSvg": Operation(
        "Process SVG", ("svgPath", "outputPath", "width", "height"), process_svg
    ),
}


def run_operation(operation: str, args: Sequence[str]) -> str:
    """Run one raster operation and return its completion message.

    Raises:
        RasterError: Unknown operation or wrong number of arguments
    """
    op = OPERATIONS.get(operation)
    if op is None:
        raise RasterError(f"Unknown operation: {operation}")
    if len(args) != len(op.params):
        raise RasterError(
            f"{operation} operation requires {len(op.params)} arguments: "
            f"{', '.join(op.params)}"
        )

    logger.debug(f"Running {operation} with {list(args)}")
    output = op.handler(*args)
    return f"{op.label} complete: {output}"
