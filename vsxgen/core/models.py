"""Domain models for scaffold materialization and icon rendering."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .._utils import BackgroundProcess

HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")

DEFAULT_ICON_TEXT = "DEFAULTS"
DEFAULT_ICON_OUTPUT = Path("icon.png")


class IconBackground(BaseModel):
    """The `icon` object of config.json, reduced to its gradient colors."""

    background: list[str] = Field(
        ..., min_length=2, description="Gradient start and end colors"
    )

    @property
    def start(self) -> str:
        return self.background[0]

    @property
    def end(self) -> str:
        return self.background[1]


class IconSpec(BaseModel):
    """Effective parameters for one icon render."""

    start_color: str = Field(..., description="Top-left gradient color")
    end_color: str = Field(..., description="Bottom-right gradient color")
    svg_path: Optional[Path] = Field(default=None, description="Glyph SVG file")
    output_path: Path = Field(
        default=DEFAULT_ICON_OUTPUT, description="Destination PNG file"
    )
    text: Optional[str] = Field(default=None, description="Label bar text")

    @field_validator("start_color", "end_color")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        if not HEX_COLOR.match(value):
            raise ValueError("Colors must be valid hex values (e.g., #FF5500 or #F50)")
        return value

    @field_validator("svg_path")
    @classmethod
    def _check_svg(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return value
        if not value.exists():
            raise ValueError(f"SVG file not found: {value}")
        if value.suffix.lower() != ".svg":
            raise ValueError(f"File is not an SVG: {value}")
        return value

    @property
    def label(self) -> str:
        return self.text or DEFAULT_ICON_TEXT


class RasterJob(BaseModel):
    """A single raster operation dispatched to its own process."""

    operation: str = Field(..., description="Raster operation name")
    args: list[str] = Field(default_factory=list, description="Positional arguments")

    def argv(self, python: str) -> list[str]:
        return [python, "-m", "vsxgen.cli.raster", self.operation, *self.args]


class MaterializeReport(BaseModel):
    """Outcome of one materialization run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rendered: list[Path] = Field(default_factory=list, description="Rendered outputs")
    copied: list[Path] = Field(default_factory=list, description="Copied outputs")
    failures: list[tuple[Path, str]] = Field(
        default_factory=list, description="Templates that failed to render"
    )
    icon_job: Optional[BackgroundProcess] = Field(
        default=None, description="Icon generation running in the background"
    )

    @property
    def ok(self) -> bool:
        return not self.failures
