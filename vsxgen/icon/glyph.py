"""SVG recoloring and glyph placement inside the gradient area."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_FILL_ATTR = re.compile(r'fill="[^"]*"', re.IGNORECASE)
_STROKE_ATTR = re.compile(r'stroke="[^"]*"', re.IGNORECASE)
_SVG_ROOT = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)


def whiten_svg(content: str) -> str:
    """Force every fill and stroke, including the root element's, to white."""
    content = _FILL_ATTR.sub('fill="white"', content)
    content = _STROKE_ATTR.sub('stroke="white"', content)
    return _SVG_ROOT.sub(_paint_root, content, count=1)


def _paint_root(match: re.Match) -> str:
    tag = match.group(0)
    for attr in ("fill", "stroke"):
        if not re.search(rf'\s{attr}="', tag, re.IGNORECASE):
            tag = f'{tag[:4]} {attr}="white"{tag[4:]}'
    return tag


@dataclass(frozen=True)
class GlyphBox:
    """Area of the icon available to the glyph (canvas minus label bar and padding)."""

    canvas_size: int
    bar_height: int

    @property
    def gradient_height(self) -> int:
        return self.canvas_size - self.bar_height

    @property
    def padding(self) -> int:
        return math.floor(self.gradient_height * 0.1)

    @property
    def available_width(self) -> int:
        return self.canvas_size - self.padding * 2

    @property
    def available_height(self) -> int:
        return self.gradient_height - self.padding * 2

    def fit(self, width: int, height: int) -> tuple[int, int]:
        """Scale down to the available height, keeping the aspect ratio."""
        width, height = max(width, 1), max(height, 1)
        if height > self.available_height:
            scale = self.available_height / height
            return max(math.floor(width * scale), 1), self.available_height
        return width, height

    def center(self, width: int, height: int) -> tuple[int, int]:
        """Top-left offset that centers a glyph in the gradient area."""
        x = math.floor((self.canvas_size - width) / 2)
        y = math.floor((self.gradient_height - height) / 2)
        return x, y
