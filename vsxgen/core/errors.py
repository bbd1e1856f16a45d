"""Error types raised across vsxgen."""

from __future__ import annotations


class VsxgenError(Exception):
    """Base class for vsxgen failures."""


class ConfigError(VsxgenError):
    """Raised when config.json is missing or cannot be parsed."""


class IconInputError(VsxgenError):
    """Raised when icon arguments fail validation."""


class RasterError(VsxgenError):
    """Raised when a raster operation is unknown, misused or fails."""
