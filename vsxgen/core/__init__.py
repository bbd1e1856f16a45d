"""Domain models and errors shared by the scaffold and icon pipelines."""

from .errors import ConfigError, IconInputError, RasterError, VsxgenError
from .models import (
    DEFAULT_ICON_TEXT,
    IconBackground,
    IconSpec,
    MaterializeReport,
    RasterJob,
)

__all__ = [
    "DEFAULT_ICON_TEXT",
    "ConfigError",
    "IconBackground",
    "IconInputError",
    "IconSpec",
    "MaterializeReport",
    "RasterError",
    "RasterJob",
    "VsxgenError",
]
