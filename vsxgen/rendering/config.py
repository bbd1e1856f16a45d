"""Loading config.json and reading the parts vsxgen itself inspects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.models import IconBackground

logger = logging.getLogger(__name__)


def load_config(config_dir: Path, filename: str = "config.json") -> dict[str, Any]:
    """Load the substitution context from ``config_dir/filename``.

    Args:
        config_dir: Directory holding the configuration file
        filename: Configuration file name

    Returns:
        Parsed JSON object, passed to templates as-is

    Raises:
        ConfigError: The file is missing, unreadable or not a JSON object
    """
    path = config_dir / filename
    if not path.is_file():
        raise ConfigError(f"{filename} not found in {config_dir}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error reading or parsing data file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Error reading or parsing data file: {path} must contain a JSON object"
        )

    logger.debug(f"Loaded {len(data)} top-level key(s) from {path}")
    return data


def icon_background(config: dict[str, Any]) -> Optional[IconBackground]:
    """Return the icon gradient colors, or None when they are absent or malformed."""
    icon = config.get("icon")
    if not isinstance(icon, dict):
        return None
    try:
        return IconBackground.model_validate(icon)
    except ValidationError as e:
        logger.debug(f"Ignoring icon settings: {e}")
        return None
