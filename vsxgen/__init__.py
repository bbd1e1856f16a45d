"""vsxgen - VS Code extension scaffold and icon generator.

Mirrors a template tree into an extension workspace and draws its icon.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
