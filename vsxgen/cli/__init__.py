"""Command-line entry points."""

from .generate import main

__all__ = ["main"]
