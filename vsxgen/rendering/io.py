"""File I/O operations for rendering."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError as exc:
                logger.warning(f"Could not remove {tmp_name}: {exc}")


def copy_file(source: Path, destination: Path) -> None:
    """Copy a file byte for byte, keeping its permissions and timestamps."""
    ensure_parent(destination)
    shutil.copy2(source, destination)


@contextmanager
def scratch_dir(path: Path) -> Iterator[Path]:
    """Create a directory for intermediate files and remove it on exit.

    ``path`` is used when it does not exist yet. Otherwise a fresh sibling
    directory named after it is created, so an existing directory is never
    touched. Removal is attempted on every exit path. A failed removal is
    logged as a warning and never raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        path.mkdir()
    except FileExistsError:
        path = Path(tempfile.mkdtemp(prefix=f"{path.name}-", dir=str(path.parent)))
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
            logger.info(f"Cleaned up temporary directory: {path}")
        except OSError as exc:
            logger.warning(f"Error cleaning up temp directory {path}: {exc}")
