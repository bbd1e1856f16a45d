# tests/conftest.py
import json
from pathlib import Path

import pytest

from vsxgen.core.errors import RasterError
from vsxgen.icon.raster import run_operation

GLYPH_SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="64" height="32" viewBox="0 0 64 32" fill="#123456">
  <rect x="0" y="0" width="64" height="32" fill="#FF0000" stroke="#00FF00"/>
</svg>
"""


@pytest.fixture
def write_config():
    def _write(config_dir: Path, data) -> Path:
        config_dir.mkdir(parents=True, exist_ok=True)
        path = config_dir / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def glyph_svg(tmp_path) -> Path:
    path = tmp_path / "glyph.svg"
    path.write_text(GLYPH_SVG, encoding="utf-8")
    return path


@pytest.fixture
def in_process_runner():
    """Raster runner that records calls and runs them without a child process."""
    calls = []

    def _run(operation, *args):
        calls.append(operation)
        try:
            run_operation(operation, [str(a) for a in args])
        except Exception as e:
            raise RasterError(str(e)) from e

    _run.calls = calls
    return _run


@pytest.fixture
def require_cairo():
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as e:
        pytest.skip(f"cairo is not available: {e}")
