"""Mirror a template tree into an output tree."""

from __future__ import annotations

import logging
import stat
from functools import partial
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment

from .._utils import BackgroundProcess
from ..core.models import MaterializeReport
from ..settings import Settings, get_settings
from .config import icon_background, load_config
from .engine import create_environment, render_template
from .io import atomic_write_text, copy_file

logger = logging.getLogger(__name__)


def is_template(path: Path, suffix: str) -> bool:
    return path.name.endswith(suffix) and len(path.name) > len(suffix)


def output_path_for(relative: Path, base_output: Path, suffix: str) -> Path:
    """Map an input-relative path to its output path, dropping the template suffix."""
    if is_template(relative, suffix):
        relative = relative.with_name(relative.name[: -len(suffix)])
    return base_output / relative


def materialize(
    config_dir: Path,
    input_dir: Path,
    output_dir: Path,
    *,
    settings: Optional[Settings] = None,
) -> MaterializeReport:
    """Render and copy ``input_dir`` into ``output_dir``.

    Args:
        config_dir: Directory holding config.json (and optionally glyph.svg)
        input_dir: Template tree to mirror
        output_dir: Destination tree, created when missing
        settings: Tool settings (defaults to the environment-driven ones)

    Returns:
        Report of written files, render failures and the icon job, if any

    Raises:
        ConfigError: config.json is missing or invalid
    """
    settings = settings or get_settings()
    config = load_config(config_dir, settings.config_filename)

    output_dir.mkdir(parents=True, exist_ok=True)

    report = MaterializeReport()
    process_directory(
        input_dir,
        input_dir,
        output_dir,
        context=config,
        env=create_environment(input_dir),
        suffix=settings.template_suffix,
        report=report,
    )

    logger.info(
        f"Materialized {len(report.rendered)} rendered and "
        f"{len(report.copied)} copied file(s) into {output_dir}"
    )

    report.icon_job = maybe_generate_icon(
        config, config_dir, output_dir, settings=settings
    )
    return report


def process_directory(
    dir_path: Path,
    base_input: Path,
    base_output: Path,
    *,
    context: dict[str, Any],
    env: Environment,
    suffix: str,
    report: MaterializeReport,
) -> None:
    """Visit every entry below ``dir_path`` in name order."""
    if not dir_path.exists():
        logger.info(f"Creating directory: {dir_path}")
        dir_path.mkdir(parents=True, exist_ok=True)
        return

    for input_path in sorted(dir_path.iterdir()):
        relative = input_path.relative_to(base_input)

        if input_path.is_dir():
            (base_output / relative).mkdir(parents=True, exist_ok=True)
            process_directory(
                input_path,
                base_input,
                base_output,
                context=context,
                env=env,
                suffix=suffix,
                report=report,
            )
        elif input_path.is_file():
            output_path = output_path_for(relative, base_output, suffix)
            if is_template(input_path, suffix):
                _render_file(input_path, relative, output_path, context, env, report)
            else:
                copy_file(input_path, output_path)
                report.copied.append(output_path)
                logger.info(f"Copied {relative} → {output_path}")


def _render_file(
    input_path: Path,
    relative: Path,
    output_path: Path,
    context: dict[str, Any],
    env: Environment,
    report: MaterializeReport,
) -> None:
    try:
        rendered = render_template(env, relative, context)
    except Exception as e:
        logger.error(f"Error rendering {relative}: {e}")
        report.failures.append((relative, str(e)))
        return

    atomic_write_text(output_path, rendered, mode=stat.S_IMODE(input_path.stat().st_mode))
    report.rendered.append(output_path)
    logger.info(f"Rendered {relative} → {output_path}")


def maybe_generate_icon(
    config: dict[str, Any],
    config_dir: Path,
    output_dir: Path,
    *,
    settings: Settings,
) -> Optional[BackgroundProcess]:
    """Start icon generation in a child process when config.json asks for it.

    Returns:
        Handle for the running child, or None when generation is skipped
    """
    background = icon_background(config)
    if background is None:
        logger.info(
            f"Skipping icon generation: icon background colors not found in "
            f"{settings.config_filename}"
        )
        return None

    glyph_path = config_dir / settings.glyph_filename
    if not glyph_path.exists():
        logger.info(
            f"Skipping icon generation: {settings.glyph_filename} not found in {config_dir}"
        )
        return None

    icon_output = output_dir / settings.icon_filename
    logger.info("Generating icon...")

    return BackgroundProcess(
        [
            settings.python_executable,
            "-m",
            "vsxgen.cli.icon",
            background.start,
            background.end,
            str(glyph_path),
            str(icon_output),
        ],
        label="icon",
        on_exit=partial(_report_icon_exit, icon_output),
    )


def _report_icon_exit(icon_output: Path, returncode: int) -> None:
    if returncode == 0:
        logger.info(f"Icon generated successfully: {icon_output}")
    else:
        logger.error(f"Icon generation failed with code {returncode}")
