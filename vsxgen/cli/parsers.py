"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from ..core.errors import IconInputError
from ..core.models import IconSpec


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    ctx = error.get("ctx") or {}
    return str(ctx.get("error", error["msg"]))


def parse_icon_args(args: Sequence[str]) -> IconSpec:
    """Map positional icon arguments onto an IconSpec.

    Positional form: #START #END [SVG] [OUTPUT] [TEXT]. A third argument
    starting with '#' is taken as the output path, and anything after it
    is ignored.
    """
    if len(args) < 2:
        raise IconInputError("Please provide start and end colors as hex values")

    start_color, end_color, *rest = args
    fields: dict[str, object] = {"start_color": start_color, "end_color": end_color}

    if rest and rest[0].startswith("#"):
        fields["output_path"] = Path(rest[0])
    else:
        if len(rest) >= 1 and rest[0]:
            fields["svg_path"] = Path(rest[0])
        if len(rest) >= 2 and rest[1]:
            fields["output_path"] = Path(rest[1])
        if len(rest) >= 3:
            fields["text"] = rest[2] or None

    try:
        return IconSpec.model_validate(fields)
    except ValidationError as e:
        raise IconInputError(_first_error(e)) from e
