"""Template rendering engine."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from jinja2.ext import Extension

logger = logging.getLogger(__name__)

# EJS-style tags: <%= expr %> (or <%- expr %>), <% statement %>, <%# comment %>
TAG_SYNTAX = {
    "block_start_string": "<%",
    "block_end_string": "%>",
    "variable_start_string": "<%=",
    "variable_end_string": "%>",
    "comment_start_string": "<%#",
    "comment_end_string": "%>",
}

# EJS raw output: <%- expr %>
RAW_OUTPUT_TAG = re.compile(r"<%-")


class RawOutputTag(Extension):
    """Treat <%- expr %> the same as <%= expr %>."""

    def preprocess(self, source: str, name: Optional[str], filename: Optional[str] = None) -> str:
        return RAW_OUTPUT_TAG.sub("<%=", source)


def create_environment(template_root: Path) -> Environment:
    """Build a Jinja2 environment rooted at the template tree.

    Values are rendered verbatim: the templates produce source and
    manifest files, not markup, so autoescaping stays off.

    Args:
        template_root: Directory that template names are resolved against

    Returns:
        Configured Jinja2 environment
    """
    return Environment(
        loader=FileSystemLoader(str(template_root)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        extensions=[RawOutputTag],
        **TAG_SYNTAX,
    )


def render_template(env: Environment, relative_path: Path, context: dict[str, Any]) -> str:
    """Render one template from the environment's tree.

    Args:
        env: Environment created by `create_environment`
        relative_path: Template path relative to the template root
        context: Template context data

    Returns:
        Rendered text
    """
    logger.debug(f"Rendering template: {relative_path}")
    template = env.get_template(relative_path.as_posix())
    return template.render(context)
