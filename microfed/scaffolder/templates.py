"""Jinja2 template rendering for generated source files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``microfed/scaffolder/templates/`` directory and renders them with
application-specific context data.  Rendering is pure: writing the result to
disk is the job of :class:`microfed.scaffolder.generator.ProjectGenerator`.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .files import GeneratedFile


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for application scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined variables raise instead of rendering as
    empty strings, so a missing context key can never silently produce a
    broken source file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Register custom filters
        self.env.filters["env_name"] = env_name
        self.env.filters["js_json"] = _js_json_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"react/bootstrap.jsx.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_file(
        self, template_path: str, output_path: str, context: dict[str, Any]
    ) -> GeneratedFile:
        """Render *template_path* into a :class:`GeneratedFile` at *output_path*."""
        return GeneratedFile(path=output_path, content=self.render(template_path, context))


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def pascal_case(value: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``someThing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def env_name(value: str) -> str:
    """Convert ``productsApp`` or ``products-app`` to ``PRODUCTS_APP``."""
    s1 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    return re.sub(r"[^A-Za-z0-9]+", "_", s1).strip("_").upper()


def _js_json_filter(value: Any, indent: int | None = None) -> str:
    """Serialise *value* as JSON for embedding in JavaScript source."""
    return json.dumps(value, indent=indent, ensure_ascii=False)
