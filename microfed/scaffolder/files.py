"""File descriptors and per-format formatters.

Generated content is always produced from structured data: JSON documents
from dictionaries, YAML documents from dictionaries, and source files from
Jinja2 templates (see :mod:`microfed.scaffolder.templates`).  Every formatter
is deterministic, so the same input always yields byte-identical output.
"""

from __future__ import annotations

import json
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict


class GeneratedFile(BaseModel):
    """One output file, relative to the root of its artifact set."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str


def render_json(data: Any) -> str:
    """Render *data* as 2-space indented JSON with a trailing newline.

    Key order is preserved, not sorted, so documents read in the order they
    were built.
    """
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_yaml(data: Any) -> str:
    """Render *data* as block-style YAML, preserving key order."""
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def json_file(path: str, data: Any) -> GeneratedFile:
    return GeneratedFile(path=path, content=render_json(data))


def yaml_file(path: str, data: Any) -> GeneratedFile:
    return GeneratedFile(path=path, content=render_yaml(data))
