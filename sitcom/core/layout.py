"""Layout template lookup and rendering with Jinja2."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

from jinja2 import Environment

from ..markdown.references import replace_local_references
from ..models import Heading
from .registry import AssetRegistry

DEFAULT_LAYOUT = Path(__file__).resolve().parent.parent / "templates" / "layout.html"

_ENV = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)

# Document content only substitutes ``{{ name }}``. markdown-it replaces NUL
# characters, so these block and comment delimiters never occur in its output.
_CONTENT_ENV = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    block_start_string="\x00{%",
    block_end_string="%}\x00",
    comment_start_string="\x00{#",
    comment_end_string="#}\x00",
)


@dataclass
class Layout:
    """A page template plus the directory its local assets resolve against."""

    template: str
    directory: Path


def render_template(text: str, data: Mapping[str, Any]) -> str:
    return _ENV.from_string(text).render(**data)


def render_content(text: str, data: Mapping[str, Any]) -> str:
    """Fill ``{{ name }}`` variables in document HTML; other braces stay literal."""
    return _CONTENT_ENV.from_string(text).render(**data)


def resolve_layout(layout: Optional[str], root: Path) -> Layout:
    """Find the template for ``layout``; a directory implies ``index.html`` inside it.

    Falls back to the built-in template when nothing usable exists on disk.
    """
    if not layout:
        return Layout(DEFAULT_LAYOUT.read_text(encoding="utf-8"), Path(root))

    path = (Path(root) / layout).resolve()
    if path.is_dir():
        directory, template_path = path, path / "index.html"
    else:
        directory, template_path = path.parent, path

    if template_path.is_file():
        return Layout(template_path.read_text(encoding="utf-8"), directory)
    return Layout(DEFAULT_LAYOUT.read_text(encoding="utf-8"), directory)


def render_layout(
    layout: Layout,
    headings: List[Heading],
    content: str,
    data: Optional[Mapping[str, Any]],
    registry: AssetRegistry,
) -> str:
    """Merge ``content`` into the layout, registering the layout's own assets."""

    def _register(src: str) -> str:
        return registry.register(os.path.normpath(os.path.join(layout.directory, src)))

    template = replace_local_references(layout.template, _register)

    context = dict(data or {})
    context["content"] = render_content(content, context)
    context["headings"] = headings
    return render_template(template, context)


__all__ = [
    "DEFAULT_LAYOUT",
    "Layout",
    "render_content",
    "render_layout",
    "render_template",
    "resolve_layout",
]
