"""Rendering hooks that register local assets and collect headings."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence
from urllib.parse import unquote

from markdown_it.renderer import RendererHTML
from markdown_it.token import Token

from ..models import Heading
from .references import replace_local_references, rewrite_reference
from .selectors import is_selector, selector_to_attrs

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..core.chunk import Chunk

Hook = Callable[[RendererHTML, Sequence[Token], int, Any, Any], str]

_ID_MARKER = re.compile(r"\{#([^}]+)\}\s*$")
_NON_WORD = re.compile(r"[^\w]+")
_ONLY_HYPHENS = re.compile(r"^-+$")


@dataclass
class RenderHooks:
    """The four productions the engine hands over to sitcom."""

    heading: Optional[Hook] = None
    link: Optional[Hook] = None
    image: Optional[Hook] = None
    html: Optional[Hook] = None


def sanitize_heading_id(raw_id: str) -> Optional[str]:
    """Collapse non-word runs to hyphens; ids made only of hyphens are rejected."""
    candidate = _NON_WORD.sub("-", raw_id)
    if not candidate or _ONLY_HYPHENS.match(candidate):
        return None
    return candidate


class ChunkRenderer:
    """Routes link, image, raw HTML, and heading output for one chunk."""

    def __init__(self, chunk: "Chunk") -> None:
        self.chunk = chunk

    def hooks(self) -> RenderHooks:
        return RenderHooks(
            heading=self.heading,
            link=self.link,
            image=self.image,
            html=self.html,
        )

    # ------------------------------------------------------------------
    # Productions

    def heading(self, renderer, tokens, idx, options, env) -> str:
        token = tokens[idx]
        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        raw = inline.content if inline is not None else ""
        chunk_options = self.chunk.options

        raw_id: Optional[str] = None
        marker = _ID_MARKER.search(raw)
        if marker:
            if inline is not None and inline.children:
                _strip_id_marker(inline.children)
            raw_id = marker.group(1).strip()
        elif chunk_options.get("header_ids"):
            raw_id = f"{chunk_options.get('header_prefix') or ''}{raw}"

        heading_id = sanitize_heading_id(raw_id) if raw_id else None
        children = inline.children if inline is not None and inline.children else []
        title = renderer.renderInline(children, options, env).strip()
        self.chunk.headings.append(Heading(level=int(token.tag[1:]), title=title, id=heading_id))

        clone = token.copy(attrs=dict(token.attrs))
        if heading_id:
            clone.attrs["id"] = heading_id
        return f"<{token.tag}{renderer.renderAttrs(clone)}>"

    def link(self, renderer, tokens, idx, options, env) -> str:
        token = tokens[idx]
        clone = token.copy(attrs=dict(token.attrs))
        clone.attrs["href"] = self.register(str(clone.attrs.get("href", "")))
        attrs = self._consume_selector(clone)
        html = renderer.renderToken([clone], 0, options, env)
        return "<a" + attrs + html[2:] if attrs else html

    def image(self, renderer, tokens, idx, options, env) -> str:
        token = tokens[idx]
        clone = token.copy(attrs=dict(token.attrs))
        clone.attrs["src"] = self.register(str(clone.attrs.get("src", "")))
        attrs = self._consume_selector(clone)
        html = renderer.image([clone], 0, options, env)
        return "<img" + attrs + html[4:] if attrs else html

    def html(self, renderer, tokens, idx, options, env) -> str:
        return replace_local_references(tokens[idx].content, self._register_path)

    # ------------------------------------------------------------------
    # Asset registration

    def register(self, href: str) -> str:
        """Swap a local reference for its placeholder, keeping any query/fragment."""
        return rewrite_reference(href, self._register_path)

    def _register_path(self, path: str) -> str:
        return self.chunk.registry.register(self.resolve(unquote(path)))

    def resolve(self, path: str) -> str:
        if path.startswith("/"):
            base = Path(self.chunk.root)
            path = path.lstrip("/")
        else:
            base = Path(self.chunk.filename).parent
        return os.path.normpath(os.path.join(base, path))

    @staticmethod
    def _consume_selector(token: Token) -> str:
        title = token.attrs.get("title")
        if not isinstance(title, str) or not is_selector(title):
            return ""
        attrs = selector_to_attrs(title)
        del token.attrs["title"]
        return attrs


def _strip_id_marker(children: List[Token]) -> None:
    """Remove a trailing ``{#id}`` from the last run of text tokens."""
    end = len(children)
    start = end
    while start > 0 and children[start - 1].type == "text":
        start -= 1
    if start == end:
        return
    text = "".join(child.content for child in children[start:end])
    children[start].content = _ID_MARKER.sub("", text).rstrip()
    for child in children[start + 1:end]:
        child.content = ""


__all__ = ["ChunkRenderer", "RenderHooks", "sanitize_heading_id"]
