"""Thin wrapper around markdown-it-py for tokenizing and rendering chunks."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .renderer import RenderHooks

DEFAULT_OPTIONS: Dict[str, Any] = {
    "html": True,
    "linkify": False,
    "typographer": False,
    "breaks": False,
    "xhtml_out": False,
    "tables": True,
    "strikethrough": True,
    "header_ids": True,
    "header_prefix": "",
    "base_url": None,
}

# sitcom option name -> markdown-it option name
_ENGINE_OPTIONS = {
    "html": "html",
    "linkify": "linkify",
    "typographer": "typographer",
    "breaks": "breaks",
    "xhtml_out": "xhtmlOut",
}


def with_defaults(options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Copy the default options and overlay the caller's values."""
    merged = dict(DEFAULT_OPTIONS)
    merged.update(options or {})
    return merged


def create_engine(options: Mapping[str, Any]) -> MarkdownIt:
    engine = MarkdownIt(
        "commonmark",
        {target: bool(options.get(name)) for name, target in _ENGINE_OPTIONS.items()},
    )
    if options.get("tables"):
        engine.enable("table")
    if options.get("strikethrough"):
        engine.enable("strikethrough")
    if options.get("linkify"):
        engine.enable("linkify")
    return engine


def tokenize(content: str, options: Dict[str, Any]) -> List[Token]:
    """Turn markdown text into a markdown-it token stream."""
    _disable_options(options)
    return create_engine(options).parse(content, {})


def render(tokens: List[Token], options: Dict[str, Any], hooks: RenderHooks | None = None) -> str:
    """Render a token stream to HTML, routing productions through ``hooks``."""
    _disable_options(options)
    engine = create_engine(options)
    if hooks is not None:
        install_hooks(engine, hooks)
    return engine.renderer.render(tokens, engine.options, {})


def install_hooks(engine: MarkdownIt, hooks: RenderHooks) -> None:
    """Wire a capability record into the engine's renderer rules."""
    renderer = engine.renderer
    bindings = (
        ("heading_open", hooks.heading),
        ("link_open", hooks.link),
        ("image", hooks.image),
        ("html_block", hooks.html),
        ("html_inline", hooks.html),
    )
    for rule, hook in bindings:
        if hook is None:
            continue
        renderer.rules[rule] = _bind(hook, renderer)


def _bind(hook, renderer):
    def rule(tokens, idx, options, env):
        return hook(renderer, tokens, idx, options, env)

    return rule


def _disable_options(options: Dict[str, Any]) -> None:
    # Placeholders own path resolution, so base_url always reads as unset.
    options["base_url"] = None


__all__ = ["DEFAULT_OPTIONS", "create_engine", "install_hooks", "render", "tokenize", "with_defaults"]
