"""Inline selector micro-syntax used in link and image titles.

A title such as ``#intro.wide.dark[data-role=hero][hidden]`` becomes the
attribute string `` id="intro" class="wide dark" data-role="hero" hidden``.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from ..errors import SelectorError

SELECTOR_PREFIX = re.compile(r"^[#.\[]")

_ATTR_PATTERN = re.compile(r"\[([^\]]*)\]")
_ID_PATTERN = re.compile(r"#([\w-]+)")
_CLASS_PATTERN = re.compile(r"\.([\w-]+)")


def is_selector(text: Optional[str]) -> bool:
    return bool(text) and bool(SELECTOR_PREFIX.match(text or ""))


def selector_to_attrs(selector: str) -> str:
    """Translate a selector into an HTML attribute string with a leading space.

    Raises :class:`SelectorError` for a repeated ``#id`` or for any text left
    over once ids, classes, and bracketed attributes have been consumed.
    """
    attrs: Dict[str, Optional[str]] = {}
    classes: List[str] = []
    ids: List[str] = []

    def _take_attr(match: re.Match[str]) -> str:
        body = match.group(1).strip()
        if not body:
            return match.group(0)
        name, sep, value = body.partition("=")
        name = name.strip()
        if not name:
            return match.group(0)
        if not sep:
            attrs[name] = None
            return ""
        value = value.strip()
        if value[:1] in {'"', "'"}:
            value = value[1:-1]
        attrs[name] = value.replace('"', "&quot;")
        return ""

    def _take_id(match: re.Match[str]) -> str:
        if ids:
            raise SelectorError(f"Repeat declare id in selector {selector!r}")
        ids.append(match.group(1))
        return ""

    def _take_class(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in classes:
            classes.append(name)
        return ""

    # Brackets first so values such as [x=1.5] or [href=#top] are not split.
    remainder = _ATTR_PATTERN.sub(_take_attr, selector)
    remainder = _ID_PATTERN.sub(_take_id, remainder)
    remainder = _CLASS_PATTERN.sub(_take_class, remainder)

    if remainder.strip():
        raise SelectorError(f"Bad selector string {selector!r}")

    parts: List[str] = []
    if ids:
        parts.append(f'id="{ids[0]}"')
    if classes:
        parts.append(f'class="{" ".join(classes)}"')
    for name, value in attrs.items():
        parts.append(name if value is None else f'{name}="{value}"')
    return "".join(f" {part}" for part in parts)


__all__ = ["SELECTOR_PREFIX", "is_selector", "selector_to_attrs"]
