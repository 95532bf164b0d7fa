"""Classification and rewriting of local asset references."""

from __future__ import annotations

import re
from typing import Callable

# Absolute network references (http://, //cdn) and scheme-prefixed links such as
# mailto:, tel:, data: or javascript:. Single-letter schemes are left alone so
# Windows drive paths still count as local.
_NETWORK_PATTERN = re.compile(r"^(?:[a-z][a-z0-9+.-]+:|//)", re.IGNORECASE)
_LOCAL_PATTERN = re.compile(r"^(?:(?:\.|\.\.)?/)?[^/]+")
_FRAGMENT_PATTERN = re.compile(r"^[?#].+")

_TAG_PATTERN = re.compile(
    r"<\s*(a|area|audio|iframe|img|embed|link|script|source|track|video)\s+([^>]+)>",
    re.IGNORECASE,
)
_ATTR_PATTERN = re.compile(
    r"""(?:^|\s)(href|src)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))""",
    re.IGNORECASE,
)


def is_local_reference(href: str) -> bool:
    """Return True when ``href`` points at a file relative to the document tree."""
    return (
        not _NETWORK_PATTERN.match(href)
        and bool(_LOCAL_PATTERN.match(href))
        and not _FRAGMENT_PATTERN.match(href)
    )


def remove_search_and_anchor(href: str) -> str:
    """Strip a trailing ``?query`` and/or ``#fragment`` in either order."""
    indexes = [index for index in (href.find("?"), href.find("#")) if index != -1]
    if not indexes:
        return href
    return href[: min(indexes)]


def rewrite_reference(href: str, handle: Callable[[str], str]) -> str:
    """Replace the path portion of a local reference, keeping its query/fragment.

    Non-local references, and references whose path is blank once the suffix is
    removed, are returned unchanged.
    """
    if not is_local_reference(href):
        return href
    path = remove_search_and_anchor(href)
    suffix = href[len(path):]
    path = path.strip()
    if not path:
        return href
    return handle(path) + suffix


def replace_local_references(html: str, handle: Callable[[str], str]) -> str:
    """Rewrite ``href``/``src`` values of asset-bearing tags inside raw HTML.

    Only the attribute value changes; whitespace, quoting, and other attributes
    of the tag are preserved verbatim.
    """

    def _replace_tag(match: re.Match[str]) -> str:
        attributes = match.group(2)
        attr = _ATTR_PATTERN.search(attributes)
        if attr is None:
            return match.group(0)
        group = next(index for index in (2, 3, 4) if attr.group(index) is not None)
        value = attr.group(group)
        replaced = rewrite_reference(value.strip(), handle)
        if replaced == value.strip():
            return match.group(0)
        start, end = attr.span(group)
        offset = match.start(2) - match.start(0)
        whole = match.group(0)
        return whole[: offset + start] + replaced + whole[offset + end:]

    return _TAG_PATTERN.sub(_replace_tag, html)


__all__ = [
    "is_local_reference",
    "remove_search_and_anchor",
    "replace_local_references",
    "rewrite_reference",
]
