"""Phase-two relocation: compute asset destinations and substitute placeholders."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from ..logging import get_logger
from ..models import AssetEntry
from .registry import AssetRegistry

_LOGGER = get_logger("relocation")


def is_within(path: str | Path, directory: str | Path) -> bool:
    return Path(path).is_relative_to(directory)


def relative_id(start: str | Path, target: str | Path) -> str:
    """Relative path from ``start`` to ``target`` using forward slashes."""
    return Path(os.path.relpath(target, start)).as_posix()


def locate_assets(
    registry: AssetRegistry,
    *,
    root: Path,
    dist: Optional[str] = None,
    layout_dir: Optional[Path] = None,
) -> None:
    """Fill in ``via`` and ``target`` for every entry under the working root.

    Entries outside ``root`` keep ``target`` unset. Compiled markdown entries
    keep the target assigned when their child bundle was written.
    """
    root = Path(root)
    layout_dir = Path(layout_dir) if layout_dir is not None else root
    output_root = Path(dist or ".")

    for entry in registry:
        entry.source = os.path.normpath(entry.source)
        if not is_within(entry.source, root):
            entry.via = None
            if not entry.is_marked:
                entry.target = None
            continue

        if layout_dir != root and is_within(entry.source, layout_dir):
            entry.via = "./" + relative_id(layout_dir, entry.source)
        else:
            entry.via = "./" + relative_id(root, entry.source)

        if not entry.is_marked:
            entry.target = str((output_root / entry.via).resolve())
        _LOGGER.debug("Located %s via %s", entry.source, entry.via)


def relocate(text: str, registry: AssetRegistry, outfile: Optional[Path] = None) -> str:
    """Replace every placeholder token in ``text`` with a concrete path.

    With an output file, paths are relative to its directory; without one
    (console preview) the root-relative ``via`` path is used. Paths are
    percent-encoded for use in attribute values.
    """
    for entry in registry:
        if entry.pattern is None:
            continue
        replacement = quote(_replacement(entry, outfile), safe="/.-_~")
        text = entry.pattern.sub(lambda _match: replacement, text)
    return text


def _replacement(entry: AssetEntry, outfile: Optional[Path]) -> str:
    if outfile is not None:
        base = Path(outfile).parent
        if entry.target:
            return relative_id(base, entry.target)
        if entry.via is None:
            return relative_id(base, entry.source)
    if entry.via:
        return entry.via
    return Path(entry.source).as_posix()


__all__ = ["is_within", "locate_assets", "relative_id", "relocate"]
