"""Entry flattening and output file resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Set


def get_input_files(entry: Any, mapping: Optional[Mapping[str, Any]], root: Path) -> List[Path]:
    """Flatten a scalar, list, or mapping-name entry into absolute file paths.

    Names found in ``mapping`` expand to their mapped value; each name expands
    at most once per entry so self-referencing mappings terminate.
    """
    mapping = mapping or {}
    files: List[Path] = []
    expanded: Set[str] = set()

    def _append(item: Any) -> None:
        if isinstance(item, (str, Path)):
            key = str(item)
            if key in mapping and key not in expanded:
                expanded.add(key)
                _append(mapping[key])
                return
            files.append((Path(root) / key).resolve())
        elif isinstance(item, (list, tuple)):
            for value in item:
                _append(value)

    _append(entry)
    return files


def resolve_output_file(
    entry: Any,
    file: Optional[str],
    dist: Optional[str],
    *,
    root: Optional[Path] = None,
) -> Optional[Path]:
    """Return the HTML file a bundle writes to, or None for a console preview.

    Without an explicit ``file`` the name derives from a scalar entry, but only
    when a ``dist`` destination is given.
    """
    if not file:
        if not dist or not isinstance(entry, (str, Path)):
            return None
        candidate = Path(entry)
        if candidate.is_absolute() and root is not None:
            try:
                candidate = candidate.relative_to(root)
            except ValueError:
                candidate = Path(candidate.name)
        file = str(candidate.with_suffix(".html"))

    if dist:
        return (Path(dist) / file).resolve()
    return Path(file).resolve()


__all__ = ["get_input_files", "resolve_output_file"]
