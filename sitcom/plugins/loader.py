"""Plugin resolution from configuration values."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from importlib import metadata
from typing import Any, Iterable, List, Sequence

from ..errors import ConfigError
from ..logging import get_logger

_ENTRY_POINT_GROUP = "sitcom.plugins"
_HOOK_NAMES = ("set_options", "tokenize", "transform")

_LOGGER = get_logger("plugins")


def load_plugins(specs: Sequence[Any] | None) -> List[Any]:
    """Return plugin objects for ``specs`` in order.

    Strings are either ``"package.module:attr"`` import paths or entry point
    names registered under ``sitcom.plugins``. Classes are instantiated and
    factories called; plugin objects and mappings are used as given.
    """
    plugins: List[Any] = []
    for spec in specs or []:
        if spec is None:
            continue
        if isinstance(spec, str):
            loaded = _load_reference(spec)
        else:
            loaded = spec
        plugin = _coerce_plugin(loaded, spec)
        _LOGGER.debug("Loaded plugin %r", spec)
        plugins.append(plugin)
    return plugins


def _load_reference(reference: str) -> Any:
    if ":" in reference:
        module_name, _, attr = reference.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ConfigError(f"Failed to import plugin module '{module_name}': {exc}") from exc
        target: Any = module
        for part in attr.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise ConfigError(f"Plugin '{reference}' not found") from exc
        return target

    for entry in _iter_entry_points():
        if entry.name == reference:
            try:
                return entry.load()
            except Exception as exc:
                raise ConfigError(f"Failed to load plugin entry point '{reference}': {exc}") from exc
    raise ConfigError(f"Unknown plugin '{reference}'")


def _coerce_plugin(obj: Any, spec: Any) -> Any:
    if isinstance(obj, type):
        return obj()
    if isinstance(obj, Mapping) or any(hasattr(obj, name) for name in _HOOK_NAMES):
        return obj
    if callable(obj):
        return obj()
    raise ConfigError(f"Plugin {spec!r} must be a plugin object, class, or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    entry_points = metadata.entry_points()
    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)
    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[attr-defined]


__all__ = ["load_plugins"]
