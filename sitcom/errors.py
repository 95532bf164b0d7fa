"""Exception hierarchy for sitcom compilations."""

from __future__ import annotations


class SitcomError(RuntimeError):
    """Base class for every fatal compilation error."""


class ConfigError(SitcomError):
    """Raised when the configuration is missing, malformed, or incomplete."""


class SelectorError(SitcomError):
    """Raised when an inline selector such as ``#id.class[name=value]`` is malformed."""


class PluginError(SitcomError):
    """Raised when a plugin hook returns a value of the wrong shape for its stage."""

    def __init__(self, plugin_name: str, stage: str) -> None:
        super().__init__(f"Bad {stage} result from plugin {plugin_name}")
        self.plugin_name = plugin_name
        self.stage = stage


class CircularReferenceError(SitcomError):
    """Raised when a markdown document is re-entered while it is still being compiled."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Circular markdown reference detected at {path}")
        self.path = path


__all__ = [
    "CircularReferenceError",
    "ConfigError",
    "PluginError",
    "SelectorError",
    "SitcomError",
]
