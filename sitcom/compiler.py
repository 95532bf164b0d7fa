"""Top-level compilation entry point."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping, Set

from .config import SitcomConfig, parse_config
from .core.bundle import Bundle
from .core.registry import AssetRegistry, PlaceholderTable
from .errors import ConfigError
from .logging import get_logger
from .plugins.loader import load_plugins

_LOGGER = get_logger("compiler")


class Sitcom:
    """Owns the state shared by every bundle of one compilation run.

    That is the placeholder table, the registry every bundle masters into,
    the set of markdown sources being compiled, and the output file recorded
    for each compiled source.
    """

    def __init__(self, silent: bool = False) -> None:
        self.silent = silent
        self.placeholders = PlaceholderTable()
        self.registry = AssetRegistry(self.placeholders)
        self.in_flight: Set[Path] = set()
        self.outputs: Dict[Path, Path] = {}

    async def make(self, config: SitcomConfig | Mapping[str, Any]) -> Bundle:
        """Build the entry bundle for ``config`` and tokenize its chunks."""
        if config is None:
            raise ConfigError("options are required")
        config = parse_config(config)
        if not config.input.input:
            raise ConfigError("input is required")

        if config.silent:
            self.silent = True

        inputs = replace(config.input, plugins=load_plugins(config.input.plugins))
        _LOGGER.debug("Compiling %s from %s", inputs.input, inputs.root)
        return await Bundle.make(self, inputs, config.output, config.markdown)


__all__ = ["Sitcom"]
