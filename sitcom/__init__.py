"""Markdown to HTML compiler with deferred asset linking."""

from .compiler import Sitcom
from .config import InputOptions, OutputOptions, SitcomConfig, load_config, parse_config
from .core.bundle import Bundle, GenerateResult, WriteResult
from .core.chunk import Chunk
from .core.registry import AssetRegistry, PlaceholderTable
from .errors import CircularReferenceError, ConfigError, PluginError, SelectorError, SitcomError
from .models import AssetEntry, AssetReport, AssetStatus, Heading
from .plugins import Plugin, PluginPipeline, load_plugins

__all__ = [
    "AssetEntry",
    "AssetRegistry",
    "AssetReport",
    "AssetStatus",
    "Bundle",
    "Chunk",
    "CircularReferenceError",
    "ConfigError",
    "GenerateResult",
    "Heading",
    "InputOptions",
    "OutputOptions",
    "PlaceholderTable",
    "Plugin",
    "PluginError",
    "PluginPipeline",
    "SelectorError",
    "Sitcom",
    "SitcomConfig",
    "SitcomError",
    "WriteResult",
    "load_config",
    "load_plugins",
    "parse_config",
]
