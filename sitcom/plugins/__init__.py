"""Plugin contract, pipeline, and loading."""

from .loader import load_plugins
from .pipeline import Plugin, PluginPipeline

__all__ = ["Plugin", "PluginPipeline", "load_plugins"]
