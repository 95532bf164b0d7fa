"""One markdown source file driven through tokenize, render, and transform."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from markdown_it.token import Token

from ..markdown.engine import with_defaults
from ..markdown.renderer import ChunkRenderer
from ..models import Heading
from ..plugins.pipeline import PluginPipeline
from .registry import AssetRegistry


class Chunk:
    """A document unit: tokens, rendered HTML, headings, and a private registry."""

    def __init__(
        self,
        filename: Path,
        plugins: Optional[Sequence[Any]] = None,
        declare: Optional[Path] = None,
        *,
        root: Optional[Path] = None,
        master: Optional[AssetRegistry] = None,
    ) -> None:
        self.filename = Path(filename)
        self.declare = Path(declare) if declare else None
        self.root = Path(root) if root else self.filename.parent
        self.registry = AssetRegistry(master=master)
        self.pipeline = PluginPipeline(self, plugins)
        self.options: Dict[str, Any] = {}
        self.tokens: List[Token] = []
        self.headings: List[Heading] = []
        self.result = ""

    def flatten(self) -> Dict[str, Any]:
        """Return copies of the headings plus the rendered HTML."""
        return {
            "headings": [replace(heading) for heading in self.headings],
            "result": self.result,
        }

    async def tokenize(self, markdown_options: Optional[Mapping[str, Any]] = None) -> "Chunk":
        content = self.filename.read_text(encoding="utf-8")
        if self.declare is not None:
            content += "\n" + self.declare.read_text(encoding="utf-8")

        self.options = with_defaults(markdown_options)
        self.tokens = await self.pipeline.tokenize(content)
        return self

    async def transform(self) -> "Chunk":
        self.headings = []
        hooks = ChunkRenderer(self).hooks()
        self.result = await self.pipeline.transform(self.tokens, hooks)
        return self


__all__ = ["Chunk"]
