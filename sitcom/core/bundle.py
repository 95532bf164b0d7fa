"""Bundle orchestration: generate chunks, compile linked markdown, write output."""

from __future__ import annotations

import asyncio
import os
import re
import shutil
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

from ..config import InputOptions, OutputOptions
from ..console import print_code
from ..errors import CircularReferenceError
from ..logging import advise, get_logger
from ..models import AssetEntry, AssetReport, AssetStatus, Heading
from .chunk import Chunk
from .inputs import get_input_files, resolve_output_file
from .layout import render_layout, resolve_layout
from .registry import AssetRegistry
from .relocation import is_within, locate_assets, relative_id, relocate
from .wrap import wrap_chunk_result

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..compiler import Sitcom

_LOGGER = get_logger("bundle")
_MARKDOWN = re.compile(r"\.md$", re.IGNORECASE)


@dataclass
class GenerateResult:
    html: str
    headings: List[Heading]
    registry: AssetRegistry


@dataclass
class WriteResult:
    """What :meth:`Bundle.write` produced; ``outfile`` is None for a console preview."""

    outfile: Optional[Path]
    html: str
    reports: List[AssetReport] = field(default_factory=list)


class Bundle:
    """One compilation over a set of chunks sharing output and layout settings.

    Markdown documents linked from a chunk are compiled as child bundles whose
    registries master into this one, so the top-level bundle ends up holding
    every asset of the compilation tree.
    """

    def __init__(
        self,
        compiler: "Sitcom",
        inputs: InputOptions,
        output: Optional[OutputOptions] = None,
        markdown: Optional[Mapping[str, Any]] = None,
        *,
        parent: Optional["Bundle"] = None,
    ) -> None:
        self.compiler = compiler
        self.input = inputs
        self.output = output or OutputOptions()
        self.markdown = dict(markdown or {})
        self.parent = parent
        self.root = Path(inputs.root).resolve()
        master = parent.registry if parent is not None else compiler.registry
        self.registry = AssetRegistry(master=master)
        self.files = get_input_files(inputs.input, inputs.mapping, self.root)
        declare = (self.root / inputs.declare).resolve() if inputs.declare else None
        self.chunks = [
            Chunk(path, inputs.plugins, declare, root=self.root, master=self.registry)
            for path in self.files
        ]
        self.outfile: Optional[Path] = None

    @classmethod
    async def make(
        cls,
        compiler: "Sitcom",
        inputs: InputOptions,
        output: Optional[OutputOptions] = None,
        markdown: Optional[Mapping[str, Any]] = None,
        *,
        parent: Optional["Bundle"] = None,
    ) -> "Bundle":
        """Create a bundle and tokenize its chunks in order."""
        bundle = cls(compiler, inputs, output, markdown, parent=parent)
        for chunk in bundle.chunks:
            await chunk.tokenize(bundle.markdown)
        return bundle

    async def make_for(self, source: Path) -> "Bundle":
        """Create the child bundle that compiles the linked markdown ``source``."""
        inputs = replace(self.input, input=str(source))
        output = replace(
            self.output,
            file=self._child_file(source),
            data=dict(self.output.data or {}),
        )
        _LOGGER.debug("Compiling linked markdown %s", source)
        return await type(self).make(self.compiler, inputs, output, self.markdown, parent=self)

    @property
    def silent(self) -> bool:
        return self.compiler.silent

    # ------------------------------------------------------------------
    # Generation

    async def generate(self, overrides: Optional[Mapping[str, Any]] = None) -> GenerateResult:
        """Render every chunk, compile linked markdown, and merge into the layout."""
        if overrides:
            self.output = replace(self.output, **dict(overrides))
        self.outfile = resolve_output_file(
            self.input.input, self.output.file, self.output.dist, root=self.root
        )

        in_flight = self.compiler.in_flight
        for path in self.files:
            if path in in_flight:
                raise CircularReferenceError(str(path))
        in_flight.update(self.files)
        if self.outfile is not None:
            for path in self.files:
                self.compiler.outputs[path] = self.outfile

        try:
            html, headings = await self._render_chunks()
        finally:
            in_flight.difference_update(self.files)

        return GenerateResult(html=html, headings=headings, registry=self.registry)

    async def _render_chunks(self) -> tuple[str, List[Heading]]:
        headings: List[Heading] = []
        partials: List[str] = []
        total = len(self.chunks)

        for times, chunk in enumerate(self.chunks, start=1):
            await chunk.transform()
            await wrap_chunk_result(chunk, self.output, times, total)
            partials.append(chunk.result)
            headings.extend(replace(heading) for heading in chunk.headings)
            await self._resolve_markdown(chunk)

        layout = resolve_layout(self.output.layout, self.root)
        html = render_layout(layout, headings, "\n".join(partials), self.output.data, self.registry)

        locate_assets(self.registry, root=self.root, dist=self.output.dist, layout_dir=layout.directory)
        return relocate(html, self.registry, self.outfile), headings

    async def _resolve_markdown(self, chunk: Chunk) -> None:
        """Mark linked markdown entries and compile each one as a child bundle.

        Nothing is compiled while previewing to the console.
        """
        for entry in chunk.registry:
            if entry.is_marked or not _MARKDOWN.search(entry.source):
                continue

            source = Path(entry.source)
            entry.source = str(source.with_suffix(".html"))
            entry.is_marked = True

            if self.outfile is None:
                continue
            if not is_within(source, self.root):
                self._advise(AssetStatus.OUTSIDE_ROOT, source)
                continue
            entry.target = str(await self._output_for(source))

    async def _output_for(self, source: Path) -> Path:
        known = self.compiler.outputs.get(source)
        if known is not None:
            return known
        if not source.is_file():
            outfile = resolve_output_file(str(source), self._child_file(source), self.output.dist)
            self._advise(AssetStatus.NOT_FOUND, source, outfile)
            return outfile
        child = await self.make_for(source)
        result = await child.write()
        return result.outfile

    def _child_file(self, source: Path) -> str:
        return str(Path(os.path.relpath(source, self.root)).with_suffix(".html"))

    # ------------------------------------------------------------------
    # Output

    async def write(self, overrides: Optional[Mapping[str, Any]] = None) -> WriteResult:
        """Write the generated HTML, or print it when there is no output file.

        The top-level bundle also copies every referenced asset into place.
        Asset problems are reported, never raised.
        """
        generated = await self.generate(overrides)

        if self.outfile is None:
            print_code(generated.html)
            return WriteResult(outfile=None, html=generated.html)

        self.outfile.parent.mkdir(parents=True, exist_ok=True)
        self.outfile.write_text(generated.html, encoding="utf-8")
        self._advise(AssetStatus.OK, self.input.input, self.outfile)

        reports: List[AssetReport] = []
        if self.parent is None:
            reports = await self.materialize()
        return WriteResult(outfile=self.outfile, html=generated.html, reports=reports)

    async def materialize(self) -> List[AssetReport]:
        """Copy every static asset of the compilation tree to its target."""
        entries = [entry for entry in self.registry if not entry.is_marked]
        if not entries:
            return []
        return list(await asyncio.gather(*(self._materialize_entry(entry) for entry in entries)))

    async def _materialize_entry(self, entry: AssetEntry) -> AssetReport:
        source = Path(entry.source)
        if not entry.target:
            self._advise(AssetStatus.OUTSIDE_ROOT, source)
            return AssetReport(entry, AssetStatus.OUTSIDE_ROOT)

        target = Path(entry.target)
        if not source.is_file():
            self._advise(AssetStatus.NOT_FOUND, source, target)
            return AssetReport(entry, AssetStatus.NOT_FOUND)

        try:
            if source.resolve() != target.resolve():
                target.parent.mkdir(parents=True, exist_ok=True)
                await asyncio.to_thread(shutil.copyfile, source, target)
        except OSError as exc:
            self._advise(AssetStatus.FAILED, source, target, str(exc))
            return AssetReport(entry, AssetStatus.FAILED, str(exc))

        self._advise(AssetStatus.OK, source, target)
        return AssetReport(entry, AssetStatus.OK)

    def _advise(
        self,
        status: AssetStatus,
        source: Any,
        target: Optional[Path] = None,
        detail: Optional[str] = None,
    ) -> None:
        if not self.silent:
            shown = None if target is None else _display(target)
            advise(_LOGGER, status, _display_entry(source), shown, detail)


def _display(path: str | Path) -> str:
    return relative_id(Path.cwd(), path)


def _display_entry(entry: Any) -> str:
    if isinstance(entry, (list, tuple)):
        return ", ".join(_display_entry(item) for item in entry)
    path = Path(str(entry))
    return _display(path) if path.is_absolute() else str(entry)


__all__ = ["Bundle", "GenerateResult", "WriteResult"]
