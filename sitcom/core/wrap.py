"""Intro/outro wrapping of chunk output."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from ..models import Heading

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import OutputOptions
    from .chunk import Chunk


@dataclass
class WrapContext:
    """What an intro/outro callable receives.

    Callables may replace ``headings`` or mutate ``data``; the result is read
    back after both intro and outro have run.
    """

    headings: Any
    result: str
    times: int
    max_times: int
    data: Dict[str, Any] = field(default_factory=dict)


def is_heading(value: Any) -> bool:
    level, title = _heading_fields(value)
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        return False
    if not 1 <= level <= 6 or level != int(level):
        return False
    return title is not None and bool(str(title).strip())


def coerce_heading(value: Any) -> Heading:
    if isinstance(value, Heading):
        return Heading(level=value.level, title=value.title, id=value.id)
    level, title = _heading_fields(value)
    heading_id = value.get("id") if isinstance(value, Mapping) else getattr(value, "id", None)
    return Heading(level=int(level), title=str(title), id=heading_id)


async def wrap_chunk_result(
    chunk: "Chunk",
    output: "OutputOptions",
    times: int,
    max_times: int,
) -> "Chunk":
    """Surround ``chunk.result`` with intro/outro and keep only valid headings."""
    if output.data is None:
        output.data = {}

    flat = chunk.flatten()
    context = WrapContext(
        headings=flat["headings"],
        result=flat["result"],
        times=times,
        max_times=max_times,
        data=output.data,
    )

    intro = await _resolve(output.intro, context)
    outro = await _resolve(output.outro, context)

    headings: List[Heading] = []
    if context.headings is None:
        pass
    elif isinstance(context.headings, (list, tuple)):
        headings = [coerce_heading(h) for h in context.headings if is_heading(h)]
    elif is_heading(context.headings):
        headings = [coerce_heading(context.headings)]

    if context.data is not output.data and isinstance(context.data, Mapping):
        output.data.update(context.data)

    chunk.headings = headings
    chunk.result = intro + chunk.result + outro
    return chunk


async def _resolve(value: Any, context: WrapContext) -> str:
    while True:
        if value is None:
            return ""
        if inspect.isawaitable(value):
            value = await value
            continue
        if callable(value):
            value = value(context)
            continue
        if isinstance(value, Mapping):
            context.data.update(value)
            return ""
        return str(value)


def _heading_fields(value: Any) -> tuple[Optional[Any], Optional[Any]]:
    if isinstance(value, Mapping):
        return value.get("level"), value.get("title")
    return getattr(value, "level", None), getattr(value, "title", None)


__all__ = ["WrapContext", "coerce_heading", "is_heading", "wrap_chunk_result"]
