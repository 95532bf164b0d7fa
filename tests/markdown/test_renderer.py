"""Tests for the rendering hooks installed into markdown-it."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from sitcom.core.chunk import Chunk
from sitcom.core.registry import AssetRegistry
from sitcom.markdown.renderer import sanitize_heading_id
from sitcom.models import Heading


def _render(tmp_path: Path, text: str, *, master: AssetRegistry | None = None, **options: Any) -> Chunk:
    source = tmp_path / "docs" / "doc.md"
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text(text, encoding="utf-8")
    chunk = Chunk(source, root=tmp_path, master=master)

    async def _run() -> None:
        await chunk.tokenize(options)
        await chunk.transform()

    asyncio.run(_run())
    return chunk


def _only_entry(chunk: Chunk):
    entries = list(chunk.registry)
    assert len(entries) == 1
    return entries[0]


def test_heading_custom_id_is_extracted_and_stripped(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "## Title {#custom}\n")

    assert chunk.headings == [Heading(level=2, title="Title", id="custom")]
    assert '<h2 id="custom">Title</h2>' in chunk.result
    assert "{#custom}" not in chunk.result


def test_heading_auto_id_uses_prefix(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "# Hello World\n", header_prefix="doc-")

    assert chunk.headings == [Heading(level=1, title="Hello World", id="doc-Hello-World")]
    assert '<h1 id="doc-Hello-World">' in chunk.result


def test_heading_ids_can_be_disabled(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "# Plain\n", header_ids=False)

    assert chunk.headings == [Heading(level=1, title="Plain")]
    assert "<h1>Plain</h1>" in chunk.result


def test_headings_form_a_flat_ordered_outline(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "### Three\n\n# One\n\n## Use `code` here\n")

    assert [(heading.level, heading.title) for heading in chunk.headings] == [
        (3, "Three"),
        (1, "One"),
        (2, "Use <code>code</code> here"),
    ]


def test_hyphen_only_ids_are_rejected() -> None:
    assert sanitize_heading_id("---") is None
    assert sanitize_heading_id("a b!c") == "a-b-c"
    assert sanitize_heading_id("") is None


def test_local_link_is_replaced_by_placeholder(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "[guide](../guide.md?v=2#intro)\n")

    entry = _only_entry(chunk)
    assert entry.source == str(tmp_path / "guide.md")
    assert f'<a href="{entry.token}?v=2#intro">guide</a>' in chunk.result


def test_external_and_fragment_links_are_untouched(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "[a](https://example.com/x.md) [b](#top) [c](mailto:me@example.com)\n")

    assert len(chunk.registry) == 0
    assert 'href="https://example.com/x.md"' in chunk.result
    assert 'href="#top"' in chunk.result
    assert 'href="mailto:me@example.com"' in chunk.result


def test_link_selector_title_becomes_attributes(tmp_path: Path) -> None:
    chunk = _render(tmp_path, '[x](a.png "#hero.big[data-kind=img]")\n')

    entry = _only_entry(chunk)
    assert f'<a id="hero" class="big" data-kind="img" href="{entry.token}">x</a>' in chunk.result
    assert "title=" not in chunk.result


def test_plain_link_title_is_kept(tmp_path: Path) -> None:
    chunk = _render(tmp_path, '[x](a.png "Tooltip")\n')

    assert 'title="Tooltip"' in chunk.result


def test_image_selector_is_spliced_into_img_tag(tmp_path: Path) -> None:
    chunk = _render(tmp_path, '![Alt text](img/a.png ".wide")\n')

    entry = _only_entry(chunk)
    assert entry.source == str(tmp_path / "docs" / "img" / "a.png")
    assert f'<img class="wide" src="{entry.token}" alt="Alt text">' in chunk.result


def test_root_relative_and_encoded_paths_resolve(tmp_path: Path) -> None:
    chunk = _render(tmp_path, "![a](/static/site.png) ![b](<my pic.png>)\n")

    sources = [entry.source for entry in chunk.registry]
    assert sources == [str(tmp_path / "static" / "site.png"), str(tmp_path / "docs" / "my pic.png")]


def test_raw_html_references_are_registered(tmp_path: Path) -> None:
    chunk = _render(tmp_path, '<div>\n<img src="raw.png">\n</div>\n\ntext <a href="inline.md">x</a>\n')

    sources = [Path(entry.source).name for entry in chunk.registry]
    assert sources == ["raw.png", "inline.md"]
    assert "raw.png" not in chunk.result
    assert "@@asset-" in chunk.result


def test_registrations_propagate_to_master(tmp_path: Path) -> None:
    master = AssetRegistry()
    chunk = _render(tmp_path, "![a](a.png)\n", master=master)

    entry = _only_entry(chunk)
    assert master.get(entry.token) is entry
