"""Tests for layout resolution and rendering."""

from __future__ import annotations

from pathlib import Path

from sitcom.core.layout import (
    DEFAULT_LAYOUT,
    Layout,
    render_content,
    render_layout,
    render_template,
    resolve_layout,
)
from sitcom.core.registry import AssetRegistry
from sitcom.models import Heading


def test_missing_layout_falls_back_to_builtin(tmp_path: Path) -> None:
    default = resolve_layout(None, tmp_path)
    missing = resolve_layout("nope/page.html", tmp_path)

    builtin = DEFAULT_LAYOUT.read_text(encoding="utf-8")
    assert default.template == builtin
    assert default.directory == tmp_path
    assert missing.template == builtin


def test_layout_directory_implies_index(tmp_path: Path) -> None:
    theme = tmp_path / "theme"
    theme.mkdir()
    (theme / "index.html").write_text("<main>{{ content }}</main>", encoding="utf-8")

    layout = resolve_layout("theme", tmp_path)

    assert layout.template == "<main>{{ content }}</main>"
    assert layout.directory == theme.resolve()


def test_layout_file_is_used_directly(tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text("{{ title }}", encoding="utf-8")

    layout = resolve_layout("page.html", tmp_path)

    assert layout.template == "{{ title }}"
    assert layout.directory == tmp_path.resolve()


def test_render_layout_registers_template_assets(tmp_path: Path) -> None:
    theme = tmp_path / "theme"
    theme.mkdir()
    (theme / "index.html").write_text(
        '<link rel="stylesheet" href="css/site.css"><script src="https://cdn.example/x.js"></script>'
        "{{ content }}",
        encoding="utf-8",
    )
    registry = AssetRegistry()

    html = render_layout(resolve_layout("theme", tmp_path), [], "<p>hi</p>", {}, registry)

    entry = next(iter(registry))
    assert entry.source == str(theme.resolve() / "css" / "site.css")
    assert f'href="{entry.token}"' in html
    assert "https://cdn.example/x.js" in html
    assert html.endswith("<p>hi</p>")


def test_content_and_headings_render_with_template_data(tmp_path: Path) -> None:
    headings = [Heading(level=1, title="Intro", id="intro"), Heading(level=2, title="No id")]

    html = render_layout(
        resolve_layout(None, tmp_path),
        headings,
        "<p>{{ greeting }}</p>",
        {"title": "Guide", "lang": "fr", "greeting": "bonjour"},
        AssetRegistry(),
    )

    assert '<html lang="fr">' in html
    assert "<title>Guide</title>" in html
    assert '<a href="#intro">Intro</a>' in html
    assert "No id" not in html
    assert "<p>bonjour</p>" in html


def test_render_template_keeps_html_unescaped() -> None:
    assert render_template("{{ content }}", {"content": "<b>x</b>"}) == "<b>x</b>"


def test_content_braces_outside_variables_stay_literal(tmp_path: Path) -> None:
    content = (
        '<pre><code class="language-bash">echo ${#arr[@]}\n'
        "{% raw %} {#- note #} {%- endraw %}\n"
        "</code></pre>\n<p>{{ greeting }}</p>"
    )

    html = render_layout(
        Layout("{{ content }}", tmp_path), [], content, {"greeting": "hi"}, AssetRegistry()
    )

    assert "echo ${#arr[@]}" in html
    assert "{% raw %} {#- note #} {%- endraw %}" in html
    assert html.endswith("<p>hi</p>")


def test_render_content_only_substitutes_variables() -> None:
    assert render_content("{% if x %}{{ x }}{% endif %}", {"x": 1}) == "{% if x %}1{% endif %}"
