"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitcom.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_parses_output_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["docs/index.md", "-d", "build", "-o", "index.html", "--intro", "<main>", "--silent", "-v"]
    )

    assert args.entry == "docs/index.md"
    assert args.dist == "build"
    assert args.file == "index.html"
    assert args.intro == "<main>"
    assert args.silent is True
    assert args.verbose is True


def test_cli_entry_is_optional() -> None:
    args = _build_parser().parse_args(["--root", "site", "--layout", "theme", "--declare", "refs.md"])

    assert args.entry is None
    assert args.root == "site"
    assert args.layout == "theme"
    assert args.declare == "refs.md"


def test_main_without_input_exits_with_error(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code == 1
    assert "Input not found." in capsys.readouterr().err


def test_main_writes_bundle_and_assets(
    project_builder: ProjectBuilder, monkeypatch, capsys
) -> None:
    project_builder.write(
        {
            "index.md": "# Home\n\n![logo](logo.png)\n",
            "logo.png": b"png",
        }
    )
    monkeypatch.chdir(project_builder.path())

    main(["index.md", "-d", str(project_builder.dist), "--silent"])

    html = (project_builder.dist / "index.html").read_text(encoding="utf-8")
    assert 'src="logo.png"' in html
    assert (project_builder.dist / "logo.png").read_bytes() == b"png"
    assert "Done in" in capsys.readouterr().out


def test_main_reads_config_file_and_lets_flags_override(
    project_builder: ProjectBuilder, monkeypatch
) -> None:
    project_builder.write(
        {
            "page.md": "Hello\n",
            ".sitcom.yml": """
                input: page.md
                output:
                  dist: ignored
                  intro: "<main>"
            """,
        }
    )
    monkeypatch.chdir(project_builder.path())

    main(["-d", str(project_builder.dist), "-o", "out.html", "--silent"])

    html = (project_builder.dist / "out.html").read_text(encoding="utf-8")
    assert "<main><p>Hello</p>" in html
    assert not (project_builder.path() / "ignored").exists()


def test_main_reports_missing_config(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["a.md", "-c", str(tmp_path / "missing.yml")])

    assert excinfo.value.code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_main_reports_unreadable_input(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["absent.md", "-d", "build"])

    assert excinfo.value.code == 1
    assert "sitcom failed" in capsys.readouterr().err
