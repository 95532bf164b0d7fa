"""CLI entrypoint for sitcom."""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

from .compiler import Sitcom
from .config import InputOptions, SitcomConfig, load_config, resolve_config_path
from .errors import ConfigError, SitcomError
from .logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitcom",
        description="Compile markdown documents and their local assets into HTML.",
    )
    parser.add_argument(
        "entry",
        nargs="?",
        help="Entry markdown file or mapping name (relative to the root directory).",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Use this config file (defaults to .sitcom.yml in the current directory when present).",
    )
    parser.add_argument("-d", "--dist", help="Output directory.")
    parser.add_argument("-o", "--file", help="Output file (if absent, prints to stdout).")
    parser.add_argument("--intro", help="Content to insert at the top of every document.")
    parser.add_argument("--outro", help="Content to insert at the end of every document.")
    parser.add_argument("--layout", help="Layout template file or directory.")
    parser.add_argument("--declare", help="Markdown declarations appended to every document.")
    parser.add_argument("--root", help="Root directory that entries and assets resolve against.")
    parser.add_argument(
        "--silent",
        action="store_true",
        help="Don't report bundle and asset results.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sitcom."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    started = time.perf_counter()

    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    _apply_arguments(config, args)
    if not config.input.input:
        parser.exit(1, "Input not found.\n")

    try:
        asyncio.run(_compile(config))
    except (SitcomError, OSError) as exc:
        parser.exit(1, f"sitcom failed: {exc}\nRun with --verbose for more details.\n")

    print(f"Done in {time.perf_counter() - started:.2f}s")


async def _compile(config: SitcomConfig) -> None:
    sitcom = Sitcom(silent=config.silent)
    bundle = await sitcom.make(config)
    await bundle.write()


def _load_config(path: str | None) -> SitcomConfig:
    if path:
        return load_config(Path(path))
    candidate = resolve_config_path(Path.cwd())
    if candidate.exists():
        return load_config(candidate)
    return SitcomConfig(input=InputOptions(root=Path.cwd()))


def _apply_arguments(config: SitcomConfig, args: argparse.Namespace) -> None:
    if args.entry:
        config.input.input = args.entry
    if args.root:
        config.input.root = Path(args.root).resolve()
    if args.declare:
        config.input.declare = args.declare
    if args.silent:
        config.silent = True
    output = config.output
    if args.dist:
        output.dist = args.dist
    if args.file:
        output.file = args.file
    if args.intro:
        output.intro = args.intro
    if args.outro:
        output.outro = args.outro
    if args.layout:
        output.layout = args.layout


if __name__ == "__main__":
    main(sys.argv[1:])
