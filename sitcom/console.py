"""Console preview of generated HTML."""

from __future__ import annotations

import sys
from typing import Iterator, Optional, TextIO


def print_code(code: str, *, width: int = 100, stream: Optional[TextIO] = None) -> None:
    """Print ``code`` with right-aligned line numbers between two rules.

    Lines longer than ``width`` continue on indented, unnumbered rows.
    """
    out = stream if stream is not None else sys.stdout
    width = max(width, 1)
    lines = code.split("\n")
    gutter = len(str(len(lines)))
    rule = "=" * (width + gutter + 2)

    print("Print content to stdout", file=out)
    print(rule, file=out)
    for lineno, line in enumerate(lines, start=1):
        for index, segment in enumerate(_segments(line, width)):
            prefix = f"{lineno:>{gutter}}. " if index == 0 else " " * (gutter + 2)
            print(prefix + segment, file=out)
    print(rule, file=out)


def _segments(line: str, width: int) -> Iterator[str]:
    if not line:
        yield ""
        return
    for start in range(0, len(line), width):
        yield line[start:start + width]


__all__ = ["print_code"]
