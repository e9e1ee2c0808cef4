from __future__ import annotations

import sys
from typing import Sequence, TextIO

from rreftools.elimination.steps import Step
from .narrative import describe, format_rows, shows_matrix


def text_matrix(snapshot: Sequence[Sequence[float]], indent: str = "  ") -> str:
    """Right-aligned columns, two decimals, one bracketed row per line."""
    cells = format_rows(snapshot)
    width = max(len(c) for row in cells for c in row)
    lines = [indent + "[ " + "  ".join(c.rjust(width) for c in row) + " ]" for row in cells]
    return "\n".join(lines) + "\n"


class TextSink:
    """Write each step to a text stream as soon as it is emitted."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = sys.stdout if stream is None else stream

    def emit(self, step: Step) -> None:
        self.stream.write(describe(step) + "\n")
        if shows_matrix(step):
            self.stream.write(text_matrix(step.snapshot))
        self.stream.write("\n")
