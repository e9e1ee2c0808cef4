from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence

from rreftools.elimination.steps import Step
from .narrative import describe, format_rows, shows_matrix


logger = logging.getLogger(__name__)

TEX_AUTHOR = os.environ.get("RREFTOOLS_TEX_AUTHOR", "GJE2")
TEX_DATE = r"\today"


def texmatrix(snapshot: Sequence[Sequence[float]]) -> str:
    """
    Display-math bmatrix for a snapshot:

      \\[
      \\begin{bmatrix}
      1.00 & 0.00 \\\\
      0.00 & 1.00
      \\end{bmatrix}
      \\]
    """
    body = " \\\\\n".join(" & ".join(row) for row in format_rows(snapshot))
    return "\\[\n\\begin{bmatrix}\n" + body + "\n\\end{bmatrix}\n\\]\n"


class LatexDocument:
    """
    StepSink that assembles a LaTeX article narrating a reduction.

    Steps are buffered as they arrive; render() returns the document and
    write() saves it.
    """

    def __init__(self, *, author: Optional[str] = None, date: Optional[str] = None):
        self.author = TEX_AUTHOR if author is None else author
        self.date = TEX_DATE if date is None else date
        self.steps: List[Step] = []

    def emit(self, step: Step) -> None:
        self.steps.append(step)

    def preamble(self) -> str:
        if self.steps:
            m, n = self.steps[0].shape
            title = f"Gaussian-Jordan Elimination of a ${m} \\times {n}$ Matrix"
        else:
            title = "Gaussian-Jordan Elimination"
        return (
            "\\documentclass{article}\n"
            "\\usepackage[utf8]{inputenc}\n"
            "\\usepackage{amsmath}\n\n"
            f"\\title{{{title}}}\n"
            f"\\author{{{self.author}}}\n"
            f"\\date{{{self.date}}}\n\n"
            "\\begin{document}\n\n"
            "\\maketitle\n\n"
        )

    def body(self) -> str:
        parts = []
        for step in self.steps:
            parts.append(describe(step) + "\n")
            if shows_matrix(step):
                parts.append(texmatrix(step.snapshot))
        return "".join(parts)

    def render(self) -> str:
        return self.preamble() + self.body() + "\\end{document}"

    def write(self, path) -> None:
        text = self.render()
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("wrote %d steps to %s", len(self.steps), path)
