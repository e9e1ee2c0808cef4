from __future__ import annotations

import re
from typing import List

from rreftools.errors import DimensionError
from rreftools.matrix.dense import Matrix


_SEP = re.compile(r"[\s,]+")


def strip_comment(line: str) -> str:
    """
    Remove a trailing '#' comment and surrounding whitespace.
    """
    return line.split("#", 1)[0].strip()


def parse_rows(text: str) -> List[List[float]]:
    """
    Parse plain matrix text into rows of floats.

    One row per non-blank line; entries separated by whitespace and/or commas.
    Optional surrounding brackets on a line are ignored.
    """
    rows = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = strip_comment(raw).strip("[]; \t")
        if not line:
            continue
        row = []
        for tok in _SEP.split(line):
            if not tok:
                continue
            try:
                row.append(float(tok))
            except ValueError:
                raise ValueError(f"line {lineno}: not a number: {tok!r}") from None
        rows.append(row)

    if rows:
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise DimensionError(
                    f"ragged matrix: row {i + 1} has {len(row)} entries, row 1 has {width}"
                )
    return rows


def parse_matrix(text: str) -> Matrix:
    rows = parse_rows(text)
    if not rows:
        raise DimensionError("no matrix rows found")
    return Matrix.from_rows(rows)


def load_matrix(path) -> Matrix:
    """Read a matrix from a plain text file (see parse_rows for the format)."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_matrix(f.read())
