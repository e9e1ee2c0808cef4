from __future__ import annotations

from fractions import Fraction
from typing import List, Sequence, Tuple


def row_reduce_fraction(
    M: Sequence[Sequence[int | float | Fraction]],
) -> tuple[list[list[Fraction]], list[int], int]:
    """Reduced row echelon form over the rationals.

    Floats are converted exactly (Fraction(0.1) is the binary value, not 1/10).
    Uses the same first-nonzero pivot order as the float eliminator, so the
    results can be compared entry by entry.

    Returns (rref_matrix, pivot_columns, rank).
    """
    n_rows = len(M)
    n_cols = len(M[0]) if n_rows else 0
    Mf = [[Fraction(M[i][j]) for j in range(n_cols)] for i in range(n_rows)]
    pivot_cols: list[int] = []
    rp = 0

    for col in range(n_cols):
        if rp >= n_rows:
            break
        piv = next((r for r in range(rp, n_rows) if Mf[r][col] != 0), None)
        if piv is None:
            continue

        Mf[rp], Mf[piv] = Mf[piv], Mf[rp]
        pivot_cols.append(col)

        scale = Mf[rp][col]
        Mf[rp] = [x / scale for x in Mf[rp]]

        for r in range(n_rows):
            if r != rp and Mf[r][col] != 0:
                factor = Mf[r][col]
                Mf[r] = [a - factor * b for a, b in zip(Mf[r], Mf[rp])]

        rp += 1

    return Mf, pivot_cols, len(pivot_cols)


def exact_rank(M: Sequence[Sequence[int | float | Fraction]]) -> int:
    """Exact rank of an integer/rational/float matrix via Gaussian elimination."""
    _, _, rank = row_reduce_fraction(M)
    return rank


def pivot_positions(M: Sequence[Sequence[float]], tol: float = 1e-9) -> List[Tuple[int, int]]:
    """(row, col) of the leading entry (first |x| > tol) of every nonzero row."""
    out = []
    for i, row in enumerate(M):
        for j, x in enumerate(row):
            if abs(x) > tol:
                out.append((i, j))
                break
    return out


def is_rref(M: Sequence[Sequence[float]], tol: float = 1e-9) -> bool:
    """
    True iff M is in reduced row echelon form up to tol:
      - zero rows are at the bottom,
      - leading entries are 1 and move strictly right going down,
      - every other entry in a pivot column is 0.
    """
    pivots = pivot_positions(M, tol)
    n_nonzero = len(pivots)
    if [i for i, _ in pivots] != list(range(n_nonzero)):
        return False

    prev = -1
    for i, j in pivots:
        if j <= prev:
            return False
        prev = j
        if abs(M[i][j] - 1.0) > tol:
            return False
        for r in range(len(M)):
            if r != i and abs(M[r][j]) > tol:
                return False
    return True
