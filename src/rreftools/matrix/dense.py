from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from rreftools.errors import DimensionError


Snapshot = Tuple[Tuple[float, ...], ...]


class Matrix:
    """
    Dense m x n matrix of floats with in-place elementary row operations.

    Dimensions are fixed at construction. Indices are 0-based.
    """

    __slots__ = ("_rows", "_n_rows", "_n_cols")

    def __init__(
        self,
        n_rows: int,
        n_cols: int,
        data: Optional[Sequence[Sequence[float]]] = None,
    ):
        if n_rows <= 0 or n_cols <= 0:
            raise DimensionError(f"matrix dimensions must be positive, got {n_rows}x{n_cols}")

        if data is None:
            rows = [[0.0] * n_cols for _ in range(n_rows)]
        else:
            if len(data) != n_rows:
                raise DimensionError(f"expected {n_rows} rows, got {len(data)}")
            rows = []
            for i, r in enumerate(data):
                if len(r) != n_cols:
                    raise DimensionError(f"row {i} has {len(r)} entries, expected {n_cols}")
                row = [float(x) for x in r]
                for x in row:
                    if not math.isfinite(x):
                        raise ValueError(f"non-finite entry {x!r} in row {i}")
                rows.append(row)

        self._rows: List[List[float]] = rows
        self._n_rows = n_rows
        self._n_cols = n_cols

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """Build a matrix whose dimensions are taken from nested row sequences."""
        if len(rows) == 0:
            raise DimensionError("matrix needs at least one row")
        return cls(len(rows), len(rows[0]), rows)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        M = cls(n, n)
        for i in range(n):
            M._rows[i][i] = 1.0
        return M

    # ------------------------------------------------------------------
    # Shape and access
    # ------------------------------------------------------------------

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._n_rows, self._n_cols)

    def __getitem__(self, idx: Tuple[int, int]) -> float:
        i, j = idx
        self._check_row(i)
        self._check_col(j)
        return self._rows[i][j]

    def __setitem__(self, idx: Tuple[int, int], value: float) -> None:
        i, j = idx
        self._check_row(i)
        self._check_col(j)
        x = float(value)
        if not math.isfinite(x):
            raise ValueError(f"non-finite entry {x!r} at ({i}, {j})")
        self._rows[i][j] = x

    def row(self, i: int) -> Tuple[float, ...]:
        self._check_row(i)
        return tuple(self._rows[i])

    def snapshot(self) -> Snapshot:
        """Immutable copy of the current contents."""
        return tuple(tuple(r) for r in self._rows)

    def to_lists(self) -> List[List[float]]:
        return [list(r) for r in self._rows]

    def copy(self) -> "Matrix":
        return Matrix(self._n_rows, self._n_cols, self._rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        return f"Matrix({self._n_rows}, {self._n_cols}, {self._rows!r})"

    # ------------------------------------------------------------------
    # Elementary row operations
    # ------------------------------------------------------------------

    def _check_row(self, i: int) -> None:
        if not 0 <= i < self._n_rows:
            raise IndexError(f"row index {i} out of range for {self._n_rows} rows")

    def _check_col(self, j: int) -> None:
        if not 0 <= j < self._n_cols:
            raise IndexError(f"column index {j} out of range for {self._n_cols} columns")

    def swap(self, a: int, b: int) -> None:
        """Exchange rows a and b."""
        self._check_row(a)
        self._check_row(b)
        ra, rb = self._rows[a], self._rows[b]
        for col in range(self._n_cols):
            ra[col], rb[col] = rb[col], ra[col]

    def scale(self, a: int, c: float) -> None:
        """Multiply every entry of row a by c."""
        self._check_row(a)
        ra = self._rows[a]
        for col in range(self._n_cols):
            ra[col] *= c

    def add_scaled_row(self, dst: int, src: int, c: float) -> None:
        """Row operation dst <- dst + c * src."""
        self._check_row(dst)
        self._check_row(src)
        rd, rs = self._rows[dst], self._rows[src]
        for col in range(self._n_cols):
            rd[col] += c * rs[col]
