from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from rreftools.errors import DegenerateReciprocalError
from rreftools.matrix.dense import Matrix
from .steps import Step, StepKind, StepSink


logger = logging.getLogger(__name__)


def epsilon_from_env(default: float = 1e-6) -> float:
    """Pivot tolerance from RREFTOOLS_EPSILON, or default when unset."""
    raw = os.environ.get("RREFTOOLS_EPSILON")
    if raw is None:
        return default
    try:
        eps = float(raw)
    except ValueError:
        raise ValueError(f"RREFTOOLS_EPSILON is not a number: {raw!r}") from None
    if not (math.isfinite(eps) and eps >= 0):
        raise ValueError(f"RREFTOOLS_EPSILON must be finite and non-negative, got {raw!r}")
    return eps


EPSILON = epsilon_from_env()


@dataclass
class ReductionResult:
    """
    Outcome of one Gauss-Jordan run.

    pivots:          (row, column) of every placed pivot, in placement order.
    skipped_columns: columns for which a SKIP step was emitted.
    swaps:           number of emitted SWAP steps.
    step_count:      number of steps produced (and handed to the sink, if any).
    """

    matrix: Matrix
    pivots: List[Tuple[int, int]] = field(default_factory=list)
    skipped_columns: List[int] = field(default_factory=list)
    swaps: int = 0
    step_count: int = 0

    @property
    def rank(self) -> int:
        return len(self.pivots)

    @property
    def pivot_columns(self) -> List[int]:
        return [j for _, j in self.pivots]


def pivot_reciprocal(value: float, epsilon: float = EPSILON) -> float:
    """1/value, refusing non-finite pivots and those at or below epsilon."""
    if not math.isfinite(value):
        raise DegenerateReciprocalError(f"cannot normalize by non-finite pivot {value!r}")
    if not abs(value) > epsilon:
        raise DegenerateReciprocalError(
            f"cannot normalize by pivot {value!r} (|pivot| <= {epsilon})"
        )
    return 1.0 / value


def find_pivot_row(M: Matrix, col: int, start: int, epsilon: float = EPSILON) -> Optional[int]:
    """
    First row a in [start, m) with |M[a, col]| > epsilon, else None.

    First-nonzero rather than max-magnitude, so the trace stays easy to follow.
    """
    for a in range(start, M.n_rows):
        if abs(M[a, col]) > epsilon:
            return a
    return None


class Eliminator:
    """
    Gauss-Jordan elimination that reports every row operation as a Step.

    The matrix passed to reduce() is mutated in place. Steps go to the sink
    in exactly the order the operations are applied:

      INITIAL, then per column: SWAP (only if rows actually moved) or SKIP,
      NORMALIZE, one ELIMINATE per other row; finally FINAL.
    """

    def __init__(self, epsilon: float = EPSILON):
        if not (math.isfinite(epsilon) and epsilon >= 0):
            raise ValueError(f"epsilon must be finite and non-negative, got {epsilon!r}")
        self.epsilon = epsilon

    def reduce(self, M: Matrix, sink: Optional[StepSink] = None) -> ReductionResult:
        m, n = M.shape
        result = ReductionResult(matrix=M)

        def emit(kind: StepKind, **operands) -> None:
            step = Step(kind=kind, snapshot=M.snapshot(), **operands)
            logger.debug("step %d: %s %r", result.step_count, kind.value, operands)
            if sink is not None:
                sink.emit(step)
            result.step_count += 1

        emit(StepKind.INITIAL)

        anchor = 0
        for j in range(n):
            a = find_pivot_row(M, j, anchor, self.epsilon)
            if a is None:
                result.skipped_columns.append(j)
                emit(StepKind.SKIP, column=j)
                continue

            M.swap(a, anchor)
            if a != anchor:
                result.swaps += 1
                emit(StepKind.SWAP, row=a, source=anchor, column=j)

            c = pivot_reciprocal(M[anchor, j], self.epsilon)
            M.scale(anchor, c)
            emit(StepKind.NORMALIZE, row=anchor, column=j, factor=c)

            for i in range(m):
                if i == anchor:
                    continue
                c = -M[i, j]
                M.add_scaled_row(i, anchor, c)
                emit(StepKind.ELIMINATE, row=i, source=anchor, column=j, factor=c)

            result.pivots.append((anchor, j))
            anchor += 1

            # rows ran out before columns
            if anchor >= m:
                break

        emit(StepKind.FINAL)

        logger.info(
            "reduced %dx%d matrix: rank=%d, swaps=%d, skipped=%s, steps=%d",
            m,
            n,
            result.rank,
            result.swaps,
            result.skipped_columns,
            result.step_count,
        )
        return result


def rref(
    M: Matrix,
    sink: Optional[StepSink] = None,
    *,
    epsilon: float = EPSILON,
) -> ReductionResult:
    """Reduce M in place to RREF, reporting steps to sink."""
    return Eliminator(epsilon=epsilon).reduce(M, sink)
