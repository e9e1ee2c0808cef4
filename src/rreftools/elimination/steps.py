from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Protocol

from rreftools.matrix.dense import Snapshot


class StepKind(str, Enum):
    INITIAL = "initial"
    SWAP = "swap"
    SKIP = "skip"
    NORMALIZE = "normalize"
    ELIMINATE = "eliminate"
    FINAL = "final"


@dataclass(frozen=True)
class Step:
    """
    One recorded unit of a Gauss-Jordan derivation.

    snapshot: matrix contents right after the action.
    row:      row acted upon (SWAP: row where the pivot was found).
    source:   the anchor row (SWAP, ELIMINATE).
    column:   pivot column, or the skipped column for SKIP.
    factor:   NORMALIZE: reciprocal of the pivot; ELIMINATE: multiple of the
              anchor row added to `row`.

    All indices are 0-based; renderers convert for display.
    """

    kind: StepKind
    snapshot: Snapshot
    row: Optional[int] = None
    source: Optional[int] = None
    column: Optional[int] = None
    factor: Optional[float] = None

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self.snapshot), len(self.snapshot[0]))


class StepSink(Protocol):
    """Sequential consumer of steps, called synchronously in emission order."""

    def emit(self, step: Step) -> None:
        ...


class StepRecorder:
    """StepSink that keeps every step in a list."""

    def __init__(self):
        self.steps: List[Step] = []

    def emit(self, step: Step) -> None:
        self.steps.append(step)

    def kinds(self) -> List[StepKind]:
        return [s.kind for s in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, i: int) -> Step:
        return self.steps[i]


class TeeSink:
    """Forward each step to several sinks, in the order given."""

    def __init__(self, *sinks: StepSink):
        self.sinks = list(sinks)

    def emit(self, step: Step) -> None:
        for sink in self.sinks:
            sink.emit(step)
