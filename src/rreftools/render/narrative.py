"""Human-readable narrative for recorded steps (1-based row/column numbers)."""
from __future__ import annotations

from typing import Dict, Sequence

from rreftools.elimination.steps import Step, StepKind


def format_entry(x: float) -> str:
    """Fixed two-decimal representation used by every textual renderer."""
    return f"{x:.2f}"


_TEMPLATES: Dict[StepKind, str] = {
    StepKind.INITIAL: "We begin with our original matrix:",
    StepKind.SWAP: "We will swap Row {row} with Row {source} as a suitable pivot:",
    StepKind.SKIP: (
        "We skip column {column} because no pivot (i.e. nonzero entry) "
        "exists in this column."
    ),
    StepKind.NORMALIZE: "We now normalize Row {row} so the pivot becomes equal to 1:",
    StepKind.ELIMINATE: (
        "We now add Row {source} multiplied by a factor of {factor} to Row {row}. "
        "This eliminates the entry in Row {row} for Column {column}."
    ),
    StepKind.FINAL: "And thus we have our matrix in its RREF form:",
}


def _one_based(i):
    return None if i is None else i + 1


def describe(step: Step) -> str:
    """Narrative sentence(s) for a step."""
    return _TEMPLATES[step.kind].format(
        row=_one_based(step.row),
        source=_one_based(step.source),
        column=_one_based(step.column),
        factor=None if step.factor is None else format_entry(step.factor),
    )


def shows_matrix(step: Step) -> bool:
    """SKIP steps change nothing, so documents print no matrix for them."""
    return step.kind is not StepKind.SKIP


def format_rows(snapshot: Sequence[Sequence[float]]) -> list[list[str]]:
    return [[format_entry(x) for x in row] for row in snapshot]
