from .steps import Step, StepKind, StepSink, StepRecorder, TeeSink
from .gauss_jordan import (
    EPSILON,
    Eliminator,
    ReductionResult,
    find_pivot_row,
    pivot_reciprocal,
    rref,
)

__all__ = [
    "Step",
    "StepKind",
    "StepSink",
    "StepRecorder",
    "TeeSink",
    "EPSILON",
    "Eliminator",
    "ReductionResult",
    "find_pivot_row",
    "pivot_reciprocal",
    "rref",
]
