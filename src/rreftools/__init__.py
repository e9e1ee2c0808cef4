"""
rreftools: Gauss-Jordan reduction to RREF with a step-by-step derivation trace,
plus renderers (LaTeX, text, logging, matplotlib) that consume the trace.
"""

from .errors import RREFError, DimensionError, DegenerateReciprocalError
from .matrix.dense import Matrix
from .elimination.steps import Step, StepKind, StepSink, StepRecorder, TeeSink
from .elimination.gauss_jordan import EPSILON, Eliminator, ReductionResult, rref
from .io.matrix_text import parse_matrix, load_matrix

# Renderers
from .render.narrative import describe, format_entry
from .render.latex import LatexDocument, texmatrix
from .render.text import TextSink, text_matrix
from .render.log import LoggingSink
from .viz.draw import draw_steps

# Exact checks
from .utils.linalg import exact_rank, is_rref, pivot_positions, row_reduce_fraction

__all__ = [
    # Errors
    "RREFError",
    "DimensionError",
    "DegenerateReciprocalError",
    # Core
    "Matrix",
    "Step",
    "StepKind",
    "StepSink",
    "StepRecorder",
    "TeeSink",
    "EPSILON",
    "Eliminator",
    "ReductionResult",
    "rref",
    # IO
    "parse_matrix",
    "load_matrix",
    # Renderers
    "describe",
    "format_entry",
    "LatexDocument",
    "texmatrix",
    "TextSink",
    "text_matrix",
    "LoggingSink",
    "draw_steps",
    # Exact checks
    "exact_rank",
    "is_rref",
    "pivot_positions",
    "row_reduce_fraction",
]
