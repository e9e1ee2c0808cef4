from .linalg import exact_rank, is_rref, pivot_positions, row_reduce_fraction

__all__ = [
    "exact_rank",
    "is_rref",
    "pivot_positions",
    "row_reduce_fraction",
]
