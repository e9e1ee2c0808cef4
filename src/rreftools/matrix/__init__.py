from .dense import Matrix, Snapshot

__all__ = [
    "Matrix",
    "Snapshot",
]
