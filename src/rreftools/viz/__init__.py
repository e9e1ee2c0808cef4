from .draw import draw_snapshot, draw_steps

__all__ = [
    "draw_snapshot",
    "draw_steps",
]
