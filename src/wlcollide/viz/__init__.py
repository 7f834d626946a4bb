from .draw import draw_bucket

__all__ = [
    "draw_bucket",
]
