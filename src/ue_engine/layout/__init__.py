"""Wrapped-row geometry and scrolling."""

from .scroll import ScrollCache, recompute_view
from .wrap import find_line_start, wrapped_row_length, wrapped_row_start

__all__ = [
    "ScrollCache",
    "recompute_view",
    "find_line_start",
    "wrapped_row_length",
    "wrapped_row_start",
]
