"""Canonical row-major layout of assignments, plus rendering helpers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from bead_mosaic.grid import Assignment


def sort_layout(assignments: Iterable[Assignment]) -> list[Assignment]:
    """Order assignments by row (``y``) then column (``x``).

    Stable and idempotent; the input is not modified.
    """
    return sorted(assignments, key=lambda a: (a.y, a.x))


def layout_to_array(
    layout: Sequence[Assignment], width: int, height: int,
) -> np.ndarray:
    """Paint assignments into an upright (H, W, 3) uint8 image.

    Grid row 0 is the bottom row of the picture, so rows are flipped back
    here to give a top-origin array suitable for Pillow.
    """
    if len(layout) != width * height:
        msg = f"Layout has {len(layout)} cells, expected {width}x{height}"
        raise ValueError(msg)
    out = np.zeros((height, width, 3), dtype=np.uint8)
    for a in layout:
        out[height - 1 - a.y, a.x] = a.color
    return out


def cell_at(layout: Sequence[Assignment], width: int, x: int, y: int) -> Assignment:
    """Look up the assignment at grid position (x, y) in a sorted layout."""
    height = len(layout) // width if width else 0
    if not (0 <= x < width and 0 <= y < height):
        msg = f"Cell ({x}, {y}) outside {width}x{height} grid"
        raise IndexError(msg)
    return layout[y * width + x]


def describe_cell(cell: Assignment) -> str:
    r, g, b = cell.color
    return f"Selected Color: rgb({r}, {g}, {b}), Position: xy({cell.x}, {cell.y})"
