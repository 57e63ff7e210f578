"""Grid value objects: sampled cells and their palette assignments."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class GridCell:
    """A sampled source colour at grid position (x, y)."""

    x: int
    y: int
    color: RGB


@dataclass(frozen=True)
class Assignment:
    """The palette colour chosen for grid position (x, y)."""

    x: int
    y: int
    color: RGB
    name: str | None = None
    palette_index: int | None = None


def cells_from_array(grid: np.ndarray) -> list[GridCell]:
    """Flatten an (H, W, 3) array into row-major cells.

    Row ``grid[y]`` becomes the cells with that ``y``; no flipping happens
    here (see :func:`bead_mosaic.image_io.sample_grid`).
    """
    if grid.ndim != 3 or grid.shape[2] != 3:
        msg = f"Expected an (H, W, 3) array, got shape {grid.shape}"
        raise ValueError(msg)
    h, w = grid.shape[:2]
    return [
        GridCell(x, y, (int(grid[y, x, 0]), int(grid[y, x, 1]), int(grid[y, x, 2])))
        for y in range(h)
        for x in range(w)
    ]
