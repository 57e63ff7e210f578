"""Inventory-constrained greedy quantization over a random cell order."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

import numpy as np

from bead_mosaic.errors import ConfigError, InventoryExhausted
from bead_mosaic.grid import Assignment, GridCell
from bead_mosaic.palette import PaletteInventory

logger = logging.getLogger(__name__)


def _resolve_rng(rng: Any) -> Any:
    """Seed / ``None`` -> numpy Generator; anything with ``permutation`` passes through."""
    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, (int, np.integer)):
        if rng < 0:
            msg = f"Seed must be a non-negative integer, got {rng}"
            raise ConfigError(msg)
        return np.random.default_rng(rng)
    if not hasattr(rng, "permutation"):
        msg = f"rng must be a seed, None, or expose permutation(n); got {type(rng).__name__}"
        raise TypeError(msg)
    return rng


def quantize(
    grid: Sequence[GridCell],
    inventory: PaletteInventory,
    rng: Any = None,
) -> list[Assignment]:
    """Assign every cell the nearest palette colour that still has stock.

    Cells are visited in a uniformly random order so that, once popular
    colours run out, the forced substitutions are spread over the whole
    image instead of piling up in the last region visited.

    Args:
        grid:      Sampled cells, one per grid position.
        inventory: Stock for this run; depleted in place and frozen on success.
        rng:       ``None`` (fresh entropy), an ``int`` seed, or an object with
                   ``permutation(n)`` such as ``numpy.random.Generator``.

    Returns:
        One :class:`Assignment` per cell, in visitation order.

    Raises:
        InventoryExhausted: a cell was reached with every entry at zero stock.
    """
    n = len(grid)
    order = _resolve_rng(rng).permutation(n)

    logger.info(
        "Quantizing %d cells against %d palette colours (%d pieces) ...",
        n, len(inventory), inventory.total_remaining,
    )
    t0 = time.perf_counter()

    assignments: list[Assignment] = []
    for cell_idx in order:
        cell = grid[int(cell_idx)]
        chosen = inventory.nearest_available(cell.color)
        if chosen is None:
            logger.debug("No stock left at cell (%d, %d)", cell.x, cell.y)
            raise InventoryExhausted(len(assignments), n, inventory.depleted())

        entry = inventory[chosen]
        assignments.append(
            Assignment(cell.x, cell.y, entry.rgb, entry.name, chosen),
        )
        inventory.decrement(chosen)

    inventory.freeze()
    logger.info("Quantization done  (%.2f s)", time.perf_counter() - t0)
    return assignments
