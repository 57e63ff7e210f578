"""End-to-end run: sample -> quantize -> sort -> summarize."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from bead_mosaic.grid import Assignment, GridCell
from bead_mosaic.layout import layout_to_array, sort_layout
from bead_mosaic.palette import PaletteColor, PaletteInventory, build_inventory
from bead_mosaic.quantizer import quantize
from bead_mosaic.report import UsageSummary, summarize

logger = logging.getLogger(__name__)


@dataclass
class MosaicResult:
    """Everything a renderer or report needs from one run."""

    width: int
    height: int
    layout: list[Assignment]
    summary: UsageSummary
    inventory: PaletteInventory
    substitutions: int

    def to_array(self) -> np.ndarray:
        """Upright (H, W, 3) uint8 image of the mosaic."""
        return layout_to_array(self.layout, self.width, self.height)


def count_substitutions(
    grid: Sequence[GridCell],
    layout: Sequence[Assignment],
    inventory: PaletteInventory,
) -> int:
    """Cells that did not receive their unconstrained nearest colour."""
    wanted = {(c.x, c.y): inventory.nearest(c.color) for c in grid}
    return sum(1 for a in layout if a.palette_index != wanted[(a.x, a.y)])


def generate_mosaic(
    grid: Sequence[GridCell],
    width: int,
    height: int,
    palette: Sequence[PaletteColor],
    rng: Any = None,
) -> MosaicResult:
    """Quantize *grid* against a fresh inventory built from *palette*.

    Raises:
        ValueError: the grid does not hold exactly ``width * height`` cells.
        InventoryExhausted: the palette ran out of stock mid-run.
    """
    if len(grid) != width * height:
        msg = f"Grid has {len(grid)} cells, expected {width}x{height}"
        raise ValueError(msg)

    inventory = build_inventory(palette)
    layout = sort_layout(quantize(grid, inventory, rng))
    summary = summarize(layout)
    substitutions = count_substitutions(grid, layout, inventory)
    logger.info(
        "Mosaic %dx%d: %d pieces used, %d left, %d forced substitutions",
        width, height, summary.total, inventory.total_remaining, substitutions,
    )
    return MosaicResult(
        width=width,
        height=height,
        layout=layout,
        summary=summary,
        inventory=inventory,
        substitutions=substitutions,
    )
