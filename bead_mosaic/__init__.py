"""
Bead Mosaic
===========

Convert a picture into a fixed-size mosaic using only the pieces you
actually own. Each palette colour has a finite stock; every cell gets the
perceptually closest colour that is still available, visiting cells in a
random order so shortages are spread over the whole picture.
"""

__version__ = "1.0.0"

from bead_mosaic.config import MosaicConfig
from bead_mosaic.errors import (
    ConfigError,
    ImageError,
    InventoryExhausted,
    MosaicError,
    PreconditionViolation,
)
from bead_mosaic.grid import Assignment, GridCell
from bead_mosaic.image_io import load_and_resize, sample_grid, save_upscaled
from bead_mosaic.layout import cell_at, layout_to_array, sort_layout
from bead_mosaic.palette import (
    PaletteColor,
    PaletteInventory,
    build_inventory,
    load_palette,
)
from bead_mosaic.pipeline import MosaicResult, generate_mosaic
from bead_mosaic.quantizer import quantize
from bead_mosaic.report import UsageSummary, format_report, summarize

__all__ = [
    "Assignment",
    "ConfigError",
    "GridCell",
    "ImageError",
    "InventoryExhausted",
    "MosaicConfig",
    "MosaicError",
    "MosaicResult",
    "PaletteColor",
    "PaletteInventory",
    "PreconditionViolation",
    "UsageSummary",
    "build_inventory",
    "cell_at",
    "format_report",
    "generate_mosaic",
    "layout_to_array",
    "load_and_resize",
    "load_palette",
    "quantize",
    "sample_grid",
    "save_upscaled",
    "sort_layout",
    "summarize",
]
