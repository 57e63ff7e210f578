"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MosaicConfig:
    """All tuneable parameters for a mosaic run.

    Attributes:
        grid_width:      Number of cells per row (independent of the image).
        grid_height:     Number of rows (independent of the image).
        seed:            Seed for the cell visiting order (None = fresh each run).
        pixel_upscale:   Each cell becomes n x n pixels in the output image.
        grid_gap:        Background pixels left between rendered cells.
        output_format:   Image format for saved files.
        save_target:     Persist the down-sampled target for comparison.
        save_comparison: Generate a side-by-side comparison image.
        output_dir:      Folder for results.
    """

    # Grid
    grid_width: int = 48
    grid_height: int = 48

    # Traversal
    seed: int | None = None

    # Output
    pixel_upscale: int = 12
    grid_gap: int = 1
    output_format: str = "png"
    save_target: bool = True
    save_comparison: bool = True

    # Paths
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif"}
    )

    @property
    def num_cells(self) -> int:
        return self.grid_width * self.grid_height
