"""Error kinds raised by the mosaic pipeline.

Every failure aborts the run: a mosaic is either complete or not produced.
"""

from __future__ import annotations

from collections.abc import Sequence


class MosaicError(Exception):
    """Base class for all mosaic failures."""


class ConfigError(MosaicError):
    """Palette configuration is missing, malformed or empty."""


class ImageError(MosaicError):
    """Source image could not be read or decoded."""


class InventoryExhausted(MosaicError):
    """No palette entry has stock left for a cell that still needs one."""

    def __init__(
        self,
        cells_assigned: int,
        cells_total: int,
        depleted: Sequence[str] = (),
    ) -> None:
        self.cells_assigned = cells_assigned
        self.cells_total = cells_total
        self.depleted = list(depleted)
        msg = (
            f"Inventory exhausted after {cells_assigned} of {cells_total} cells"
        )
        if self.depleted:
            msg += f"; depleted colours: {', '.join(self.depleted)}"
        super().__init__(msg)


class PreconditionViolation(MosaicError, RuntimeError):
    """Internal invariant breach, e.g. depleting an entry with no stock."""
