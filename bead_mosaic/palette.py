"""Palette configuration and the depletable colour inventory."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import numpy as np

from bead_mosaic.color_utils import weighted_distances
from bead_mosaic.errors import ConfigError, PreconditionViolation

logger = logging.getLogger(__name__)

PALETTE_EXTENSION = ".json"


@dataclass(frozen=True)
class PaletteColor:
    """One palette entry: a named colour with a finite stock."""

    name: str
    r: int
    g: int
    b: int
    remaining: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


# -- Configuration -----------------------------------------------------


def _require_int(entry: Mapping[str, Any], key: str, idx: int) -> int:
    value = entry.get(key)
    # bool is an int subclass; reject it along with floats
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Palette entry {idx}: '{key}' must be an integer, got {value!r}"
        raise ConfigError(msg)
    return value


def parse_palette(data: Any) -> list[PaletteColor]:
    """Validate a decoded palette document.

    Expected shape::

        {"colors": [{"name": "White", "r": 255, "g": 255, "b": 255, "count": 100}, ...]}

    Raises:
        ConfigError: on any structural or range problem.
    """
    if not isinstance(data, Mapping):
        raise ConfigError("Palette document must be a JSON object")
    entries = data.get("colors")
    if not isinstance(entries, list):
        raise ConfigError("Palette document needs a 'colors' list")
    if not entries:
        raise ConfigError("Palette 'colors' list is empty")

    colors: list[PaletteColor] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            msg = f"Palette entry {idx} must be an object"
            raise ConfigError(msg)
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            msg = f"Palette entry {idx}: 'name' must be a non-empty string"
            raise ConfigError(msg)
        channels = [_require_int(entry, key, idx) for key in ("r", "g", "b")]
        for key, value in zip("rgb", channels, strict=True):
            if not 0 <= value <= 255:
                msg = f"Palette entry {idx} ({name}): '{key}'={value} outside 0..255"
                raise ConfigError(msg)
        count = _require_int(entry, "count", idx)
        if count < 0:
            msg = f"Palette entry {idx} ({name}): 'count' must be >= 0, got {count}"
            raise ConfigError(msg)
        colors.append(PaletteColor(name, *channels, remaining=count))
    return colors


def load_palette(path: str | Path) -> list[PaletteColor]:
    """Read and validate a palette JSON file."""
    path = Path(path)
    if path.suffix.lower() != PALETTE_EXTENSION:
        msg = f"Palette file must be a {PALETTE_EXTENSION} file: {path}"
        raise ConfigError(msg)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Could not read palette file {path}: {exc}"
        raise ConfigError(msg) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Palette file {path} is not valid JSON: {exc}"
        raise ConfigError(msg) from exc

    colors = parse_palette(data)
    logger.debug(
        "Loaded %d palette colours (%d pieces) from %s",
        len(colors), sum(c.remaining for c in colors), path,
    )
    return colors


# -- Inventory ---------------------------------------------------------


class PaletteInventory:
    """Mutable stock of every palette entry for a single quantization run.

    Entries are addressed by their position in the palette list. That order
    is also the tie-break priority for :meth:`nearest_available`.
    """

    def __init__(self, colors: Sequence[PaletteColor]) -> None:
        self._colors = list(colors)
        self._rgb = np.array(
            [c.rgb for c in self._colors], dtype=np.uint8,
        ).reshape(-1, 3)
        self._remaining = np.array(
            [c.remaining for c in self._colors], dtype=np.int64,
        )
        self._frozen = False

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, index: int) -> PaletteColor:
        return replace(self._colors[index], remaining=int(self._remaining[index]))

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def total_remaining(self) -> int:
        return int(self._remaining.sum())

    def remaining(self, index: int) -> int:
        return int(self._remaining[index])

    def snapshot(self) -> list[PaletteColor]:
        """Entries with their current stock, in palette order."""
        return [self[i] for i in range(len(self))]

    def depleted(self) -> list[str]:
        """Names of entries with no stock left."""
        return [c.name for c, n in zip(self._colors, self._remaining, strict=True) if n == 0]

    def nearest(self, sample: Sequence[int]) -> int | None:
        """Closest entry ignoring stock (first one wins on ties)."""
        if not self._colors:
            return None
        return int(np.argmin(weighted_distances(self._rgb, sample)))

    def nearest_available(self, sample: Sequence[int]) -> int | None:
        """Index of the closest entry that still has stock.

        Entries with zero stock are never considered. On equal distance the
        entry earlier in the palette list wins. Returns ``None`` when every
        entry is depleted.
        """
        available = self._remaining > 0
        if not available.any():
            return None
        dist = weighted_distances(self._rgb, sample)
        dist[~available] = np.inf
        # argmin returns the first occurrence of the minimum
        return int(np.argmin(dist))

    def decrement(self, index: int) -> None:
        """Consume one piece of entry *index*."""
        if self._frozen:
            msg = "Inventory is frozen; the quantization run has finished"
            raise PreconditionViolation(msg)
        if self._remaining[index] <= 0:
            msg = f"Cannot decrement '{self._colors[index].name}' (index {index}): no stock left"
            raise PreconditionViolation(msg)
        self._remaining[index] -= 1

    def freeze(self) -> None:
        """Make the inventory read-only once its run is over."""
        self._frozen = True


def build_inventory(colors: Sequence[PaletteColor]) -> PaletteInventory:
    """Create a fresh inventory owned by one quantization run."""
    inventory = PaletteInventory(colors)
    logger.debug(
        "Inventory: %d colours, %d pieces", len(inventory), inventory.total_remaining,
    )
    return inventory
