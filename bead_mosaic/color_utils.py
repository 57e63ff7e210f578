"""Luma-weighted colour distance."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

# Approximate human luminance sensitivity per channel (R, G, B).
LUMA_WEIGHTS = np.array([0.3, 0.59, 0.11], dtype=np.float64)


def weighted_distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Squared luma-weighted distance between two RGB colours."""
    diff = (np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)) * LUMA_WEIGHTS
    return float(np.sum(diff ** 2))


def weighted_distances(palette: np.ndarray, sample: Sequence[int]) -> np.ndarray:
    """Distance from every palette row to one sample colour.

    Args:
        palette: (N, 3) RGB array.
        sample:  (r, g, b).

    Returns:
        (N,) float64 array, ``(0.3*dr)**2 + (0.59*dg)**2 + (0.11*db)**2``.
    """
    diff = (
        palette.astype(np.float64) - np.asarray(sample, dtype=np.float64)
    ) * LUMA_WEIGHTS
    return np.sum(diff ** 2, axis=1)


def mean_weighted_error(target: np.ndarray, mosaic: np.ndarray) -> float:
    """Mean per-cell weighted distance between two equally shaped RGB arrays."""
    t = target.reshape(-1, 3).astype(np.float64)
    m = mosaic.reshape(-1, 3).astype(np.float64)
    return float(np.mean(np.sum(((m - t) * LUMA_WEIGHTS) ** 2, axis=1)))
