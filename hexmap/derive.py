"""Derived per-cell fields from a classified grid."""

from __future__ import annotations

import numpy as np
from scipy.sparse.csgraph import dijkstra

from hexmap.hexgrid import HexGrid
from hexmap.metrics import adjacency_matrix


def signed_coast_distance(grid: HexGrid, land_mask: np.ndarray) -> np.ndarray:
    """Hex steps to the opposite class: positive on land, negative on water.

    A land cell next to water is 1, a water cell next to land is -1. When the
    grid has no cell of the opposite class the distance is infinite.
    """

    mask_b = np.asarray(land_mask).astype(bool)
    if mask_b.shape != (len(grid),):
        raise ValueError("land_mask must be index-aligned with the grid")

    out = np.zeros(len(grid), dtype=np.float32)
    if len(grid) == 0:
        return out

    adjacency = adjacency_matrix(grid)
    to_water = _nearest(adjacency, np.flatnonzero(~mask_b), len(grid))
    to_land = _nearest(adjacency, np.flatnonzero(mask_b), len(grid))
    out[mask_b] = to_water[mask_b]
    out[~mask_b] = -to_land[~mask_b]
    return out


def _nearest(adjacency, sources: np.ndarray, n: int) -> np.ndarray:
    if sources.size == 0:
        return np.full(n, np.inf, dtype=np.float32)
    dist = dijkstra(adjacency, directed=False, indices=sources, unweighted=True, min_only=True)
    return np.asarray(dist, dtype=np.float32)
