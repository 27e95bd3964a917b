"""Land coverage and connectivity metrics on the hex adjacency graph."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix
from scipy.sparse.csgraph import connected_components

from hexmap.hexgrid import HexGrid, neighbor_table


@dataclass(frozen=True)
class ConnectivityMetrics:
    """Connected component and coverage summary for a land mask."""

    num_components: int
    largest_component_area: int
    total_land_cells: int
    largest_land_ratio: float
    land_fraction: float


def adjacency_matrix(grid: HexGrid, mask: np.ndarray | None = None) -> csr_matrix:
    """Sparse cell adjacency; with `mask`, only edges between masked cells."""

    table = neighbor_table(grid)
    n = len(grid)
    rows = np.repeat(np.arange(n, dtype=np.int64), 6)
    cols = table.ravel()
    keep = cols >= 0
    if mask is not None:
        mask_b = np.asarray(mask).astype(bool)
        keep &= mask_b[rows] & mask_b[np.maximum(cols, 0)]
    data = np.ones(int(keep.sum()), dtype=np.float64)
    return coo_matrix((data, (rows[keep], cols[keep])), shape=(n, n)).tocsr()


def connected_components_metrics(grid: HexGrid, land_mask: np.ndarray) -> ConnectivityMetrics:
    """Compute connected component statistics for a land mask."""

    mask_b = np.asarray(land_mask).astype(bool)
    if mask_b.shape != (len(grid),):
        raise ValueError("land_mask must be index-aligned with the grid")

    total_cells = len(grid)
    total_land = int(mask_b.sum())
    if total_land == 0:
        return ConnectivityMetrics(0, 0, 0, 0.0, 0.0)

    _, labels = connected_components(adjacency_matrix(grid, mask_b), directed=False)
    sizes = np.bincount(labels[mask_b])
    sizes = sizes[sizes > 0]

    largest = int(sizes.max())
    return ConnectivityMetrics(
        num_components=int(sizes.size),
        largest_component_area=largest,
        total_land_cells=total_land,
        largest_land_ratio=float(largest / total_land),
        land_fraction=float(total_land / total_cells),
    )
