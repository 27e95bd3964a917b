"""Rectangular flat-topped hex grid in odd-column offset coordinates.

Cells are addressed by offset ``(col, row)``; odd columns sit half a row
lower. Axial ``(q, r)`` coordinates are derived with ``q = col`` and
``r = row - floor(col / 2)``.

Cells are stored column-major: cell ``(col, row)`` has index
``col * height + row``. Every array produced from a grid (heightmap, land
mask, corner listings) uses the same ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

SQRT3 = math.sqrt(3.0)

# Axial directions ordered by angle 30 + 60 * d (pixel space, y down).
# Neighbor d lies across the side between corners d and d + 1.
AXIAL_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
)

_CORNER_ANGLES = np.deg2rad(np.arange(6, dtype=np.float64) * 60.0)
_CORNER_UNIT = np.stack((np.cos(_CORNER_ANGLES), np.sin(_CORNER_ANGLES)), axis=-1)


@dataclass(frozen=True)
class HexCell:
    """One grid cell. `is_land` stays None until the grid is classified."""

    col: int
    row: int
    is_land: bool | None = None

    @property
    def q(self) -> int:
        return self.col

    @property
    def r(self) -> int:
        return self.row - (self.col >> 1)


@dataclass(frozen=True)
class HexGrid:
    """Immutable W x H collection of cells in column-major order."""

    width: int
    height: int
    cells: tuple[HexCell, ...]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __getitem__(self, index: int) -> HexCell:
        return self.cells[index]

    def index_of(self, col: int, row: int) -> int:
        if not in_bounds(col, row, self.width, self.height):
            raise IndexError(f"cell ({col}, {row}) is outside a {self.width}x{self.height} grid")
        return col * self.height + row

    def cell_at(self, col: int, row: int) -> HexCell:
        return self.cells[self.index_of(col, row)]

    def neighbors(self, cell: HexCell) -> list[HexCell]:
        return [self.cell_at(n.col, n.row) for n in neighbors(cell, self.width, self.height)]


def create_hex_grid(width: int, height: int) -> HexGrid:
    """Create a W x H grid. A zero dimension gives an empty grid."""

    if width < 0 or height < 0:
        raise ValueError(f"width and height must be non-negative, got {width}x{height}")
    cells = tuple(HexCell(col, row) for col in range(width) for row in range(height))
    return HexGrid(width, height, cells)


def in_bounds(col: int, row: int, width: int, height: int) -> bool:
    return 0 <= col < width and 0 <= row < height


def offset_to_axial(col: int, row: int) -> tuple[int, int]:
    return col, row - (col >> 1)


def axial_to_offset(q: int, r: int) -> tuple[int, int]:
    return q, r + (q >> 1)


def neighbors(cell: HexCell, width: int, height: int) -> list[HexCell]:
    """Return the in-bounds neighbors of `cell` in direction order.

    Off-grid directions are omitted; the border does not wrap.
    """

    q, r = offset_to_axial(cell.col, cell.row)
    result = []
    for dq, dr in AXIAL_DIRECTIONS:
        col, row = axial_to_offset(q + dq, r + dr)
        if in_bounds(col, row, width, height):
            result.append(HexCell(col, row))
    return result


def neighbor_table(grid: HexGrid) -> np.ndarray:
    """Return an (N, 6) table of neighbor indices, -1 where off-grid."""

    n = len(grid)
    table = np.full((n, 6), -1, dtype=np.int64)
    if n == 0:
        return table

    cols = np.repeat(np.arange(grid.width, dtype=np.int64), grid.height)
    rows = np.tile(np.arange(grid.height, dtype=np.int64), grid.width)
    q = cols
    r = rows - (cols >> 1)
    for d, (dq, dr) in enumerate(AXIAL_DIRECTIONS):
        ncol = q + dq
        nrow = (r + dr) + (ncol >> 1)
        valid = (ncol >= 0) & (ncol < grid.width) & (nrow >= 0) & (nrow < grid.height)
        table[valid, d] = ncol[valid] * grid.height + nrow[valid]
    return table


def center_pixel(cell: HexCell, hex_size: float) -> tuple[float, float]:
    """Project a cell center to pixel space (flat-topped tiling)."""

    x = 1.5 * hex_size * cell.col
    y = SQRT3 * hex_size * (cell.row + 0.5 * (cell.col & 1))
    return x, y


def center_pixels(grid: HexGrid, hex_size: float) -> np.ndarray:
    """Vectorized `center_pixel` for every cell; shape (N, 2)."""

    cols = np.repeat(np.arange(grid.width, dtype=np.float64), grid.height)
    rows = np.tile(np.arange(grid.height, dtype=np.float64), grid.width)
    x = 1.5 * hex_size * cols
    y = SQRT3 * hex_size * (rows + 0.5 * (cols % 2.0))
    return np.stack((x, y), axis=-1)


def corners(cell: HexCell, hex_size: float) -> list[tuple[float, float]]:
    """Return the six corners of the hexagon at angles 60 * i degrees."""

    cx, cy = center_pixel(cell, hex_size)
    return [
        (cx + hex_size * math.cos(math.radians(60 * i)), cy + hex_size * math.sin(math.radians(60 * i)))
        for i in range(6)
    ]


def corner_points(grid: HexGrid, hex_size: float) -> np.ndarray:
    """Vectorized `corners` for every cell; shape (N, 6, 2)."""

    centers = center_pixels(grid, hex_size)
    return centers[:, None, :] + hex_size * _CORNER_UNIT[None, :, :]


def hex_area(hex_size: float) -> float:
    return 1.5 * SQRT3 * hex_size * hex_size


def hex_distance(a: HexCell, b: HexCell) -> int:
    """Number of hex steps between two cells."""

    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def axial_round(q: float, r: float) -> tuple[int, int]:
    """Round fractional axial coordinates to the nearest hex."""

    s = -q - r
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs
    return int(rq), int(rr)


def pixel_to_offset(x: float, y: float, hex_size: float) -> tuple[int, int]:
    """Invert `center_pixel`: return the offset cell containing (x, y)."""

    if hex_size <= 0:
        raise ValueError("hex_size must be positive")
    q = (2.0 / 3.0 * x) / hex_size
    r = (-1.0 / 3.0 * x + SQRT3 / 3.0 * y) / hex_size
    return axial_to_offset(*axial_round(q, r))


def grid_bounds(width: int, height: int, hex_size: float) -> tuple[float, float, float, float]:
    """Pixel extent (min_x, max_x, min_y, max_y) of the cell centers."""

    if width <= 0 or height <= 0:
        return 0.0, 0.0, 0.0, 0.0
    max_x = 1.5 * hex_size * (width - 1)
    max_y = SQRT3 * hex_size * ((height - 1) + (0.5 if width > 1 else 0.0))
    return 0.0, max_x, 0.0, max_y
