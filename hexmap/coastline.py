"""Land/water classification and coastline ring extraction on a hex grid.

Rings are walked along land-cell sides. Side ``d`` of a cell runs from its
corner ``d`` to corner ``d + 1`` and faces neighbor ``d``; walking sides in
that direction keeps land on the clockwise side, so the outer boundary of
a landmass has positive shoelace area (clockwise) and the boundary of a lake
inside land has negative area (counter-clockwise).

Cells beyond the grid count as water while walking. A coastline that runs
into the grid edge therefore closes along the border sides of the land it
encloses. Border sides are walked but are not boundary edges, and a loop of
border sides alone is never started.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
import logging

import numpy as np

from hexmap.config import CoastlineConfig
from hexmap.geometry import chaikin_smooth, contains_point, signed_area, simplify_ring
from hexmap.hexgrid import HexCell, HexGrid, corner_points, hex_area, neighbor_table

logger = logging.getLogger(__name__)

CLOCKWISE = "clockwise"
COUNTERCLOCKWISE = "counterclockwise"


@dataclass(frozen=True)
class BoundaryEdge:
    """Side shared by a land cell and an in-grid water neighbor."""

    land_index: int
    water_index: int
    direction: int
    start: tuple[float, float]
    end: tuple[float, float]


@dataclass(frozen=True)
class Ring:
    """One closed coastline loop."""

    points: np.ndarray
    edges: tuple[tuple[int, int], ...]
    signed_area: float
    smoothed: np.ndarray
    parent: int | None = None
    depth: int = 0

    @property
    def area(self) -> float:
        return abs(self.signed_area)

    @property
    def orientation(self) -> str:
        return CLOCKWISE if self.signed_area > 0 else COUNTERCLOCKWISE

    @property
    def is_land(self) -> bool:
        """True when land is the ring's interior."""
        return self.signed_area > 0


@dataclass(frozen=True)
class CoastlineResult:
    """Classification, boundary edges and rings derived from one heightmap."""

    land_mask: np.ndarray
    cells: tuple[HexCell, ...]
    boundary_edges: tuple[BoundaryEdge, ...]
    rings: tuple[Ring, ...]
    corner_points: np.ndarray


def classify_land(heightmap: np.ndarray, sea_level: float) -> np.ndarray:
    """Return the 0/1 land mask: land iff elevation >= sea level."""

    return (np.asarray(heightmap) >= sea_level).astype(np.uint8)


def open_sides(land: np.ndarray, table: np.ndarray) -> np.ndarray:
    """(N, 6) bool: land-cell sides facing water or the grid edge."""

    land_b = np.asarray(land).astype(bool)
    off_grid = table < 0
    neighbor_land = np.where(off_grid, False, land_b[np.maximum(table, 0)])
    return land_b[:, None] & ~neighbor_land


def coast_sides(land: np.ndarray, table: np.ndarray) -> np.ndarray:
    """(N, 6) bool: land-cell sides facing an in-grid water cell."""

    land_b = np.asarray(land).astype(bool)
    on_grid = table >= 0
    neighbor_water = np.where(on_grid, ~land_b[np.maximum(table, 0)], False)
    return land_b[:, None] & neighbor_water


def find_boundary_edges(
    grid: HexGrid,
    land_mask: np.ndarray,
    hex_size: float,
    *,
    table: np.ndarray | None = None,
    corners: np.ndarray | None = None,
) -> tuple[BoundaryEdge, ...]:
    """All land/water adjacencies, each once, in cell then direction order."""

    if table is None:
        table = neighbor_table(grid)
    if corners is None:
        corners = corner_points(grid, hex_size)

    coast = coast_sides(land_mask, table)
    edges = []
    for cell_index, direction in zip(*np.nonzero(coast)):
        i = int(cell_index)
        d = int(direction)
        start = corners[i, d]
        end = corners[i, (d + 1) % 6]
        edges.append(
            BoundaryEdge(
                land_index=i,
                water_index=int(table[i, d]),
                direction=d,
                start=(float(start[0]), float(start[1])),
                end=(float(end[0]), float(end[1])),
            )
        )
    return tuple(edges)


def trace_rings(
    land_mask: np.ndarray,
    table: np.ndarray,
    corners: np.ndarray,
) -> list[tuple[np.ndarray, tuple[tuple[int, int], ...]]]:
    """Walk every coastline loop once.

    Returns (points, edges) per loop in discovery order. Every boundary edge
    appears in exactly one loop.
    """

    land_b = np.asarray(land_mask).astype(bool)
    walkable = open_sides(land_b, table)
    coast = coast_sides(land_b, table)
    used = np.zeros_like(walkable)
    budget = int(walkable.sum())
    walked = 0

    loops = []
    for start_cell, start_dir in zip(*np.nonzero(coast)):
        start = (int(start_cell), int(start_dir))
        if used[start]:
            continue

        edges = []
        cell, d = start
        while True:
            if used[cell, d] or not walkable[cell, d]:
                raise RuntimeError(f"coastline walk reached an invalid side {(cell, d)}")
            used[cell, d] = True
            edges.append((cell, d))
            walked += 1
            if walked > budget:
                raise RuntimeError("coastline walk exceeded the number of open sides")

            nxt = (d + 1) % 6
            turn_cell = int(table[cell, nxt])
            if turn_cell >= 0 and land_b[turn_cell]:
                cell, d = turn_cell, (d + 5) % 6
            else:
                d = nxt
            if (cell, d) == start:
                break

        cells = np.fromiter((e[0] for e in edges), dtype=np.int64, count=len(edges))
        dirs = np.fromiter((e[1] for e in edges), dtype=np.int64, count=len(edges))
        loops.append((corners[cells, dirs].copy(), tuple(edges)))
    return loops


def extract_coastline(
    grid: HexGrid,
    heightmap: np.ndarray,
    sea_level: float,
    hex_size: float,
    *,
    config: CoastlineConfig | None = None,
) -> CoastlineResult:
    """Classify cells and extract oriented, nested coastline rings.

    `hex_size` must match the size used to draw the grid; the same value is
    used for boundary-edge corners, ring points and the corner listing.
    `config.sea_level` is not consulted here; `sea_level` is authoritative.
    """

    cfg = config or CoastlineConfig()
    heights = np.asarray(heightmap)
    if heights.ndim != 1 or heights.shape[0] != len(grid):
        raise ValueError(f"heightmap length {heights.shape} does not match grid of {len(grid)} cells")
    if hex_size <= 0:
        raise ValueError("hex_size must be positive")
    if cfg.smoothing_iterations < 0:
        raise ValueError("smoothing_iterations must be >= 0")
    if cfg.simplify_tolerance < 0:
        raise ValueError("simplify_tolerance must be >= 0")
    if not 0.0 <= sea_level <= 1.0:
        logger.warning("sea level %r is outside the normalized [0, 1] elevation range", sea_level)

    land_mask = classify_land(heights, sea_level)
    cells = tuple(
        dataclasses.replace(cell, is_land=bool(flag)) for cell, flag in zip(grid.cells, land_mask)
    )
    corners = corner_points(grid, hex_size)
    if len(grid) == 0:
        return CoastlineResult(land_mask, cells, (), (), corners)

    table = neighbor_table(grid)
    boundary = find_boundary_edges(grid, land_mask, hex_size, table=table, corners=corners)

    min_area = cfg.min_ring_area_tiles * hex_area(hex_size)
    candidates = []
    dropped = 0
    for points, edges in trace_rings(land_mask, table, corners):
        area = signed_area(points)
        if abs(area) < min_area:
            dropped += 1
            continue
        candidates.append((points, edges, area))
    candidates.sort(key=lambda item: abs(item[2]), reverse=True)

    rings = _nest(
        [
            Ring(
                points=points,
                edges=edges,
                signed_area=area,
                smoothed=simplify_ring(
                    chaikin_smooth(points, cfg.smoothing_iterations),
                    cfg.simplify_tolerance,
                ),
            )
            for points, edges, area in candidates
        ]
    )

    logger.debug(
        "coastline: %d land cells, %d boundary edges, %d rings (%d below %.2f tiles dropped)",
        int(land_mask.sum()),
        len(boundary),
        len(rings),
        dropped,
        cfg.min_ring_area_tiles,
    )
    return CoastlineResult(land_mask, cells, boundary, tuple(rings), corners)


def _nest(rings: list[Ring]) -> list[Ring]:
    # Rings are sorted by descending area and never share a vertex, so any
    # vertex of a ring decides containment. Scanning backwards finds the
    # smallest container first.
    parents: list[int | None] = []
    depths: list[int] = []
    for i, ring in enumerate(rings):
        x, y = ring.points[0]
        parent = None
        for j in range(i - 1, -1, -1):
            if rings[j].area > ring.area and contains_point(rings[j].points, float(x), float(y)):
                parent = j
                break
        parents.append(parent)
        depths.append(0 if parent is None else depths[parent] + 1)
    return [
        dataclasses.replace(ring, parent=parent, depth=depth)
        for ring, parent, depth in zip(rings, parents, depths)
    ]
