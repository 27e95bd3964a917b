from __future__ import annotations

import numpy as np

from hexmap.config import CoastlineConfig, GeneratorConfig
from hexmap.derive import signed_coast_distance
from hexmap.hexgrid import HexCell, create_hex_grid, hex_distance
from hexmap.metrics import connected_components_metrics
from hexmap.pipeline import generate_world


def test_metrics_count_landmasses() -> None:
    grid = create_hex_grid(8, 8)
    land = np.array([(c.col, c.row) in {(1, 1), (5, 5), (5, 6)} for c in grid], dtype=np.uint8)

    metrics = connected_components_metrics(grid, land)

    assert metrics.num_components == 2
    assert metrics.largest_component_area == 2
    assert metrics.total_land_cells == 3
    assert metrics.largest_land_ratio == 2 / 3
    assert metrics.land_fraction == 3 / 64


def test_metrics_empty_land() -> None:
    grid = create_hex_grid(3, 3)

    metrics = connected_components_metrics(grid, np.zeros(9, dtype=np.uint8))

    assert metrics.num_components == 0
    assert metrics.land_fraction == 0.0


def test_signed_coast_distance_around_lake() -> None:
    grid = create_hex_grid(8, 8)
    lake = HexCell(4, 4)
    land = np.array([(c.col, c.row) != (4, 4) for c in grid], dtype=np.uint8)

    dist = signed_coast_distance(grid, land)

    assert dist.dtype == np.float32
    for i, cell in enumerate(grid):
        if (cell.col, cell.row) == (4, 4):
            assert dist[i] == -1.0
        else:
            assert dist[i] == float(hex_distance(cell, lake))


def test_signed_coast_distance_without_water_is_infinite() -> None:
    grid = create_hex_grid(2, 2)

    dist = signed_coast_distance(grid, np.ones(4, dtype=np.uint8))

    assert np.all(np.isposinf(dist))


def test_sanity_metrics_default_small_world() -> None:
    config = GeneratorConfig(width=40, height=30, coastline=CoastlineConfig(sea_level=0.4))
    world = generate_world("MistyForge", config=config)

    assert world.heightmap.shape == (1200,)
    assert np.isfinite(world.heightmap).all()
    assert 0.0 < world.metrics.land_fraction < 1.0
    assert world.metrics.num_components >= 1
    assert len(world.coastline.rings) >= 1
    assert world.coastline.corner_points.shape == (1200, 6, 2)
    assert np.array_equal(world.land_mask, (world.heightmap >= 0.4).astype(np.uint8))
    assert np.all((world.coast_distance > 0) == world.land_mask.astype(bool))
    assert world.hex_size == config.hex_size
