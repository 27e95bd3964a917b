"""One-shot composition: grid, heightmap, coastline and derived fields."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from hexmap.coastline import CoastlineResult, extract_coastline
from hexmap.config import GeneratorConfig
from hexmap.derive import signed_coast_distance
from hexmap.heightmap import generate_heightmap
from hexmap.hexgrid import HexGrid
from hexmap.metrics import ConnectivityMetrics, connected_components_metrics
from hexmap.noise import NoiseSource
from hexmap.seed import ParsedSeed, parse_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorldResult:
    """Every stage output of one generation run."""

    seed: ParsedSeed
    grid: HexGrid
    heightmap: np.ndarray
    sampling_hex_size: float
    hex_size: float
    sea_level: float
    coastline: CoastlineResult
    coast_distance: np.ndarray
    metrics: ConnectivityMetrics

    @property
    def land_mask(self) -> np.ndarray:
        return self.coastline.land_mask


def generate_world(
    seed: str | int,
    *,
    config: GeneratorConfig | None = None,
    noise_source: NoiseSource | None = None,
) -> WorldResult:
    """Generate a deterministic hex world from `seed`.

    `config.hex_size` is the one size used for every pixel-space output.
    """

    cfg = config or GeneratorConfig()
    parsed = parse_seed(seed)

    height_result = generate_heightmap(
        parsed.canonical,
        cfg.width,
        cfg.height,
        config=cfg.heightmap,
        noise_source=noise_source,
    )
    sea_level = cfg.coastline.sea_level
    coastline = extract_coastline(
        height_result.grid,
        height_result.heightmap,
        sea_level,
        cfg.hex_size,
        config=cfg.coastline,
    )
    metrics = connected_components_metrics(height_result.grid, coastline.land_mask)
    coast_distance = signed_coast_distance(height_result.grid, coastline.land_mask)

    logger.info(
        "world %r %dx%d: land fraction %.3f, %d landmasses, %d rings",
        parsed.canonical,
        cfg.width,
        cfg.height,
        metrics.land_fraction,
        metrics.num_components,
        len(coastline.rings),
    )
    return WorldResult(
        seed=parsed,
        grid=height_result.grid,
        heightmap=height_result.heightmap,
        sampling_hex_size=height_result.hex_size,
        hex_size=cfg.hex_size,
        sea_level=sea_level,
        coastline=coastline,
        coast_distance=coast_distance,
        metrics=metrics,
    )
