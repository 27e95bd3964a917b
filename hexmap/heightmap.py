"""Seeded per-cell elevation for a hex grid."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from hexmap.config import (
    CURVE_LINEAR,
    CURVE_POWER,
    CURVE_SMOOTH,
    FALLOFF_CIRCULAR,
    FALLOFF_CURVES,
    GRADIENT_FALLOFFS,
    HeightmapConfig,
)
from hexmap.hexgrid import HexGrid, center_pixels, create_hex_grid
from hexmap.noise import NoiseSource, fbm, noise_from_stream
from hexmap.rng import RngStream
from hexmap.seed import parse_seed

logger = logging.getLogger(__name__)

FLAT_FIELD_VALUE = 0.5


@dataclass(frozen=True)
class HeightmapResult:
    """Grid and its normalized elevation, index-aligned with `grid.cells`."""

    grid: HexGrid
    heightmap: np.ndarray
    hex_size: float


def sampling_hex_size(width: int, height: int) -> float:
    """Hex size that fits the whole grid into a unit-ish sampling window."""

    return min(1.0 / width, 1.0 / height) * 2.0


def generate_heightmap(
    seed: str | int,
    width: int,
    height: int,
    *,
    config: HeightmapConfig | None = None,
    noise_source: NoiseSource | None = None,
) -> HeightmapResult:
    """Generate a deterministic [0, 1] heightmap for a W x H hex grid.

    `noise_source` may be injected; by default a simplex source is seeded
    from the "heightmap-noise" fork of the seed's RNG stream.
    """

    cfg = config or HeightmapConfig()
    _validate_config(cfg)

    grid = create_hex_grid(width, height)
    if len(grid) == 0:
        return HeightmapResult(grid, np.zeros(0, dtype=np.float32), 0.0)

    if noise_source is None:
        rng = RngStream(parse_seed(seed).seed_hash)
        noise_source = noise_from_stream(rng.fork("heightmap-noise"))

    hex_size = sampling_hex_size(width, height)
    centers = center_pixels(grid, hex_size)
    nx = centers[:, 0] / (width * hex_size) - 0.5
    ny = centers[:, 1] / (height * hex_size) - 0.5

    values = np.empty(len(grid), dtype=np.float64)
    for i in range(len(grid)):
        values[i] = fbm(
            noise_source,
            float(nx[i]),
            float(ny[i]),
            octaves=cfg.octaves,
            persistence=cfg.persistence,
            lacunarity=cfg.lacunarity,
            frequency=cfg.frequency,
            amplitude=cfg.amplitude,
        )

    if cfg.gradient_falloff == FALLOFF_CIRCULAR:
        values *= radial_falloff(grid, centers, cfg.falloff_curve)

    heightmap = normalize01(values)
    logger.debug(
        "heightmap %dx%d: octaves=%d falloff=%s/%s",
        width,
        height,
        cfg.octaves,
        cfg.gradient_falloff,
        cfg.falloff_curve,
    )
    return HeightmapResult(grid, heightmap, hex_size)


def radial_falloff(grid: HexGrid, centers: np.ndarray, curve: str) -> np.ndarray:
    """Attenuation factor in [0, 1] by pixel distance from the center cell."""

    center_index = grid.index_of(grid.width // 2, grid.height // 2)
    offsets = centers - centers[center_index]
    dist = np.hypot(offsets[:, 0], offsets[:, 1])
    max_dist = float(dist.max())
    if max_dist <= 0.0:
        return np.ones(len(grid), dtype=np.float64)
    d = dist / max_dist

    if curve == CURVE_SMOOTH:
        falloff = 1.0 - (3.0 * d * d - 2.0 * d * d * d)
    elif curve == CURVE_POWER:
        falloff = np.square(1.0 - d)
    elif curve == CURVE_LINEAR:
        falloff = 1.0 - d
    else:
        raise ValueError(f"unknown falloff curve {curve!r}")
    return np.maximum(falloff, 0.0)


def normalize01(values: np.ndarray) -> np.ndarray:
    """Rescale to [0, 1]; a flat field becomes a constant 0.5."""

    if values.size == 0:
        return np.zeros(0, dtype=np.float32)
    lo = float(values.min())
    hi = float(values.max())
    if hi <= lo or not np.isfinite(hi - lo):
        logger.warning("flat elevation field (min=max=%r); using constant %.2f", lo, FLAT_FIELD_VALUE)
        return np.full(values.shape, FLAT_FIELD_VALUE, dtype=np.float32)
    norm = (values - lo) / (hi - lo)
    return np.clip(norm, 0.0, 1.0).astype(np.float32)


def _validate_config(cfg: HeightmapConfig) -> None:
    if cfg.octaves < 0:
        raise ValueError(f"octaves must be >= 0, got {cfg.octaves}")
    if cfg.gradient_falloff not in GRADIENT_FALLOFFS:
        raise ValueError(
            f"gradient_falloff must be one of {GRADIENT_FALLOFFS}, got {cfg.gradient_falloff!r}"
        )
    if cfg.falloff_curve not in FALLOFF_CURVES:
        raise ValueError(f"falloff_curve must be one of {FALLOFF_CURVES}, got {cfg.falloff_curve!r}")
