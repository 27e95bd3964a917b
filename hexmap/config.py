"""Configuration models for hex map generation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64
DEFAULT_HEX_SIZE = 20.0

FALLOFF_CIRCULAR = "circular"
FALLOFF_NONE = "none"
GRADIENT_FALLOFFS = (FALLOFF_CIRCULAR, FALLOFF_NONE)

CURVE_LINEAR = "linear"
CURVE_SMOOTH = "smooth"
CURVE_POWER = "power"
FALLOFF_CURVES = (CURVE_LINEAR, CURVE_SMOOTH, CURVE_POWER)


@dataclass(frozen=True)
class HeightmapConfig:
    """Controls multi-octave noise synthesis and radial shaping."""

    octaves: int = 6
    persistence: float = 0.5
    lacunarity: float = 2.0
    frequency: float = 1.0
    amplitude: float = 1.0
    gradient_falloff: str = FALLOFF_CIRCULAR
    falloff_curve: str = CURVE_LINEAR


@dataclass(frozen=True)
class CoastlineConfig:
    """Controls land classification and ring post-processing."""

    sea_level: float = 0.5
    smoothing_iterations: int = 2
    simplify_tolerance: float = 0.0
    min_ring_area_tiles: float = 0.5


@dataclass(frozen=True)
class GeneratorConfig:
    """Primary generation configuration."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    hex_size: float = DEFAULT_HEX_SIZE
    heightmap: HeightmapConfig = field(default_factory=HeightmapConfig)
    coastline: CoastlineConfig = field(default_factory=CoastlineConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
