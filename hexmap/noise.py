"""Coherent noise sources used by the heightmap generator."""

from __future__ import annotations

from typing import Protocol

from opensimplex import OpenSimplex

from hexmap.rng import RngStream


class NoiseSource(Protocol):
    """Seeded 2D coherent noise returning values in roughly [-1, 1]."""

    def noise2(self, x: float, y: float) -> float: ...


class SimplexNoise:
    """OpenSimplex-backed noise source with a fixed seed."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._simplex = OpenSimplex(seed=seed)

    def noise2(self, x: float, y: float) -> float:
        return float(self._simplex.noise2(x, y))


def noise_from_stream(rng: RngStream) -> SimplexNoise:
    """Build a simplex noise source seeded from `rng`."""

    return SimplexNoise(rng.integer_seed())


def fbm(
    noise: NoiseSource,
    x: float,
    y: float,
    *,
    octaves: int = 6,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    frequency: float = 1.0,
    amplitude: float = 1.0,
) -> float:
    """Sum `octaves` layers of noise at growing frequency and decaying amplitude.

    The sum is not divided by the total amplitude; callers normalize the
    assembled field as a whole.
    """

    value = 0.0
    amp = amplitude
    freq = frequency
    for _ in range(octaves):
        value += noise.noise2(x * freq, y * freq) * amp
        amp *= persistence
        freq *= lacunarity
    return value
