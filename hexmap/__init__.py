"""Hex-grid heightmap and coastline generation package."""

from .config import DEFAULT_HEIGHT, DEFAULT_HEX_SIZE, DEFAULT_WIDTH, GeneratorConfig

__all__ = ["DEFAULT_WIDTH", "DEFAULT_HEIGHT", "DEFAULT_HEX_SIZE", "GeneratorConfig"]
