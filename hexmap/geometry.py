"""Planar helpers for closed rings of pixel-space points.

Rings are (n, 2) float arrays whose last point connects back to the first.
Pixel space has y pointing down, so a positive shoelace area is a clockwise
ring on screen.
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import LineString, Point, Polygon


def signed_area(points: np.ndarray) -> float:
    """Shoelace area of a closed ring; positive when clockwise on screen."""

    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def chaikin_smooth(points: np.ndarray, iterations: int) -> np.ndarray:
    """Corner-cut a closed ring `iterations` times.

    Each segment (p0, p1) is replaced by the points at 25% and 75% along it,
    doubling the point count per pass.
    """

    if iterations < 0:
        raise ValueError("iterations must be >= 0")
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 3:
        return pts.copy()
    for _ in range(iterations):
        nxt = np.roll(pts, -1, axis=0)
        q = 0.75 * pts + 0.25 * nxt
        r = 0.25 * pts + 0.75 * nxt
        pts = np.empty((2 * len(q), 2), dtype=np.float64)
        pts[0::2] = q
        pts[1::2] = r
    return pts


def simplify_ring(points: np.ndarray, tolerance: float) -> np.ndarray:
    """Douglas-Peucker simplification of a closed ring.

    A tolerance of zero returns the ring unchanged. A result with fewer than
    three distinct points falls back to the input.
    """

    if tolerance < 0:
        raise ValueError("tolerance must be >= 0")
    pts = np.asarray(points, dtype=np.float64)
    if tolerance == 0 or len(pts) < 4:
        return pts.copy()

    closed = np.vstack((pts, pts[:1]))
    simplified = LineString(closed).simplify(tolerance, preserve_topology=True)
    coords = np.asarray(simplified.coords, dtype=np.float64)[:-1]
    if len(coords) < 3:
        return pts.copy()
    return coords


def ring_polygon(points: np.ndarray) -> Polygon:
    return Polygon(np.asarray(points, dtype=np.float64))


def contains_point(points: np.ndarray, x: float, y: float) -> bool:
    """True if (x, y) lies strictly inside the closed ring."""

    return bool(ring_polygon(points).contains(Point(x, y)))
