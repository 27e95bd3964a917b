from __future__ import annotations

import numpy as np
import pytest

from hexmap.geometry import chaikin_smooth, contains_point, signed_area, simplify_ring

SQUARE = np.array([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])


def test_signed_area_is_positive_when_clockwise_on_screen() -> None:
    assert signed_area(SQUARE) == pytest.approx(1.0)
    assert signed_area(SQUARE[::-1]) == pytest.approx(-1.0)
    assert signed_area(SQUARE[:2]) == 0.0


def test_chaikin_cuts_corners() -> None:
    once = chaikin_smooth(SQUARE, 1)

    assert once.shape == (8, 2)
    assert np.allclose(once[0], (0.25, 0.0))
    assert np.allclose(once[1], (0.75, 0.0))
    assert 0.0 < signed_area(once) < 1.0
    assert np.array_equal(chaikin_smooth(SQUARE, 0), SQUARE)

    with pytest.raises(ValueError):
        chaikin_smooth(SQUARE, -1)


def test_simplify_drops_collinear_points() -> None:
    ring = np.array(
        [(0.0, 0.0), (0.5, 0.0), (1.0, 0.0), (1.0, 0.5), (1.0, 1.0), (0.5, 1.0), (0.0, 1.0), (0.0, 0.5)]
    )

    simplified = simplify_ring(ring, 0.01)

    assert len(simplified) == 4
    assert signed_area(simplified) == pytest.approx(1.0)
    assert np.array_equal(simplify_ring(ring, 0.0), ring)


def test_contains_point() -> None:
    assert contains_point(SQUARE, 0.5, 0.5)
    assert not contains_point(SQUARE, 1.5, 0.5)
