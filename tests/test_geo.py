import math

import numpy as np
import pytest

from routegen.geo import EARTH_RADIUS_M, distance, distance_many


def test_zero_distance():
    assert distance(52.5, 13.4, 52.5, 13.4) == 0.0


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_M * math.pi / 180
    assert distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)
    assert distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, abs=1)


def test_symmetric():
    a = (48.8566, 2.3522)
    b = (51.5074, -0.1278)
    assert distance(*a, *b) == pytest.approx(distance(*b, *a))
    # Paris to London
    assert distance(*a, *b) == pytest.approx(343_556, rel=1e-3)


def test_antipodal_points():
    assert distance(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_M)


def test_longitude_shrinks_with_latitude():
    at_equator = distance(0.0, 0.0, 0.0, 1.0)
    at_sixty = distance(60.0, 0.0, 60.0, 1.0)
    assert at_sixty == pytest.approx(at_equator / 2, rel=1e-3)


def test_distance_many_matches_scalar():
    lats = np.array([0.0, 1.0, 52.5, -33.9])
    lons = np.array([0.0, 1.0, 13.4, 151.2])
    out = distance_many(10.0, 20.0, lats, lons)
    assert out.shape == (4,)
    for i in range(4):
        assert out[i] == pytest.approx(distance(10.0, 20.0, lats[i], lons[i]))
