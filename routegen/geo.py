"""Great-circle distance helpers."""

from __future__ import annotations

from math import asin, cos, radians, sin, sqrt

import numpy as np

#: Mean Earth radius in meters.
EARTH_RADIUS_M = 6_371_000.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Return the haversine distance in meters between two points given in degrees.
    https://en.wikipedia.org/wiki/Haversine_formula
    """
    lat1 = radians(lat1)
    lat2 = radians(lat2)
    dlat = lat2 - lat1
    dlon = radians(lon2) - radians(lon1)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # h can drift a hair above 1.0 for antipodal points
    return 2 * EARTH_RADIUS_M * asin(sqrt(min(1.0, h)))


def distance_many(
    lat: float, lon: float, lats: np.ndarray, lons: np.ndarray
) -> np.ndarray:
    """Vectorised :func:`distance` from one point to arrays of points.

    Args:
        lat: Latitude of the reference point in degrees.
        lon: Longitude of the reference point in degrees.
        lats: Latitudes in degrees.
        lons: Longitudes in degrees, same shape as ``lats``.

    Returns:
        Array of distances in meters, one per input point.
    """
    phi1 = np.radians(lat)
    phi2 = np.radians(lats)
    dphi = phi2 - phi1
    dlambda = np.radians(lons) - np.radians(lon)

    h = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.minimum(1.0, h)))
