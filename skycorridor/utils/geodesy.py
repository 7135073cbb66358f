"""Mini README: Spherical-earth geodesy helpers.

Structure:
    * EARTH_RADIUS_M - mean earth radius used by every distance calculation.
    * great_circle_distance - haversine distance in metres between two fixes.
    * great_circle_distances - vectorised variant over numpy arrays.

These functions sit on the hot path of the corridor search, so they are
kept free of logging.
"""

from __future__ import annotations

import math

import numpy as np

EARTH_RADIUS_M = 6371000.0


def great_circle_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the haversine distance in metres."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def great_circle_distances(
    lat: float, lon: float, lats: np.ndarray, lons: np.ndarray
) -> np.ndarray:
    """Return haversine distances in metres from one fix to many."""

    phi1 = np.radians(lat)
    phi2 = np.radians(lats)
    d_phi = phi2 - phi1
    d_lambda = np.radians(lons - lon)
    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
