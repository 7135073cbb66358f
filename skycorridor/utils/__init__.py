"""Mini README: Utility helpers for SkyCorridor.

Holds the spherical-earth distance helpers used by the route engine and
the GeoJSON exporter used by the service and CLI.
"""

from .geodesy import EARTH_RADIUS_M, great_circle_distance, great_circle_distances
from .geojson import waypoints_to_geojson

__all__ = [
    "EARTH_RADIUS_M",
    "great_circle_distance",
    "great_circle_distances",
    "waypoints_to_geojson",
]
