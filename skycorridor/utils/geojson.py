"""Mini README: GeoJSON export for planned waypoint lists.

The exporter accepts anything exposing ``lat``, ``lon``, ``alt``, ``phase``
and ``prio`` attributes so it stays independent of the route planning
package and can be reused by map overlays.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List


def waypoints_to_geojson(waypoints: Iterable[Any]) -> Dict[str, Any]:
    """Return a FeatureCollection with the flight line and one point per waypoint."""

    features: List[Dict[str, Any]] = []
    coordinates: List[List[float]] = []
    for order, waypoint in enumerate(waypoints):
        position = [float(waypoint.lon), float(waypoint.lat), float(waypoint.alt)]
        coordinates.append(position)
        phase = getattr(waypoint.phase, "value", waypoint.phase)
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": position},
                "properties": {
                    "order": order,
                    "phase": phase,
                    "prio": waypoint.prio,
                    "alt": float(waypoint.alt),
                },
            }
        )

    if len(coordinates) >= 2:
        features.insert(
            0,
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": coordinates},
                "properties": {"kind": "flight_line", "waypoint_count": len(coordinates)},
            },
        )
    return {"type": "FeatureCollection", "features": features}
