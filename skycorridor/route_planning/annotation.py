"""Mini README: Turn a smoothed node path into a flight-ready waypoint list.

Structure:
    * WaypointPhase - vertical-flight-regime label of a waypoint.
    * Waypoint - dataclass capturing position, altitude and phase.
    * max_cruise_altitude - highest node altitude on a path.
    * annotate_waypoints - emit ground, ascent, cruise and descent waypoints.

Every leg between two user stops is flown as: ground stop, vertical ascent,
level cruise at the route-wide maximum cruise altitude, vertical descent
over the next stop. Flying the whole route at the single highest altitude
it demands is intentional.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..corridor import CorridorGrid, GridPoint
from ..logging_utils import get_logger
from ..utils.geodesy import great_circle_distance
from .search import SearchNode

LOGGER = get_logger(__name__)

MAX_SEGMENT_DISTANCE_M = 15.0


class WaypointPhase(str, Enum):
    """Vertical-flight-regime labels."""

    GROUND_START = "GROUND_START"
    GROUND_WAYPOINT = "GROUND_WAYPOINT"
    GROUND_END = "GROUND_END"
    VERTICAL_ASCENT = "VERTICAL_ASCENT"
    VERTICAL_DESCENT = "VERTICAL_DESCENT"
    CRUISE = "CRUISE"
    CRUISE_CORNER = "CRUISE_CORNER"
    CRUISE_INTERMEDIATE = "CRUISE_INTERMEDIATE"
    CRUISE_DETOUR = "CRUISE_DETOUR"

    @property
    def is_ground(self) -> bool:
        return self in _GROUND_PHASES

    @property
    def is_vertical(self) -> bool:
        return self in (WaypointPhase.VERTICAL_ASCENT, WaypointPhase.VERTICAL_DESCENT)


_GROUND_PHASES = frozenset(
    {WaypointPhase.GROUND_START, WaypointPhase.GROUND_WAYPOINT, WaypointPhase.GROUND_END}
)


@dataclass(slots=True)
class Waypoint:
    """Single navigation point of the final flight plan."""

    lat: float
    lon: float
    alt: float
    phase: WaypointPhase
    prio: int = 1
    obstacle_height: Optional[float] = None

    @classmethod
    def at(cls, point: GridPoint, alt: float, phase: WaypointPhase) -> "Waypoint":
        return cls(lat=point.lat, lon=point.lon, alt=alt, phase=phase)

    def as_dict(self) -> Dict[str, object]:
        """Export the waypoint using the camelCase wire keys."""

        payload: Dict[str, object] = {
            "lat": self.lat,
            "lon": self.lon,
            "alt": self.alt,
            "phase": self.phase.value,
            "prio": self.prio,
        }
        if self.obstacle_height is not None:
            payload["obstacleHeight"] = self.obstacle_height
        return payload


def max_cruise_altitude(nodes: Sequence[SearchNode]) -> float:
    """Return the highest cruise altitude reached by any node (0 for empty paths)."""

    return max((node.alt for node in nodes), default=0.0)


def _ground_phase(index: int, count: int) -> WaypointPhase:
    if index == 0:
        return WaypointPhase.GROUND_START
    if index == count - 1:
        return WaypointPhase.GROUND_END
    return WaypointPhase.GROUND_WAYPOINT


def annotate_waypoints(
    smoothed: Sequence[SearchNode], grid: CorridorGrid
) -> List[Waypoint]:
    """Build the phased waypoint list for every leg between user stops."""

    cruise_alt = max_cruise_altitude(smoothed)
    stops = grid.waypoint_indices
    center = grid.center_lane
    waypoints: List[Waypoint] = []
    LOGGER.debug("Annotating %s smoothed nodes over stops %s", len(smoothed), list(stops))

    for stop_number, step_index in enumerate(stops):
        stop_point = grid.point(center, step_index)
        waypoints.append(
            Waypoint.at(stop_point, stop_point.terrain_height, _ground_phase(stop_number, len(stops)))
        )
        if stop_number == len(stops) - 1:
            break

        waypoints.append(Waypoint.at(stop_point, cruise_alt, WaypointPhase.VERTICAL_ASCENT))
        next_index = stops[stop_number + 1]
        waypoints.extend(_cruise_leg(smoothed, grid, step_index, next_index, cruise_alt))
        waypoints.append(
            Waypoint.at(grid.point(center, next_index), cruise_alt, WaypointPhase.VERTICAL_DESCENT)
        )

    LOGGER.info("Annotated %s waypoints at cruise altitude %.1fm", len(waypoints), cruise_alt)
    return waypoints


def _cruise_leg(
    smoothed: Sequence[SearchNode],
    grid: CorridorGrid,
    step_index: int,
    next_index: int,
    cruise_alt: float,
) -> List[Waypoint]:
    """Emit corner, cruise and intermediate waypoints strictly between two stops."""

    leg: List[Waypoint] = []
    last_lane = grid.center_lane
    last_emitted: Optional[SearchNode] = None
    previous: Optional[SearchNode] = None

    for node in smoothed:
        if not step_index < node.step < next_index:
            continue
        point = grid.point(node.lane, node.step)

        if node.lane != last_lane:
            if previous is not None:
                leg.append(
                    Waypoint.at(
                        grid.point(previous.lane, previous.step),
                        cruise_alt,
                        WaypointPhase.CRUISE_CORNER,
                    )
                )
            leg.append(Waypoint.at(point, cruise_alt, WaypointPhase.CRUISE))
            last_lane = node.lane
            last_emitted = node
        elif last_emitted is not None:
            anchor = grid.point(last_emitted.lane, last_emitted.step)
            distance = great_circle_distance(anchor.lat, anchor.lon, point.lat, point.lon)
            if distance > MAX_SEGMENT_DISTANCE_M:
                leg.append(Waypoint.at(point, cruise_alt, WaypointPhase.CRUISE_INTERMEDIATE))
                last_emitted = node

        previous = node

    return leg
