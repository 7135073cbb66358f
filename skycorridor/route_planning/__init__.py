"""Mini README: Route planning subsystem for corridor flights.

Exports the planner facade and the individual stages (search, smoothing,
annotation, segment validation) so callers can run the full pipeline or
inspect any stage on its own.
"""

from .annotation import Waypoint, WaypointPhase, annotate_waypoints
from .planner import PlanResult, PlanStats, RoutePlanner, estimate_flight_time
from .search import EdgeCost, SearchNode, SearchResult, evaluate_edge, find_path
from .smoothing import is_line_of_sight_clear, smooth_path
from .validation import validate_segments

__all__ = [
    "EdgeCost",
    "PlanResult",
    "PlanStats",
    "RoutePlanner",
    "SearchNode",
    "SearchResult",
    "Waypoint",
    "WaypointPhase",
    "annotate_waypoints",
    "estimate_flight_time",
    "evaluate_edge",
    "find_path",
    "is_line_of_sight_clear",
    "smooth_path",
    "validate_segments",
]
