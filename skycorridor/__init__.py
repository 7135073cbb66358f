"""Mini README: Core package initializer for the SkyCorridor route engine.

SkyCorridor plans collision-aware drone flight corridors over a pre-built
grid of terrain and obstacle samples. This module re-exports the handful of
names most callers need so scripts can stay on the top-level import.
"""

from .configuration import EngineConfig
from .corridor import CorridorGrid, GridPoint, MalformedGridError
from .logging_utils import get_logger
from .route_planning import PlanResult, RoutePlanner, Waypoint, WaypointPhase

__all__ = [
    "CorridorGrid",
    "EngineConfig",
    "GridPoint",
    "MalformedGridError",
    "PlanResult",
    "RoutePlanner",
    "Waypoint",
    "WaypointPhase",
    "get_logger",
]
