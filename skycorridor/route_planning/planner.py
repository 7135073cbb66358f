"""Mini README: Corridor route planner facade.

Structure:
    * PlanStats - altitude summary and flight time estimate of a plan.
    * PlanResult - success flag, waypoints and search diagnostics.
    * estimate_flight_time - climb/cruise/descent timing over waypoints.
    * RoutePlanner - runs search, smoothing, annotation and validation.

The planner holds an immutable ``EngineConfig`` and no other state, so one
instance can serve concurrent requests. Synchronous planning never touches
I/O; ``plan_and_validate`` is the only coroutine and awaits the height
oracle once per cruise segment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..configuration import EngineConfig
from ..corridor import CorridorGrid
from ..height_oracle import HeightOracle
from ..logging_utils import get_logger, log_duration
from ..utils.geodesy import great_circle_distance
from .annotation import Waypoint, annotate_waypoints, max_cruise_altitude
from .search import SearchNode, find_path
from .smoothing import smooth_path
from .validation import DEFAULT_REFERENCE_ALTITUDE_M, validate_segments

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class PlanStats:
    """Altitude summary of a successful plan."""

    max_altitude: float
    max_agl: float
    avg_agl: float
    estimated_flight_time_s: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "maxAltitude": self.max_altitude,
            "maxAGL": self.max_agl,
            "avgAGL": self.avg_agl,
            "estimatedFlightTimeS": self.estimated_flight_time_s,
        }


@dataclass(slots=True)
class PlanResult:
    """Outcome of a planning request."""

    success: bool
    waypoints: List[Waypoint] = field(default_factory=list)
    nodes_visited: int = 0
    total_cost: float = 0.0
    stats: Optional[PlanStats] = None
    raw_path: List[SearchNode] = field(default_factory=list)
    smoothed_path: List[SearchNode] = field(default_factory=list)

    @property
    def optimized_points(self) -> int:
        return len(self.waypoints)

    def as_dict(self) -> Dict[str, Any]:
        """Export the result in the wire shape returned by the service."""

        if not self.success:
            return {"success": False, "waypoints": [], "impossibleSegments": []}
        return {
            "success": True,
            "waypoints": [waypoint.as_dict() for waypoint in self.waypoints],
            "optimizedPoints": self.optimized_points,
            "nodesVisited": self.nodes_visited,
            "totalCost": self.total_cost,
            "stats": self.stats.as_dict() if self.stats else {},
        }


def estimate_flight_time(waypoints: Sequence[Waypoint], config: EngineConfig) -> float:
    """Estimate seconds needed to fly the waypoints in order.

    Horizontal legs use the cruise speed; altitude gained or lost uses the
    climb or descent speed respectively. The two are summed per segment.
    """

    total = 0.0
    for current, following in zip(waypoints, waypoints[1:]):
        horizontal = great_circle_distance(current.lat, current.lon, following.lat, following.lon)
        total += horizontal / config.cruise_speed_mps
        vertical = following.alt - current.alt
        if vertical > 0:
            total += vertical / config.climb_speed_mps
        else:
            total += -vertical / config.descent_speed_mps
    return total


class RoutePlanner:
    """Plan collision-aware corridor routes with an explicit engine config."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        LOGGER.debug("Initialised RoutePlanner with config %s", self.config.as_overrides())

    def plan(self, grid: CorridorGrid) -> PlanResult:
        """Search, smooth and annotate a route through ``grid``."""

        LOGGER.info(
            "Starting A* optimisation over %s lanes x %s steps",
            grid.num_lanes,
            grid.num_steps,
        )
        with log_duration(LOGGER, "Route optimisation"):
            search = find_path(grid, self.config)
            if not search.success:
                return PlanResult(success=False, nodes_visited=search.nodes_visited)

            smoothed = smooth_path(search.path, grid, self.config)
            waypoints = annotate_waypoints(smoothed, grid)

        return PlanResult(
            success=True,
            waypoints=waypoints,
            nodes_visited=search.nodes_visited,
            total_cost=search.total_cost,
            stats=self._stats(grid, smoothed, waypoints),
            raw_path=search.path,
            smoothed_path=smoothed,
        )

    async def plan_and_validate(
        self,
        grid: CorridorGrid,
        oracle: Optional[HeightOracle],
        *,
        reference_altitude: float = DEFAULT_REFERENCE_ALTITUDE_M,
    ) -> PlanResult:
        """Plan a route, then repair cruise segments against ``oracle``."""

        result = self.plan(grid)
        return await self.repair_segments(result, oracle, reference_altitude=reference_altitude)

    async def repair_segments(
        self,
        result: PlanResult,
        oracle: Optional[HeightOracle],
        *,
        reference_altitude: float = DEFAULT_REFERENCE_ALTITUDE_M,
    ) -> PlanResult:
        """Insert oracle detours into an already planned ``result``."""

        if not result.success or oracle is None:
            return result
        result.waypoints = await validate_segments(
            result.waypoints,
            oracle,
            self.config,
            reference_altitude=reference_altitude,
        )
        if result.stats is not None:
            result.stats.estimated_flight_time_s = estimate_flight_time(
                result.waypoints, self.config
            )
        return result

    def _stats(
        self,
        grid: CorridorGrid,
        smoothed: Sequence[SearchNode],
        waypoints: Sequence[Waypoint],
    ) -> PlanStats:
        cruise_alt = max_cruise_altitude(smoothed)
        start_terrain = grid.point(grid.center_lane, 0).terrain_height
        return PlanStats(
            max_altitude=cruise_alt,
            max_agl=cruise_alt - start_terrain,
            avg_agl=cruise_alt - start_terrain,
            estimated_flight_time_s=estimate_flight_time(waypoints, self.config),
        )
