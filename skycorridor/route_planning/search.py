"""Mini README: A* search over the (step, lane) corridor graph.

Structure:
    * SearchNode - a settled position with its cost and cruise altitude.
    * EdgeCost - cost breakdown for one transition between steps.
    * SearchResult - raw node path plus search diagnostics.
    * evaluate_edge - feasibility gate and cost function for one edge.
    * find_path - the search itself.

The graph only moves forward: a node at step ``s`` connects to lanes
``L-1``, ``L`` and ``L+1`` at step ``s+1``. Each node carries the highest
minimum safe altitude met along its best path, so altitude never decreases
during the search; descents are added later by the waypoint annotator.

The heuristic is straight-line time to the goal and ignores climb, lane
change and proximity costs. It can therefore under-estimate or, for some
weightings, mis-rank partial paths; the behaviour is kept as-is.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..configuration import EngineConfig
from ..corridor import CorridorGrid
from ..logging_utils import get_logger
from ..utils.geodesy import great_circle_distance

LOGGER = get_logger(__name__)

NodeId = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class SearchNode:
    """Position in the corridor graph and the best cost found to reach it."""

    step: int
    lane: int
    g_score: float
    f_score: float
    alt: float

    @property
    def node_id(self) -> NodeId:
        return (self.step, self.lane)


@dataclass(frozen=True, slots=True)
class EdgeCost:
    """Non-negative cost components of a single step transition."""

    time: float
    climb: float
    lane_change: float
    proximity: float
    cruise_altitude: float

    @property
    def total(self) -> float:
        return self.time + self.climb + self.lane_change + self.proximity


@dataclass(slots=True)
class SearchResult:
    """Outcome of a corridor search."""

    success: bool
    path: List[SearchNode] = field(default_factory=list)
    nodes_visited: int = 0

    @property
    def total_cost(self) -> float:
        return self.path[-1].g_score if self.path else 0.0


def evaluate_edge(
    grid: CorridorGrid,
    config: EngineConfig,
    current_step: int,
    current_lane: int,
    current_alt: float,
    next_step: int,
    next_lane: int,
) -> Optional[EdgeCost]:
    """Return the cost of moving to ``(next_step, next_lane)``.

    ``None`` means the edge is pruned: the minimum safe altitude at the
    destination sits above the regulatory ceiling there.
    """

    next_point = grid.point(next_lane, next_step)
    target_alt = next_point.min_safe_altitude(config.safety_buffer_m)
    ceiling = next_point.terrain_height + config.faa_limit_agl
    if target_alt > ceiling:
        return None

    current_point = grid.point(current_lane, current_step)
    distance = great_circle_distance(
        current_point.lat, current_point.lon, next_point.lat, next_point.lon
    )
    time_cost = distance / config.cruise_speed_mps * config.cost_time_weight
    climb_cost = max(0.0, target_alt - current_alt) * config.cost_climb_penalty
    lane_change_cost = abs(next_lane - current_lane) * config.cost_lane_change

    cruise_alt = max(current_alt, target_alt)
    proximity_cost = 0.0
    for neighbour in (next_lane - 1, next_lane + 1):
        if not 0 <= neighbour < grid.num_lanes:
            continue
        if grid.min_safe_altitude(neighbour, next_step, config.safety_buffer_m) > cruise_alt:
            proximity_cost += config.cost_proximity_penalty

    return EdgeCost(
        time=time_cost,
        climb=climb_cost,
        lane_change=lane_change_cost,
        proximity=proximity_cost,
        cruise_altitude=cruise_alt,
    )


def _heuristic(grid: CorridorGrid, config: EngineConfig, step: int, lane: int) -> float:
    point = grid.point(lane, step)
    goal = grid.point(grid.center_lane, grid.num_steps - 1)
    return great_circle_distance(point.lat, point.lon, goal.lat, goal.lon) / config.cruise_speed_mps


def find_path(grid: CorridorGrid, config: EngineConfig) -> SearchResult:
    """Search from the centre lane at step 0 to the centre lane at the last step."""

    center = grid.center_lane
    goal_id: NodeId = (grid.num_steps - 1, center)
    start_id: NodeId = (0, center)

    g_score: Dict[NodeId, float] = {start_id: 0.0}
    f_score: Dict[NodeId, float] = {start_id: 0.0}
    altitude: Dict[NodeId, float] = {start_id: grid.point(center, 0).terrain_height}
    came_from: Dict[NodeId, NodeId] = {}
    closed: set = set()

    counter = itertools.count()
    open_heap: List[Tuple[float, int, NodeId]] = [(0.0, next(counter), start_id)]
    nodes_visited = 0

    while open_heap:
        f_value, _, current_id = heapq.heappop(open_heap)
        if current_id in closed or f_value > f_score[current_id]:
            continue
        nodes_visited += 1

        if current_id == goal_id:
            path = _reconstruct(current_id, came_from, g_score, f_score, altitude)
            LOGGER.info(
                "A* reached goal: %s raw nodes, %s nodes visited, cost %.1f",
                len(path),
                nodes_visited,
                g_score[goal_id],
            )
            return SearchResult(success=True, path=path, nodes_visited=nodes_visited)

        closed.add(current_id)
        step, lane = current_id
        next_step = step + 1
        if next_step >= grid.num_steps:
            continue

        current_alt = altitude[current_id]
        for next_lane in (lane - 1, lane, lane + 1):
            if not 0 <= next_lane < grid.num_lanes:
                continue
            next_id = (next_step, next_lane)
            if next_id in closed:
                continue
            edge = evaluate_edge(grid, config, step, lane, current_alt, next_step, next_lane)
            if edge is None:
                continue

            tentative_g = g_score[current_id] + edge.total
            if tentative_g < g_score.get(next_id, float("inf")):
                came_from[next_id] = current_id
                g_score[next_id] = tentative_g
                f_score[next_id] = tentative_g + _heuristic(grid, config, next_step, next_lane)
                altitude[next_id] = edge.cruise_altitude
                heapq.heappush(open_heap, (f_score[next_id], next(counter), next_id))

    LOGGER.warning("A* failed: no path found after visiting %s nodes", nodes_visited)
    return SearchResult(success=False, nodes_visited=nodes_visited)


def _reconstruct(
    goal_id: NodeId,
    came_from: Dict[NodeId, NodeId],
    g_score: Dict[NodeId, float],
    f_score: Dict[NodeId, float],
    altitude: Dict[NodeId, float],
) -> List[SearchNode]:
    """Walk predecessors back from the goal and return the path start-first."""

    path: List[SearchNode] = []
    node_id: Optional[NodeId] = goal_id
    while node_id is not None:
        step, lane = node_id
        path.append(
            SearchNode(
                step=step,
                lane=lane,
                g_score=g_score[node_id],
                f_score=f_score[node_id],
                alt=altitude[node_id],
            )
        )
        node_id = came_from.get(node_id)
    path.reverse()
    return path
