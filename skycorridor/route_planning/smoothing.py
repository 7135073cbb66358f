"""Mini README: Line-of-sight path simplification ("string pulling").

Structure:
    * is_line_of_sight_clear - sample the straight line between two nodes.
    * smooth_path - greedy furthest-visible shortcutting of a raw path.

A shortcut between two nodes is accepted only if every sample along the
interpolated line stays inside the grid, clears the feature beneath it and
clears both neighbouring lanes at the highest altitude already committed
to over that stretch of the raw path.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from ..configuration import EngineConfig
from ..corridor import CorridorGrid
from ..logging_utils import get_logger
from .search import SearchNode

LOGGER = get_logger(__name__)

MIN_LINE_SAMPLES = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_line_of_sight_clear(
    nodes: Sequence[SearchNode],
    start_index: int,
    end_index: int,
    grid: CorridorGrid,
    config: EngineConfig,
) -> bool:
    """Return ``True`` when the line from ``nodes[start_index]`` to ``nodes[end_index]`` is safe."""

    start = nodes[start_index]
    end = nodes[end_index]
    max_alt = max(start.alt, end.alt, *(node.alt for node in nodes[start_index : end_index + 1]))

    # Step span equals index span on a raw path.
    num_samples = max(MIN_LINE_SAMPLES, 2 * abs(end.step - start.step))
    buffer = config.safety_buffer_m

    for sample in range(1, num_samples):
        t = sample / num_samples
        step = _round_half_up(start.step + t * (end.step - start.step))
        lane = _round_half_up(start.lane + t * (end.lane - start.lane))

        if not grid.in_bounds(lane, step):
            return False
        if grid.min_safe_altitude(lane, step, buffer) > max_alt:
            return False
        if lane > 0 and grid.min_safe_altitude(lane - 1, step, buffer) > max_alt:
            return False
        if lane < grid.num_lanes - 1 and grid.min_safe_altitude(lane + 1, step, buffer) > max_alt:
            return False

    return True


def smooth_path(
    nodes: Sequence[SearchNode], grid: CorridorGrid, config: EngineConfig
) -> List[SearchNode]:
    """Keep only the nodes needed to preserve clear line of sight.

    From each kept anchor the furthest later node with a clear line is kept
    next; the immediately following node is always acceptable. The first
    and last nodes are always kept.
    """

    if len(nodes) <= 2:
        return list(nodes)

    smoothed = [nodes[0]]
    current = 0
    while current < len(nodes) - 1:
        furthest = current + 1
        for target in range(current + 2, len(nodes)):
            if is_line_of_sight_clear(nodes, current, target, grid, config):
                furthest = target
        smoothed.append(nodes[furthest])
        current = furthest

    LOGGER.info("Path smoothed: %s -> %s nodes", len(nodes), len(smoothed))
    return smoothed
