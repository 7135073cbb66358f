"""Mini README: Post-pass repairing cruise segments against a height oracle.

Structure:
    * DEFAULT_REFERENCE_ALTITUDE_M / DETOUR_CLEARANCE_M - validation constants.
    * validate_segments - query the oracle along each cruise segment and
      insert detour waypoints where the straight line clips a surface.

Segments are checked strictly in order with one awaited oracle query each.
A failing query only affects its own segment: the error is logged and the
segment is treated as collision-free. Existing waypoints are never
reordered; detours are inserted directly after the segment's first point.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..configuration import EngineConfig
from ..height_oracle import HeightOracle
from ..logging_utils import get_logger
from .annotation import Waypoint, WaypointPhase

LOGGER = get_logger(__name__)

SEGMENT_CHECK_INTERVALS = 5
DEFAULT_REFERENCE_ALTITUDE_M = 1000.0
DETOUR_CLEARANCE_M = 10.0


def _skip_segment(current: Waypoint, following: Waypoint) -> bool:
    if current.phase.is_ground or current.phase.is_vertical:
        return True
    return following.phase is WaypointPhase.VERTICAL_DESCENT


def _collisions(
    samples: Sequence[Tuple[float, float]],
    heights: Sequence[Optional[float]],
    current: Waypoint,
    config: EngineConfig,
) -> List[Waypoint]:
    """Return a detour waypoint for every sample whose surface clips the segment."""

    collisions: List[Waypoint] = []
    for (lat, lon), height in zip(samples, heights):
        if height is None:
            continue
        height = float(height)
        min_safe_alt = height + config.safety_buffer_m
        if min_safe_alt > current.alt:
            collisions.append(
                Waypoint(
                    lat=lat,
                    lon=lon,
                    alt=min_safe_alt + DETOUR_CLEARANCE_M,
                    phase=WaypointPhase.CRUISE_DETOUR,
                    obstacle_height=height,
                )
            )
    return collisions


async def validate_segments(
    waypoints: Sequence[Waypoint],
    oracle: Optional[HeightOracle],
    config: EngineConfig,
    *,
    checks: int = SEGMENT_CHECK_INTERVALS,
    reference_altitude: float = DEFAULT_REFERENCE_ALTITUDE_M,
) -> List[Waypoint]:
    """Return ``waypoints`` with ``CRUISE_DETOUR`` points inserted where needed."""

    if oracle is None or len(waypoints) < 2:
        return list(waypoints)

    LOGGER.info("Validating %s waypoints against oracle %s", len(waypoints), oracle.metadata())
    fractions = np.linspace(0.0, 1.0, checks + 1)[1:-1]
    fixed: List[Waypoint] = []

    for index, current in enumerate(waypoints):
        fixed.append(current)
        if index == len(waypoints) - 1:
            continue
        following = waypoints[index + 1]
        if _skip_segment(current, following):
            continue

        samples = [
            (
                current.lat + float(t) * (following.lat - current.lat),
                current.lon + float(t) * (following.lon - current.lon),
            )
            for t in fractions
        ]
        try:
            heights = list(await oracle.surface_heights(samples, reference_altitude))
            if not heights:
                LOGGER.warning("No surface heights returned for segment %s", index)
                continue
            collisions = _collisions(samples, heights, current, config)
        except Exception as error:
            LOGGER.warning(
                "Segment %s validation failed on %s oracle: %s", index, oracle.oracle_name, error
            )
            continue

        if collisions:
            LOGGER.info("Segment %s collisions: %s", index, len(collisions))
            fixed.append(collisions[0])
            if len(collisions) > 1:
                fixed.append(collisions[-1])

    LOGGER.info("Segment validation complete: %s -> %s waypoints", len(waypoints), len(fixed))
    return fixed
