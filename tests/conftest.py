"""Mini README: Shared corridor grid builders for the test-suite.

Grids are laid out with steps advancing north (~11 m per step) and lanes
offset east (~9 m per lane) so distances stay realistic for the 15 m
intermediate waypoint threshold.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import pytest

from skycorridor.configuration import EngineConfig
from skycorridor.corridor import CorridorGrid, GridPoint

BASE_LAT = 37.0
BASE_LON = -122.0
STEP_DEG = 0.0001
LANE_DEG = 0.0001


def make_grid(
    num_lanes: int = 3,
    num_steps: int = 10,
    obstacles: Optional[Dict[Tuple[int, int], float]] = None,
    terrain: float = 0.0,
    waypoint_indices: Optional[Sequence[int]] = None,
) -> CorridorGrid:
    """Build a grid; ``obstacles`` maps ``(lane, step)`` to obstacle height."""

    obstacles = obstacles or {}
    lanes = [
        [
            GridPoint(
                lat=BASE_LAT + step * STEP_DEG,
                lon=BASE_LON + lane * LANE_DEG,
                terrain_height=terrain,
                obstacle_height=obstacles.get((lane, step), 0.0),
            )
            for step in range(num_steps)
        ]
        for lane in range(num_lanes)
    ]
    return CorridorGrid.from_rows(lanes, waypoint_indices)


def grid_payload(num_lanes: int = 3, num_steps: int = 10) -> dict:
    """Return the camelCase JSON form of a flat grid."""

    return make_grid(num_lanes, num_steps).as_dict()


@pytest.fixture()
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture()
def flat_grid() -> CorridorGrid:
    return make_grid()
