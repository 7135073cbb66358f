"""Mini README: Tests for waypoint phase annotation.

Verifies ground/ascent/cruise/descent sequencing per leg, corner and
intermediate insertion on lane changes, and the wire format of waypoints.
"""

from __future__ import annotations

import pytest

from conftest import make_grid
from skycorridor.route_planning import SearchNode, Waypoint, WaypointPhase, annotate_waypoints

P = WaypointPhase


def _node(step: int, lane: int, alt: float = 15.0) -> SearchNode:
    return SearchNode(step=step, lane=lane, g_score=0.0, f_score=0.0, alt=alt)


def test_single_leg_without_lane_changes(flat_grid) -> None:
    waypoints = annotate_waypoints([_node(0, 1, 0.0), _node(9, 1)], flat_grid)

    assert [wp.phase for wp in waypoints] == [
        P.GROUND_START,
        P.VERTICAL_ASCENT,
        P.VERTICAL_DESCENT,
        P.GROUND_END,
    ]
    assert [wp.alt for wp in waypoints] == [0.0, 15.0, 15.0, 0.0]
    assert waypoints[0].lat == pytest.approx(flat_grid.point(1, 0).lat)
    assert waypoints[-1].lat == pytest.approx(flat_grid.point(1, 9).lat)


def test_intermediate_stops_split_the_route_into_legs() -> None:
    grid = make_grid(waypoint_indices=[0, 4, 9])

    waypoints = annotate_waypoints([_node(0, 1, 0.0), _node(9, 1)], grid)

    assert [wp.phase for wp in waypoints] == [
        P.GROUND_START,
        P.VERTICAL_ASCENT,
        P.VERTICAL_DESCENT,
        P.GROUND_WAYPOINT,
        P.VERTICAL_ASCENT,
        P.VERTICAL_DESCENT,
        P.GROUND_END,
    ]
    assert waypoints[3].lat == pytest.approx(grid.point(1, 4).lat)


def test_lane_changes_emit_corners_and_long_runs_emit_intermediates(flat_grid) -> None:
    smoothed = [
        _node(0, 1, 0.0),
        _node(3, 1),
        _node(4, 0),
        _node(7, 0),
        _node(8, 1),
        _node(9, 1),
    ]

    waypoints = annotate_waypoints(smoothed, flat_grid)

    assert [wp.phase for wp in waypoints] == [
        P.GROUND_START,
        P.VERTICAL_ASCENT,
        P.CRUISE_CORNER,
        P.CRUISE,
        P.CRUISE_INTERMEDIATE,
        P.CRUISE_CORNER,
        P.CRUISE,
        P.VERTICAL_DESCENT,
        P.GROUND_END,
    ]
    corner = waypoints[2]
    assert (corner.lat, corner.lon) == (flat_grid.point(1, 3).lat, flat_grid.point(1, 3).lon)
    assert (waypoints[3].lat, waypoints[3].lon) == (
        flat_grid.point(0, 4).lat,
        flat_grid.point(0, 4).lon,
    )
    assert all(wp.alt == pytest.approx(15.0) for wp in waypoints[1:-1])


def test_all_cruise_waypoints_share_the_highest_altitude(flat_grid) -> None:
    smoothed = [_node(0, 1, 0.0), _node(3, 0, 15.0), _node(6, 1, 40.0), _node(9, 1, 40.0)]

    waypoints = annotate_waypoints(smoothed, flat_grid)

    airborne = [wp for wp in waypoints if not wp.phase.is_ground]
    assert airborne
    assert {wp.alt for wp in airborne} == {40.0}


def test_waypoint_wire_format() -> None:
    waypoint = Waypoint(lat=1.0, lon=2.0, alt=30.0, phase=P.CRUISE_DETOUR, obstacle_height=5.0)

    assert waypoint.as_dict() == {
        "lat": 1.0,
        "lon": 2.0,
        "alt": 30.0,
        "phase": "CRUISE_DETOUR",
        "prio": 1,
        "obstacleHeight": 5.0,
    }
    assert "obstacleHeight" not in Waypoint(lat=1.0, lon=2.0, alt=0.0, phase=P.GROUND_END).as_dict()
