"""Mini README: Tests for the FastAPI planning service.

Drives the application factory through ``TestClient`` to cover successful
plans, per-request config overrides, GeoJSON output and input errors.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import grid_payload
from skycorridor.configuration import get_settings
from skycorridor.interface import create_application


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_application())


def test_engine_config_lists_override_keys(client) -> None:
    response = client.get("/engine-config")

    assert response.status_code == 200
    config = response.json()["config"]
    assert config["FAA_LIMIT_AGL"] == pytest.approx(121.0)
    assert config["SAFETY_BUFFER_M"] == pytest.approx(15.0)


def test_plan_route_returns_waypoints(client) -> None:
    response = client.post("/plan-route", json={"grid": grid_payload()})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [wp["phase"] for wp in body["waypoints"]] == [
        "GROUND_START",
        "VERTICAL_ASCENT",
        "VERTICAL_DESCENT",
        "GROUND_END",
    ]
    assert body["stats"]["maxAltitude"] == pytest.approx(15.0)


def test_plan_route_applies_config_overrides(client) -> None:
    response = client.post(
        "/plan-route",
        json={"grid": grid_payload(), "config": {"SAFETY_BUFFER_M": 20}},
    )

    assert response.status_code == 200
    assert response.json()["stats"]["maxAltitude"] == pytest.approx(20.0)


def test_plan_route_can_validate_and_export_geojson(client) -> None:
    response = client.post(
        "/plan-route",
        json={"grid": grid_payload(), "validateSegments": True, "format": "geojson"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "FeatureCollection"
    assert body["success"] is True
    assert body["features"][0]["geometry"]["type"] == "LineString"
    assert len(body["features"]) == 5


@pytest.mark.parametrize(
    "payload",
    [
        {"grid": {"lanes": []}},
        {"grid": {"lanes": [[{"lat": 0.0, "lon": 0.0}]], "waypointIndices": [0, 3]}},
        {"grid": grid_payload(), "config": {"CRUISE_SPEED_MPS": 0}},
        {"grid": grid_payload(), "config": {"UNKNOWN": 1}},
    ],
)
def test_invalid_input_is_rejected(client, payload) -> None:
    response = client.post("/plan-route", json=payload)

    assert response.status_code == 400


@pytest.mark.parametrize("environment, debug", [("development", True), ("production", False)])
def test_environment_controls_debug_mode(monkeypatch, environment, debug) -> None:
    monkeypatch.setenv("SKYCORRIDOR_ENVIRONMENT", environment)
    get_settings.cache_clear()
    try:
        app = create_application()
    finally:
        get_settings.cache_clear()

    assert app.debug is debug


def test_plan_route_reports_total_cost(client) -> None:
    response = client.post("/plan-route", json={"grid": grid_payload()})

    assert response.json()["totalCost"] > 0


def test_plan_route_runs_search_off_the_event_loop(client, monkeypatch) -> None:
    calls = []

    async def fake_threadpool(func, *args, **kwargs):
        calls.append(func.__name__)
        return func(*args, **kwargs)

    monkeypatch.setattr("skycorridor.interface.web_app.run_in_threadpool", fake_threadpool)

    response = client.post("/plan-route", json={"grid": grid_payload(), "validateSegments": True})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert calls == ["plan"]
