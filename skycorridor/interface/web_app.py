"""Mini README: FastAPI-powered planning service for SkyCorridor.

Structure:
    * PlanRouteRequest - request body for ``/plan-route``.
    * create_application - application factory wiring the routes.

The service is a thin JSON surface over ``RoutePlanner``. Each request
builds its own ``EngineConfig`` from the defaults plus the optional
override in the body, so requests never share mutable state.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..configuration import EngineConfig, get_settings
from ..corridor import CorridorGrid
from ..height_oracle import GridHeightOracle
from ..logging_utils import configure_root_logger, get_logger
from ..route_planning import RoutePlanner
from ..utils.geojson import waypoints_to_geojson

LOGGER = get_logger(__name__)


class PlanRouteRequest(BaseModel):
    """Body accepted by ``POST /plan-route``."""

    grid: Dict[str, Any]
    config: Optional[Dict[str, Any]] = None
    validate_segments: bool = Field(False, alias="validateSegments")
    output_format: Literal["json", "geojson"] = Field("json", alias="format")

    class Config:
        populate_by_name = True


def create_application() -> FastAPI:
    """Create the FastAPI application with planning routes."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    app = FastAPI(
        title="SkyCorridor Route Engine",
        version="0.1.0",
        debug=settings.environment == "development",
    )
    LOGGER.info("Creating planning service for %s environment", settings.environment)
    defaults = EngineConfig()

    @app.get("/engine-config")
    async def engine_config() -> JSONResponse:
        """Return the default engine tunables keyed by override name."""

        return JSONResponse({"config": defaults.as_overrides()})

    @app.post("/plan-route")
    async def plan_route(request: PlanRouteRequest) -> JSONResponse:
        """Plan a corridor route for the supplied grid."""

        try:
            grid = CorridorGrid.from_payload(request.grid)
            config = defaults.with_overrides(request.config)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

        planner = RoutePlanner(config)
        # Search is CPU bound; keep it off the event loop.
        result = await run_in_threadpool(planner.plan, grid)
        if request.validate_segments:
            oracle = GridHeightOracle(grid, match_tolerance_m=settings.oracle_match_tolerance_m)
            result = await planner.repair_segments(
                result, oracle, reference_altitude=settings.oracle_reference_altitude_m
            )

        LOGGER.info(
            "Planned route success=%s waypoints=%s nodes_visited=%s",
            result.success,
            len(result.waypoints),
            result.nodes_visited,
        )
        if request.output_format == "geojson":
            payload = waypoints_to_geojson(result.waypoints)
            payload["success"] = result.success
            return JSONResponse(payload)
        return JSONResponse(result.as_dict())

    return app
