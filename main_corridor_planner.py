"""Mini README: Entry point CLI for the SkyCorridor route engine.

This script exposes a Typer CLI with two commands: ``plan`` runs the route
engine over a corridor grid stored as JSON and prints the result, and
``serve`` starts the FastAPI planning service under uvicorn.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from skycorridor.configuration import EngineConfig, get_settings
from skycorridor.corridor import CorridorGrid
from skycorridor.height_oracle import GridHeightOracle
from skycorridor.logging_utils import configure_root_logger
from skycorridor.route_planning import RoutePlanner
from skycorridor.utils.geojson import waypoints_to_geojson

cli = typer.Typer(help="Plan drone corridor routes and run the planning service.")


@cli.command()
def plan(
    grid_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Corridor grid JSON."),
    config: Optional[str] = typer.Option(
        None, help="JSON object overriding engine tunables, e.g. '{\"SAFETY_BUFFER_M\": 20}'."
    ),
    validate: bool = typer.Option(
        False, help="Repair cruise segments against the grid used as a height oracle."
    ),
    geojson: bool = typer.Option(False, help="Print a GeoJSON FeatureCollection instead."),
) -> None:
    """Plan a route through the corridor described by GRID_FILE."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    try:
        grid = CorridorGrid.from_payload(json.loads(grid_file.read_text()))
        engine_config = EngineConfig().with_overrides(json.loads(config) if config else None)
    except ValueError as error:
        typer.echo(f"Invalid input: {error}", err=True)
        raise typer.Exit(code=2) from error

    planner = RoutePlanner(engine_config)
    if validate:
        oracle = GridHeightOracle(grid, match_tolerance_m=settings.oracle_match_tolerance_m)
        result = asyncio.run(
            planner.plan_and_validate(
                grid, oracle, reference_altitude=settings.oracle_reference_altitude_m
            )
        )
    else:
        result = planner.plan(grid)

    payload = waypoints_to_geojson(result.waypoints) if geojson else result.as_dict()
    typer.echo(json.dumps(payload, indent=2))
    if not result.success:
        raise typer.Exit(code=1)


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI planning service using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: bind-all addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting SkyCorridor on {effective_host}:{effective_port}.\n"
        f"POST corridor grids to http://{browser_host}:{effective_port}/plan-route"
    )
    uvicorn.run(
        "skycorridor.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
