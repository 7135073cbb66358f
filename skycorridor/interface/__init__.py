"""Mini README: Service interfaces for SkyCorridor.

Exports the FastAPI application factory that exposes the route engine over
HTTP. The Typer CLI in ``main_corridor_planner.py`` reuses the same factory.
"""

from .web_app import create_application

__all__ = ["create_application"]
