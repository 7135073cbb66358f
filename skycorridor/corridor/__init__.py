"""Mini README: Corridor grid package.

Exports the grid data model consumed by the route engine. Grid
construction (terrain and obstacle sampling) happens upstream; this
package only validates and exposes the lattice.
"""

from .grid import CorridorGrid, GridPoint, MalformedGridError

__all__ = ["CorridorGrid", "GridPoint", "MalformedGridError"]
