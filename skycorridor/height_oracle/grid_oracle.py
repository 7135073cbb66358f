"""Mini README: Height oracle backed by a corridor grid.

Structure:
    * GridHeightOracle - nearest-sample lookup over a ``CorridorGrid``.

Useful when no richer terrain source is attached: the planning service and
CLI validate segments against the same grid the search used, and tests get
a deterministic oracle without a viewer.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np

from ..corridor import CorridorGrid
from ..logging_utils import get_logger
from ..utils.geodesy import great_circle_distances
from .base import HeightOracle, LatLon

LOGGER = get_logger(__name__)


class GridHeightOracle(HeightOracle):
    """Answer height queries with the feature height of the nearest grid sample."""

    oracle_name = "grid"

    def __init__(self, grid: CorridorGrid, *, match_tolerance_m: float = 25.0) -> None:
        points = list(grid.iter_points())
        self.match_tolerance_m = match_tolerance_m
        self._lats = np.array([point.lat for point in points], dtype=float)
        self._lons = np.array([point.lon for point in points], dtype=float)
        self._heights = np.array([point.feature_height for point in points], dtype=float)
        LOGGER.debug(
            "Initialised GridHeightOracle with %s samples tolerance=%sm",
            len(points),
            match_tolerance_m,
        )

    async def surface_heights(
        self, points: Sequence[LatLon], reference_altitude: float
    ) -> List[Optional[float]]:
        heights: List[Optional[float]] = []
        for lat, lon in points:
            distances = great_circle_distances(lat, lon, self._lats, self._lons)
            nearest = int(np.argmin(distances))
            height = float(self._heights[nearest])
            if distances[nearest] > self.match_tolerance_m or height > reference_altitude:
                heights.append(None)
            else:
                heights.append(height)
        return heights

    def metadata(self) -> Dict[str, str]:
        details = super().metadata()
        details["samples"] = str(self._heights.size)
        details["match_tolerance_m"] = str(self.match_tolerance_m)
        return details
