"""Mini README: Abstract height oracle consumed by segment validation.

Structure:
    * HeightOracle - abstract interface returning surface heights for a
      batch of positions.

A height oracle wraps a higher-fidelity terrain source than the corridor
grid (a 3D viewer, an elevation service, a dense model). Implementations
answer one batched query per call and may return ``None`` for positions
they cannot resolve; callers must tolerate short or empty results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

LatLon = Tuple[float, float]


class HeightOracle(ABC):
    """Base interface for surface height providers."""

    oracle_name: str = "generic"

    @abstractmethod
    async def surface_heights(
        self, points: Sequence[LatLon], reference_altitude: float
    ) -> List[Optional[float]]:
        """Return the surface height below each ``(lat, lon)`` point.

        Heights are cast downwards from ``reference_altitude``; positions
        that cannot be resolved map to ``None``.
        """

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for logs and API responses."""

        return {"oracle": self.oracle_name}
