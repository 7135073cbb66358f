"""Mini README: Corridor grid data model consumed by the route engine.

Structure:
    * MalformedGridError - raised when a grid violates its shape invariants.
    * GridPoint - one ground-referenced sample (terrain and obstacle height).
    * CorridorGrid - ``lanes[lane][step]`` lattice plus user stop indices.
    * GridPointPayload / CorridorGridPayload - Pydantic models for the
      camelCase JSON wire format used by the web interface and CLI.

Grids are built elsewhere (terrain and obstacle sampling is not part of
this package) and arrive here fully populated. Validation happens once, in
``CorridorGrid.__post_init__``, so the search can index freely afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class MalformedGridError(ValueError):
    """The corridor grid does not satisfy its shape invariants."""


def _as_index(value: Any) -> int:
    """Return ``value`` as a step index, rejecting fractional or non-numeric input."""

    try:
        index = int(value)
    except (TypeError, ValueError) as error:
        raise MalformedGridError(f"Waypoint index {value!r} is not an integer") from error
    if index != value:
        raise MalformedGridError(f"Waypoint index {value!r} is not an integer")
    return index


@dataclass(frozen=True, slots=True)
class GridPoint:
    """Single sampled ground position along the corridor."""

    lat: float
    lon: float
    terrain_height: float
    obstacle_height: float = 0.0

    @property
    def feature_height(self) -> float:
        """Highest surface at this sample, terrain or obstacle."""

        return max(self.obstacle_height or 0.0, self.terrain_height or 0.0)

    def min_safe_altitude(self, safety_buffer_m: float) -> float:
        return self.feature_height + safety_buffer_m

    def as_dict(self) -> Dict[str, float]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "terrainHeight": self.terrain_height,
            "obstacleHeight": self.obstacle_height,
        }


@dataclass(frozen=True, slots=True)
class CorridorGrid:
    """Rectangular lattice of samples, addressed as ``lanes[lane][step]``."""

    lanes: Tuple[Tuple[GridPoint, ...], ...]
    waypoint_indices: Tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        lanes = tuple(tuple(lane) for lane in self.lanes)
        object.__setattr__(self, "lanes", lanes)
        if not lanes:
            raise MalformedGridError("Corridor grid requires at least one lane")
        num_steps = len(lanes[0])
        if num_steps == 0:
            raise MalformedGridError("Corridor lanes must contain at least one step")
        for index, lane in enumerate(lanes):
            if len(lane) != num_steps:
                raise MalformedGridError(
                    f"Lane {index} has {len(lane)} steps, expected {num_steps}"
                )

        indices = tuple(_as_index(value) for value in self.waypoint_indices) or (0, num_steps - 1)
        object.__setattr__(self, "waypoint_indices", indices)
        if len(indices) < 2:
            raise MalformedGridError("At least two waypoint indices are required")
        if any(index < 0 or index >= num_steps for index in indices):
            raise MalformedGridError(
                f"Waypoint indices {list(indices)} fall outside [0, {num_steps})"
            )
        if any(later <= earlier for earlier, later in zip(indices, indices[1:])):
            raise MalformedGridError(
                f"Waypoint indices {list(indices)} must be strictly ascending"
            )

    @property
    def num_lanes(self) -> int:
        return len(self.lanes)

    @property
    def num_steps(self) -> int:
        return len(self.lanes[0])

    @property
    def center_lane(self) -> int:
        return self.num_lanes // 2

    def point(self, lane: int, step: int) -> GridPoint:
        return self.lanes[lane][step]

    def in_bounds(self, lane: int, step: int) -> bool:
        return 0 <= lane < self.num_lanes and 0 <= step < self.num_steps

    def min_safe_altitude(self, lane: int, step: int, safety_buffer_m: float) -> float:
        """Feature height at ``(lane, step)`` plus the safety buffer."""

        return self.lanes[lane][step].min_safe_altitude(safety_buffer_m)

    def iter_points(self):
        """Yield every sample lane by lane."""

        for lane in self.lanes:
            yield from lane

    @classmethod
    def from_rows(
        cls,
        lanes: Sequence[Sequence[GridPoint]],
        waypoint_indices: Optional[Sequence[int]] = None,
    ) -> "CorridorGrid":
        """Build a grid from nested sequences of ``GridPoint``."""

        return cls(
            lanes=tuple(tuple(lane) for lane in lanes),
            waypoint_indices=tuple(waypoint_indices or ()),
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CorridorGrid":
        """Validate a camelCase JSON payload and convert it into a grid."""

        try:
            model = CorridorGridPayload.model_validate(payload)
        except ValidationError as error:
            raise MalformedGridError(f"Corridor grid payload is invalid: {error}") from error
        return model.to_grid()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "lanes": [[point.as_dict() for point in lane] for lane in self.lanes],
            "waypointIndices": list(self.waypoint_indices),
        }


class GridPointPayload(BaseModel):
    """Wire representation of a ``GridPoint``."""

    lat: float
    lon: float
    terrain_height: float = Field(0.0, alias="terrainHeight")
    obstacle_height: Optional[float] = Field(None, alias="obstacleHeight")

    class Config:
        populate_by_name = True

    def to_point(self) -> GridPoint:
        return GridPoint(
            lat=self.lat,
            lon=self.lon,
            terrain_height=self.terrain_height,
            obstacle_height=self.obstacle_height or 0.0,
        )


class CorridorGridPayload(BaseModel):
    """Wire representation of a ``CorridorGrid``."""

    lanes: List[List[GridPointPayload]]
    waypoint_indices: Optional[List[int]] = Field(None, alias="waypointIndices")

    class Config:
        populate_by_name = True

    def to_grid(self) -> CorridorGrid:
        grid = CorridorGrid.from_rows(
            [[point.to_point() for point in lane] for lane in self.lanes],
            self.waypoint_indices,
        )
        LOGGER.debug(
            "Parsed corridor grid with %s lanes x %s steps", grid.num_lanes, grid.num_steps
        )
        return grid
