"""Mini README: Configuration models and helpers for SkyCorridor.

Structure:
    * EngineConfig - frozen Pydantic model holding route engine tunables.
    * SkyCorridorSettings - environment-aware settings for the service layer.
    * get_settings - cached accessor for ``SkyCorridorSettings``.

Usage:
    Build an ``EngineConfig`` once per planning request (optionally merging
    a partial override with ``with_overrides``) and pass it to every engine
    call. ``get_settings`` is reserved for the CLI and web interface; the
    planning functions never read process-wide state.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


class EngineConfig(BaseModel):
    """Immutable tunables for the corridor search and waypoint annotation."""

    faa_limit_agl: float = Field(
        121.0,
        alias="FAA_LIMIT_AGL",
        description="Regulatory ceiling in metres above ground level.",
        gt=0,
    )
    safety_buffer_m: float = Field(
        15.0,
        alias="SAFETY_BUFFER_M",
        description="Vertical clearance added on top of terrain or obstacles.",
        ge=0,
    )
    climb_speed_mps: float = Field(2.0, alias="CLIMB_SPEED_MPS", gt=0)
    cruise_speed_mps: float = Field(15.0, alias="CRUISE_SPEED_MPS", gt=0)
    descent_speed_mps: float = Field(3.0, alias="DESCENT_SPEED_MPS", gt=0)
    cost_time_weight: float = Field(1.0, alias="COST_TIME_WEIGHT", ge=0)
    cost_climb_penalty: float = Field(15.0, alias="COST_CLIMB_PENALTY", ge=0)
    cost_lane_change: float = Field(50.0, alias="COST_LANE_CHANGE", ge=0)
    cost_proximity_penalty: float = Field(
        100.0,
        alias="COST_PROXIMITY_PENALTY",
        description="Added once per neighbouring lane poking above the cruise altitude.",
        ge=0,
    )

    class Config:
        frozen = True
        populate_by_name = True
        extra = "forbid"

    def with_overrides(self, overrides: Optional[Mapping[str, Any]]) -> "EngineConfig":
        """Return a new config with a partial override merged over this one.

        Keys may use either the field names or the upper-case override names
        (``FAA_LIMIT_AGL`` and friends). Unknown keys and out-of-range values
        raise ``pydantic.ValidationError``.
        """

        if not overrides:
            return self
        merged: Dict[str, Any] = self.model_dump()
        aliases = {field.alias: name for name, field in type(self).model_fields.items()}
        for key, value in overrides.items():
            merged[aliases.get(key, key)] = value
        return type(self)(**merged)

    def as_overrides(self) -> Dict[str, float]:
        """Export the config keyed by the recognised override names."""

        return self.model_dump(by_alias=True)


class SkyCorridorSettings(BaseSettings):
    """Runtime configuration for the SkyCorridor service and CLI."""

    environment: str = Field(
        "development",
        description="Deployment label; 'development' turns on FastAPI debug tracebacks.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the planning service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the planning service exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    oracle_reference_altitude_m: float = Field(
        1000.0,
        description="Altitude from which height oracle queries are cast downwards.",
        gt=0,
    )
    oracle_match_tolerance_m: float = Field(
        25.0,
        description="Maximum distance to the nearest grid sample for grid-backed oracles.",
        gt=0,
    )

    class Config:
        env_prefix = "SKYCORRIDOR_"
        env_file = ".env"
        case_sensitive = False

    @validator("log_level", pre=True)
    def _normalise_level(cls, value: Optional[str]) -> str:
        """Accept level names in any casing."""

        return str(value or "INFO").strip().upper()


@lru_cache()
def get_settings() -> SkyCorridorSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return SkyCorridorSettings()
