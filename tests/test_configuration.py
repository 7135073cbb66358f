"""Mini README: Tests for engine configuration and settings.

Covers defaults, immutability, partial overrides using either naming
scheme and rejection of physically meaningless values.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from skycorridor.configuration import EngineConfig, SkyCorridorSettings


def test_defaults_match_engine_tunables() -> None:
    config = EngineConfig()

    assert config.faa_limit_agl == pytest.approx(121.0)
    assert config.safety_buffer_m == pytest.approx(15.0)
    assert config.cruise_speed_mps == pytest.approx(15.0)
    assert config.as_overrides()["COST_PROXIMITY_PENALTY"] == pytest.approx(100.0)


def test_config_is_immutable() -> None:
    config = EngineConfig()

    with pytest.raises(ValidationError):
        config.safety_buffer_m = 30.0


def test_overrides_merge_without_mutating_the_base() -> None:
    base = EngineConfig()

    merged = base.with_overrides({"SAFETY_BUFFER_M": 20, "cost_lane_change": 5.0})

    assert merged.safety_buffer_m == pytest.approx(20.0)
    assert merged.cost_lane_change == pytest.approx(5.0)
    assert merged.cruise_speed_mps == pytest.approx(base.cruise_speed_mps)
    assert base.safety_buffer_m == pytest.approx(15.0)
    assert base.with_overrides(None) is base


@pytest.mark.parametrize(
    "overrides",
    [{"CRUISE_SPEED_MPS": 0}, {"CLIMB_SPEED_MPS": -1.0}, {"NOT_A_KEY": 1}],
)
def test_invalid_overrides_are_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        EngineConfig().with_overrides(overrides)


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("SKYCORRIDOR_INTERFACE_PORT", "9100")
    monkeypatch.setenv("SKYCORRIDOR_LOG_LEVEL", "debug")

    settings = SkyCorridorSettings()

    assert settings.interface_port == 9100
    assert settings.log_level == "DEBUG"
