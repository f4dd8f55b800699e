"""Tests for the simulation parameter snapshot and live tuning."""

import dataclasses

import pytest

from boids.params import SimulationParameters, adjust, tunable_names
from config import flock as config


def test_defaults_match_config():
    params = SimulationParameters.from_config()
    for name, value in config.FLOCK.items():
        assert getattr(params, name) == value


def test_overrides_apply():
    params = SimulationParameters.from_config(max_speed=50.0, population=80)
    assert params.max_speed == 50.0
    assert params.population == 80


def test_snapshot_is_immutable():
    params = SimulationParameters.from_config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.max_speed = 1.0


def test_vertical_extent():
    params = SimulationParameters.from_config(world_size=100.0)
    assert params.vertical_extent == pytest.approx(60.0)


@pytest.mark.parametrize("field, value", [("population", -1), ("world_size", 0.0)])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValueError):
        SimulationParameters.from_config(**{field: value})


def test_tunable_names_follow_field_order():
    names = tunable_names()
    assert names[0] == "population"
    assert set(names) == set(config.TUNING)
    assert "terrain_avoid" not in names


def test_adjust_steps_and_returns_copy():
    params = SimulationParameters.from_config()
    tuned = adjust(params, "align_strength", 1)
    assert tuned.align_strength == pytest.approx(0.15)
    assert params.align_strength == 0.14
    assert tuned.max_speed == params.max_speed


def test_adjust_clamps_to_range():
    params = SimulationParameters.from_config()
    assert adjust(params, "max_speed", 1000).max_speed == 70.0
    assert adjust(params, "wind_strength", -1000).wind_strength == 0.0


def test_adjust_population_stays_integer():
    tuned = adjust(SimulationParameters.from_config(), "population", 3)
    assert tuned.population == 123
    assert isinstance(tuned.population, int)


def test_adjust_rejects_fixed_parameter():
    with pytest.raises(ValueError):
        adjust(SimulationParameters.from_config(), "terrain_avoid", 1)
