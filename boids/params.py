"""Simulation parameter snapshot passed into every flock step."""

from dataclasses import dataclass, fields, replace
from typing import Tuple

from config import flock as config


@dataclass(frozen=True)
class SimulationParameters:
    """
    Tunable flocking parameters, read fresh on every step.

    Attributes:
        population: Number of birds; changing it requires a full respawn
        max_speed: Velocity magnitude cap
        perception_radius: Neighbor distance for alignment and cohesion
        separation_radius: Neighbor distance for repulsion
        align_strength: Alignment coefficient
        cohesion_strength: Cohesion coefficient
        separation_strength: Separation coefficient
        terrain_avoid: Ground avoidance coefficient
        sky_lift: Constant upward bias added to the vertical steering
        world_size: Horizontal half-extent of the wrap volume
        wind_strength: Amplitude of the wind sway
    """
    population: int = config.FLOCK["population"]
    max_speed: float = config.FLOCK["max_speed"]
    perception_radius: float = config.FLOCK["perception_radius"]
    separation_radius: float = config.FLOCK["separation_radius"]
    align_strength: float = config.FLOCK["align_strength"]
    cohesion_strength: float = config.FLOCK["cohesion_strength"]
    separation_strength: float = config.FLOCK["separation_strength"]
    terrain_avoid: float = config.FLOCK["terrain_avoid"]
    sky_lift: float = config.FLOCK["sky_lift"]
    world_size: float = config.FLOCK["world_size"]
    wind_strength: float = config.FLOCK["wind_strength"]

    def __post_init__(self):
        if self.population < 0:
            raise ValueError(f"population must be >= 0, got {self.population}")
        if self.world_size <= 0:
            raise ValueError(f"world_size must be positive, got {self.world_size}")

    @classmethod
    def from_config(cls, **overrides) -> "SimulationParameters":
        """Build a snapshot from config.FLOCK, with keyword overrides."""
        values = dict(config.FLOCK)
        values.update(overrides)
        return cls(**values)

    @property
    def vertical_extent(self) -> float:
        """Half-extent of the flyable band on the y axis."""
        return self.world_size * config.PHYSICS["vertical_fraction"]


def tunable_names() -> Tuple[str, ...]:
    """Names of the parameters that can be nudged at runtime, in field order."""
    return tuple(f.name for f in fields(SimulationParameters) if f.name in config.TUNING)


def adjust(params: SimulationParameters, name: str, steps: int) -> SimulationParameters:
    """
    Return a copy of params with one field moved by a number of tuning steps.

    The result is clamped to the field's configured range. Integer fields
    stay integers.
    """
    if name not in config.TUNING:
        raise ValueError(f"'{name}' is not a tunable parameter")

    lo, hi, step = config.TUNING[name]
    value = getattr(params, name) + steps * step
    value = max(lo, min(hi, value))
    if isinstance(getattr(params, name), int):
        value = int(round(value))
    else:
        # Keep slider-like values free of float drift
        value = round(value, 6)
    return replace(params, **{name: value})
