"""Chase-target selection for cameras that follow a single bird."""

import numpy as np
from typing import Optional, Tuple

from config import flock as config
from .boid import Agent, VELOCITY_EPSILON


DEFAULT_FORWARD = np.array([0.0, 0.0, -1.0])


class FollowTarget:
    """Tracks which bird a chase camera follows. Safe on an empty flock."""

    def __init__(self, index: int = 0):
        self.index = index

    def next(self, flock):
        """Select the next bird, wrapping around the population."""
        if len(flock) == 0:
            return
        self.index = (self.index + 1) % len(flock)

    def target(self, flock) -> Optional[Agent]:
        """The followed bird, or None if there are no birds."""
        if len(flock) == 0:
            return None
        return flock[self.index % len(flock)]


def heading(agent: Agent) -> np.ndarray:
    """Unit velocity direction, or the default forward axis when hovering."""
    speed = np.linalg.norm(agent.velocity)
    if speed < VELOCITY_EPSILON:
        return DEFAULT_FORWARD.copy()
    return agent.velocity / speed


def chase_pose(agent: Agent) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute where a chase camera wants to be for a bird.

    Returns:
        (eye, look_at): eye sits behind and above the bird, look_at is a
        point ahead of it along its heading
    """
    chase = config.CHASE_CAMERA
    forward = heading(agent)
    eye = agent.position - forward * chase["follow_distance"] + np.array([0.0, chase["follow_height"], 0.0])
    look_at = agent.position + forward * chase["look_ahead"]
    return eye, look_at


def approach(current: np.ndarray, desired: np.ndarray, dt: float, rate: float) -> np.ndarray:
    """Frame-rate independent exponential move of current toward desired."""
    t = 1.0 - np.exp(-dt * rate)
    return current + (desired - current) * t
