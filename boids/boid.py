"""Individual flock member view and facing-orientation derivation."""

import math
import numpy as np
from dataclasses import dataclass, field
from numba import njit

from config import flock as config


VELOCITY_EPSILON = config.PHYSICS["velocity_epsilon"]

# Orientation of a bird that has never moved: nose down -z, wings along x
DEFAULT_ORIENTATION = np.eye(3)


@njit(cache=True)
def orientation_basis(velocity: np.ndarray, previous: np.ndarray, out: np.ndarray, eps: float):
    """
    Write the facing basis for a velocity into out (3x3, column vectors).

    Columns are right, adjusted up and -forward, so a model whose nose points
    down its local -z axis faces along the velocity. A velocity shorter than
    eps keeps the previous basis. When forward is parallel to world up the
    world x axis is used as the reference instead.
    """
    vx, vy, vz = velocity[0], velocity[1], velocity[2]
    speed = math.sqrt(vx * vx + vy * vy + vz * vz)
    if speed < eps:
        for r in range(3):
            for c in range(3):
                out[r, c] = previous[r, c]
        return

    fx, fy, fz = vx / speed, vy / speed, vz / speed

    # Right = world_up x forward
    rx = fz
    ry = 0.0
    rz = -fx
    r_len = math.sqrt(rx * rx + rz * rz)
    if r_len < eps:
        # Right = world_right x forward
        rx = 0.0
        ry = -fz
        rz = fy
        r_len = math.sqrt(ry * ry + rz * rz)
    rx /= r_len
    ry /= r_len
    rz /= r_len

    # Adjusted up = forward x right
    ux = fy * rz - fz * ry
    uy = fz * rx - fx * rz
    uz = fx * ry - fy * rx

    out[0, 0] = rx
    out[1, 0] = ry
    out[2, 0] = rz
    out[0, 1] = ux
    out[1, 1] = uy
    out[2, 1] = uz
    out[0, 2] = -fx
    out[1, 2] = -fy
    out[2, 2] = -fz


@dataclass
class Agent:
    """
    A single bird in the flock.

    The arrays are views into the owning Flock's state, so writes through an
    Agent land in the simulation.

    Attributes:
        position: 3D position vector
        velocity: 3D velocity vector
        acceleration: 3D acceleration of the last step (scratch value)
        orientation: 3x3 facing basis (right, up, -forward columns)
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=lambda: DEFAULT_ORIENTATION.copy())

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def forward(self) -> np.ndarray:
        """Unit heading taken from the facing basis."""
        return -self.orientation[:, 2]
