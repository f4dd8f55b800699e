"""Tests for facing-orientation derivation."""

import numpy as np
import pytest

from boids.flock import Flock
from boids.params import SimulationParameters
from boids.boid import Agent, DEFAULT_ORIENTATION, VELOCITY_EPSILON, orientation_basis


def basis_for(velocity, previous=None):
    previous = DEFAULT_ORIENTATION.copy() if previous is None else previous
    out = np.zeros((3, 3))
    orientation_basis(np.asarray(velocity, dtype=np.float64), previous, out, VELOCITY_EPSILON)
    return out


class TestOrientationBasis:

    @pytest.mark.parametrize("velocity", [
        [0.0, 0.0, -5.0],
        [3.0, 1.0, 2.0],
        [-20.0, -4.0, 0.5],
        [0.0, 10.0, 0.0],
        [0.0, -0.3, 0.0],
    ])
    def test_orthonormal_and_facing_velocity(self, velocity):
        m = basis_for(velocity)
        np.testing.assert_allclose(m.T @ m, np.eye(3), atol=1e-12)
        forward = np.asarray(velocity) / np.linalg.norm(velocity)
        np.testing.assert_allclose(-m[:, 2], forward, atol=1e-12)

    def test_level_flight_keeps_wings_horizontal(self):
        m = basis_for([0.0, 0.0, -5.0])
        np.testing.assert_allclose(m[:, 0], [-1.0, 0.0, 0.0])
        np.testing.assert_allclose(m[:, 1], [0.0, 1.0, 0.0])

    def test_zero_velocity_keeps_previous(self):
        previous = basis_for([1.0, 0.0, 1.0])
        m = basis_for([0.0, 0.0, 0.0], previous)
        np.testing.assert_array_equal(m, previous)

    def test_tiny_velocity_keeps_previous(self):
        previous = basis_for([0.0, 2.0, 1.0])
        m = basis_for([1e-9, 0.0, 0.0], previous)
        np.testing.assert_array_equal(m, previous)

    def test_stationary_bird_in_flock_stays_finite(self):
        params = SimulationParameters.from_config(
            align_strength=0.0, cohesion_strength=0.0, separation_strength=0.0,
            sky_lift=0.0, wind_strength=0.0,
        )
        flock = Flock.from_state([[0.0, 50.0, 0.0]], [[0.0, 0.0, 0.0]])
        flock.step(1 / 60, params, lambda x, z: -1000.0)
        np.testing.assert_array_equal(flock.orientations[0], DEFAULT_ORIENTATION)


class TestAgent:

    def test_defaults(self):
        agent = Agent()
        assert agent.speed == 0.0
        np.testing.assert_array_equal(agent.forward, [0.0, 0.0, -1.0])

    def test_forward_from_orientation(self):
        agent = Agent(velocity=np.array([0.0, 0.0, 4.0]), orientation=basis_for([0.0, 0.0, 4.0]))
        assert agent.speed == pytest.approx(4.0)
        np.testing.assert_allclose(agent.forward, [0.0, 0.0, 1.0])
