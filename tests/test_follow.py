"""Tests for chase-target selection and chase camera pose."""

import numpy as np
import pytest

from boids.flock import Flock, create_flock
from boids.follow import FollowTarget
from boids.boid import Agent
from boids.follow import approach, chase_pose, heading


class TestFollowTarget:

    def test_empty_flock_has_no_target(self):
        follow = FollowTarget()
        flock = create_flock(0)
        assert follow.target(flock) is None
        follow.next(flock)
        assert follow.index == 0

    def test_next_wraps_around(self):
        flock = create_flock(3, seed=1)
        follow = FollowTarget()
        seen = []
        for _ in range(4):
            follow.next(flock)
            seen.append(follow.index)
        assert seen == [1, 2, 0, 1]

    def test_stale_index_after_shrink(self):
        flock = create_flock(3, seed=1)
        follow = FollowTarget(index=5)
        agent = follow.target(flock)
        np.testing.assert_array_equal(agent.position, flock.positions[2])


class TestChasePose:

    def test_behind_and_above(self):
        agent = Agent(position=np.array([0.0, 0.0, 0.0]), velocity=np.array([0.0, 0.0, 10.0]))
        eye, look_at = chase_pose(agent)
        np.testing.assert_allclose(eye, [0.0, 4.0, -12.0])
        np.testing.assert_allclose(look_at, [0.0, 0.0, 8.0])

    def test_hovering_bird_uses_default_heading(self):
        agent = Agent(position=np.array([1.0, 20.0, 1.0]))
        np.testing.assert_array_equal(heading(agent), [0.0, 0.0, -1.0])
        eye, _ = chase_pose(agent)
        assert np.all(np.isfinite(eye))
        np.testing.assert_allclose(eye, [1.0, 24.0, 13.0])

    def test_pose_reads_flock_agent(self):
        flock = Flock.from_state([[5.0, 30.0, 5.0]], [[3.0, 0.0, 4.0]])
        eye, look_at = chase_pose(flock[0])
        np.testing.assert_allclose(look_at, [5.0 + 0.6 * 8, 30.0, 5.0 + 0.8 * 8])


class TestApproach:

    def test_zero_dt_stays(self):
        current = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(approach(current, np.zeros(3), 0.0, 5.0), current)

    def test_converges_toward_target(self):
        current = np.zeros(3)
        desired = np.array([10.0, 0.0, 0.0])
        step = approach(current, desired, 0.1, 5.0)
        assert step[0] == pytest.approx(10.0 * (1.0 - np.exp(-0.5)))
        far = approach(current, desired, 10.0, 5.0)
        np.testing.assert_allclose(far, desired, atol=1e-6)
