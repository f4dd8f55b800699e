"""Orbit and chase cameras for 3D navigation."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import flock as config

from boids.follow import FollowTarget, approach, chase_pose


class Camera:
    """Orbital camera around the origin with smooth zoom and mouse/keyboard controls."""

    def __init__(self):
        x, y, z = config.CAMERA["initial_position"]
        self.radius = math.sqrt(x * x + y * y + z * z)
        self.target_radius = self.radius
        self.theta = math.degrees(math.atan2(z, x))
        self.phi = math.degrees(math.asin(y / self.radius))
        self.target = np.array([0.0, 0.0, 0.0])
        self.zoom_smoothing = config.CAMERA["damping"]

    def get_direction(self) -> np.ndarray:
        """Get the normalized direction vector from target to camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        x = math.cos(phi_rad) * math.cos(theta_rad)
        y = math.sin(phi_rad)
        z = math.cos(phi_rad) * math.sin(theta_rad)
        return np.array([x, y, z])

    def get_position(self) -> np.ndarray:
        """Get the camera's world position."""
        return self.target + self.radius * self.get_direction()

    def _clamp_radius(self, value: float) -> float:
        return max(config.CAMERA["min_radius"], min(config.CAMERA["max_radius"], value))

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate the camera by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(
            config.CAMERA["min_phi"],
            min(config.CAMERA["max_phi"], self.phi + d_phi)
        )

    def zoom(self, delta: float):
        """Immediately zoom by the given amount."""
        self.radius = self._clamp_radius(self.radius + delta)
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        """Smoothly zoom by the given amount."""
        self.target_radius = self._clamp_radius(self.target_radius + delta)

    def update(self, dt: float):
        """Update camera state (called each frame)."""
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)
        self.radius = self._clamp_radius(self.radius)

    def apply(self):
        """Apply the camera transformation to the OpenGL modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )


class ChaseCamera:
    """Camera trailing one bird of the flock."""

    def __init__(self):
        self.follow = FollowTarget()
        self.position = np.array(config.CAMERA["initial_position"], dtype=np.float64)
        self.look_at = np.zeros(3)

    def next_bird(self, flock):
        self.follow.next(flock)

    def update(self, dt: float, flock):
        """Ease toward the followed bird. Does nothing for an empty flock."""
        agent = self.follow.target(flock)
        if agent is None:
            return
        eye, look_at = chase_pose(agent)
        self.position = approach(self.position, eye, dt, config.CHASE_CAMERA["smoothing"])
        self.look_at = look_at

    def apply(self):
        glLoadIdentity()
        gluLookAt(
            self.position[0], self.position[1], self.position[2],
            self.look_at[0], self.look_at[1], self.look_at[2],
            0, 1, 0
        )
