"""Tests for the terrain height field, meshes and scenery placement."""

import math

import numpy as np
import pytest

from config import flock as config
from environment import (
    build_decorations, build_terrain_mesh, build_water_disc, ground_height_at, sky_gradient
)
from environment.terrain import advance_ripple, water_ripple


def test_height_at_origin():
    h = ground_height_at(0.0, 0.0)
    assert isinstance(h, float)
    assert h == 0.0


def test_height_matches_formula():
    x, z = 37.0, -12.5
    noise = math.sin(x * 0.08) * math.cos(z * 0.06) + math.sin(x * 0.02 + z * 0.04)
    expected = noise * 5 + math.sin((x + z) * 0.01) * 3
    assert ground_height_at(x, z) == pytest.approx(expected)


def test_height_accepts_arrays():
    xs = np.linspace(-100, 100, 7)
    heights = ground_height_at(xs, xs[::-1])
    assert heights.shape == (7,)
    # Amplitude is bounded by 5 * 2 + 3
    assert np.all(np.abs(heights) <= 13.0)


def test_mesh_shapes_and_heights():
    vertices, normals, indices = build_terrain_mesh(100.0, segments=4)
    assert vertices.shape == (25, 3)
    assert normals.shape == (25, 3)
    assert indices.shape == (4 * 4 * 6,)
    assert indices.max() == 24

    expected = ground_height_at(vertices[:, 0].astype(np.float64), vertices[:, 2].astype(np.float64))
    np.testing.assert_allclose(vertices[:, 1], expected, atol=1e-4)
    np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0, atol=1e-5)
    assert np.all(normals[:, 1] > 0)


def test_mesh_spans_world():
    vertices, _, _ = build_terrain_mesh(100.0, segments=2)
    assert vertices[:, 0].min() == pytest.approx(-110.0)
    assert vertices[:, 2].max() == pytest.approx(110.0)


def test_mesh_rejects_zero_segments():
    with pytest.raises(ValueError):
        build_terrain_mesh(100.0, segments=0)


def test_water_disc_fan():
    disc = build_water_disc(radius=10.0, segments=8)
    assert disc.shape == (10, 3)
    np.testing.assert_array_equal(disc[0], [0.0, 0.0, 0.0])
    np.testing.assert_allclose(np.linalg.norm(disc[1:], axis=1), 10.0, atol=1e-5)


def test_water_ripple_at_rest():
    opacity, sway = water_ripple(0.0)
    assert opacity == pytest.approx(0.8)
    assert sway == pytest.approx(0.0)


def test_ripple_clock_advances():
    assert advance_ripple(1.0, 0.25, enabled=True) == 1.25


def test_ripple_clock_frozen_when_disabled():
    assert advance_ripple(1.0, 0.25, enabled=False) == 1.0


class TestDecorations:
    """Rocks, trees and grass are seated on the height field."""

    WORLD = 260.0

    @pytest.fixture
    def items(self):
        return build_decorations(self.WORLD, np.random.default_rng(4))

    @staticmethod
    def pond_distance(positions):
        px, pz = config.DECORATIONS["pond_center"]
        return np.hypot(positions[:, 0] - px, positions[:, 2] - pz)

    def test_rocks_sink_into_ground(self, items):
        rocks = items["rocks"]["positions"]
        assert rocks.shape == (40, 3)
        expected = np.maximum(0.0, ground_height_at(rocks[:, 0], rocks[:, 2]) - 0.5)
        np.testing.assert_allclose(rocks[:, 1], expected)
        assert np.all(np.abs(rocks[:, [0, 2]]) <= 180.0)

    def test_trees_stand_on_ground_outside_pond(self, items):
        trees = items["trees"]["positions"]
        assert 0 < len(trees) <= 160
        np.testing.assert_allclose(trees[:, 1], ground_height_at(trees[:, 0], trees[:, 2]))
        assert np.all(self.pond_distance(trees) >= 50.0)
        assert np.all(np.abs(trees[:, [0, 2]]) <= self.WORLD)

    def test_grass_floats_just_above_ground(self, items):
        grass = items["grass"]["positions"]
        assert grass.shape == (1800, 3)
        np.testing.assert_allclose(grass[:, 1], ground_height_at(grass[:, 0], grass[:, 2]) + 0.1)
        assert np.all(self.pond_distance(grass) >= 60.0)

    def test_scales_and_yaw_per_item(self, items):
        for kind, (low, high) in (("rocks", (0.6, 1.6)), ("trees", (0.8, 1.4)), ("grass", (0.6, 1.4))):
            group = items[kind]
            n = len(group["positions"])
            assert group["scales"].shape == (n,)
            assert group["yaw"].shape == (n,)
            assert np.all((group["scales"] >= low) & (group["scales"] <= high))
            assert np.all(group["yaw"] >= 0.0)

    def test_same_seed_same_layout(self):
        a = build_decorations(self.WORLD, np.random.default_rng(9))
        b = build_decorations(self.WORLD, np.random.default_rng(9))
        for kind in ("rocks", "trees", "grass"):
            np.testing.assert_array_equal(a[kind]["positions"], b[kind]["positions"])

    def test_world_inside_pond_clearing_rejected(self):
        # Every sample lands within 60 of the pond centre
        with pytest.raises(ValueError):
            build_decorations(5.0, np.random.default_rng(0))


def test_sky_gradient_endpoints():
    np.testing.assert_allclose(sky_gradient(1.0), config.SKY["top_color"])
    np.testing.assert_allclose(sky_gradient(-1.0), config.SKY["bottom_color"])
    colors = sky_gradient(np.linspace(-1.0, 1.0, 9))
    assert colors.shape == (9, 3)
    # Monotone blend toward the zenith colour
    assert np.all(np.diff(colors[:, 2]) >= 0)
