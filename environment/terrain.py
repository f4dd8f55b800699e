"""Terrain height field and the mesh data sampled from it."""

import numpy as np
from typing import Tuple

from config import flock as config


def ease_noise(x, y):
    """Smooth rolling-hills noise. Accepts scalars or numpy arrays."""
    return np.sin(x * 0.08) * np.cos(y * 0.06) + np.sin(x * 0.02 + y * 0.04)


def ground_height_at(x, z):
    """
    Ground elevation at horizontal coordinates (x, z).

    This is the height field the flock steers away from, and the same
    function the terrain mesh is built from.
    """
    h = ease_noise(x, z) * 5 + np.sin((x + z) * 0.01) * 3
    if np.ndim(h) == 0:
        return float(h)
    return h


def build_terrain_mesh(world_size: float, segments: int = config.TERRAIN["segments"]
                       ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Sample the height field over a square grid centred on the origin.

    Args:
        world_size: Flock half-extent; the mesh side is world_size * size_factor
        segments: Grid subdivisions per side

    Returns:
        (vertices (V, 3) float32, normals (V, 3) float32, indices (T*3,) uint32)
    """
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}")

    half = world_size * config.TERRAIN["size_factor"] / 2
    axis = np.linspace(-half, half, segments + 1)
    xs, zs = np.meshgrid(axis, axis)
    ys = ground_height_at(xs, zs)

    vertices = np.stack([xs, ys, zs], axis=-1).reshape(-1, 3)

    # Central-difference normals on the height grid
    step = axis[1] - axis[0]
    dy_dz, dy_dx = np.gradient(ys, step)
    normals = np.stack([-dy_dx, np.ones_like(ys), -dy_dz], axis=-1).reshape(-1, 3)
    normals /= np.linalg.norm(normals, axis=1, keepdims=True)

    row = segments + 1
    r, c = np.meshgrid(np.arange(segments), np.arange(segments), indexing="ij")
    a = (r * row + c).ravel()
    b = a + 1
    d = a + row
    e = d + 1
    # Counter-clockwise seen from above
    indices = np.stack([a, d, b, b, d, e], axis=-1).ravel()

    return vertices.astype(np.float32), normals.astype(np.float32), indices.astype(np.uint32)


def build_water_disc(radius: float = config.WATER["radius"],
                     segments: int = config.WATER["segments"]) -> np.ndarray:
    """Triangle-fan outline of the pond in its local xz plane (centre first)."""
    angles = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    rim = np.stack([np.cos(angles) * radius, np.zeros_like(angles), np.sin(angles) * radius], axis=-1)
    return np.vstack([np.zeros((1, 3)), rim]).astype(np.float32)


def advance_ripple(t: float, dt: float, enabled: bool = config.WATER["ripples"]) -> float:
    """Ripple clock after a frame; frozen when ripples are switched off."""
    return t + dt if enabled else t


def water_ripple(t: float) -> Tuple[float, float]:
    """Pond opacity and sway angle (radians) at ripple time t."""
    water = config.WATER
    opacity = water["base_opacity"] + np.sin(t * water["ripple_speed"]) * water["ripple_opacity"]
    sway = np.sin(t * water["sway_speed"]) * water["sway_angle"]
    return float(opacity), float(sway)


def _placements(x, z, y, scale_range, yaw_max, rng) -> dict:
    n = len(x)
    return {
        "positions": np.stack([x, y, z], axis=-1).reshape(n, 3),
        "scales": rng.uniform(*scale_range, size=n),
        "yaw": rng.uniform(0.0, yaw_max, size=n),
    }


def _outside_pond(x, z, clearance: float):
    px, pz = config.DECORATIONS["pond_center"]
    return np.hypot(x - px, z - pz) >= clearance


def build_decorations(world_size: float, rng: np.random.Generator) -> dict:
    """
    Scatter rocks, trees and grass over the terrain.

    Every item is seated on the height field: rocks sink slightly (never
    below y=0), trees stand on the ground and grass floats just above it.
    Trees and grass keep clear of the pond.

    Returns:
        {"rocks" | "trees" | "grass": {"positions": (n, 3), "scales": (n,), "yaw": (n,)}}
    """
    deco = config.DECORATIONS

    rocks = deco["rocks"]
    x = rng.uniform(-rocks["spread"], rocks["spread"], size=rocks["count"])
    z = rng.uniform(-rocks["spread"], rocks["spread"], size=rocks["count"])
    y = np.maximum(0.0, ground_height_at(x, z) - rocks["sink"])
    rock_set = _placements(x, z, y, rocks["scale"], np.pi, rng)

    trees = deco["trees"]
    x = rng.uniform(-world_size, world_size, size=trees["attempts"])
    z = rng.uniform(-world_size, world_size, size=trees["attempts"])
    keep = _outside_pond(x, z, trees["pond_clearance"])
    x, z = x[keep], z[keep]
    tree_set = _placements(x, z, ground_height_at(x, z), trees["scale"], 2.0 * np.pi, rng)

    grass = deco["grass"]
    xs, zs = [], []
    placed = 0
    for _ in range(100):
        if placed >= grass["count"]:
            break
        x = rng.uniform(-world_size, world_size, size=grass["count"])
        z = rng.uniform(-world_size, world_size, size=grass["count"])
        keep = _outside_pond(x, z, grass["pond_clearance"])
        xs.append(x[keep])
        zs.append(z[keep])
        placed += int(keep.sum())
    if placed < grass["count"]:
        raise ValueError(f"world_size {world_size} leaves no room for grass outside the pond")
    x = np.concatenate(xs)[:grass["count"]]
    z = np.concatenate(zs)[:grass["count"]]
    grass_set = _placements(x, z, ground_height_at(x, z) + grass["lift"], grass["scale"], np.pi, rng)

    return {"rocks": rock_set, "trees": tree_set, "grass": grass_set}


def sky_gradient(up):
    """Sky colour for view directions with vertical component up (-1..1)."""
    sky = config.SKY
    h = np.clip(np.asarray(up, dtype=np.float64) * 0.5 + 0.5, 0.0, 1.0)
    t = (h * h * (3.0 - 2.0 * h))[..., None]
    bottom = np.asarray(sky["bottom_color"])
    top = np.asarray(sky["top_color"])
    return bottom + (top - bottom) * t
