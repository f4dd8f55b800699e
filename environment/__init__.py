"""Terrain and water surrounding the flock."""

from .terrain import (
    ground_height_at, build_terrain_mesh, build_water_disc, build_decorations, sky_gradient
)

__all__ = [
    "ground_height_at", "build_terrain_mesh", "build_water_disc", "build_decorations", "sky_gradient"
]
