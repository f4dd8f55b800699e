"""Rendering components for the terrain flock."""

from .birds import BirdRenderer
from .terrain import Scenery, Sky, Terrain, Water
from .text import TextRenderer

__all__ = ["BirdRenderer", "Scenery", "Sky", "Terrain", "Water", "TextRenderer"]
