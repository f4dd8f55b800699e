"""Bird rendering - instance transforms expanded on the CPU with Numba, drawn from VBOs."""

import colorsys
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import flock as config


# Local-space bird: two swept wings and a body triangle, tail toward -z
BIRD_TRIANGLES = np.array([
    [0.0, 0.0, 0.0], [-0.5, 0.2, -2.2], [-0.2, 0.0, -1.0],   # left wing
    [0.0, 0.0, 0.0], [0.5, 0.2, -2.2], [0.2, 0.0, -1.0],     # right wing
    [0.0, 0.0, 0.0], [-0.2, 0.0, -1.0], [0.2, 0.0, -1.0],    # body
], dtype=np.float64)


@njit(parallel=True, fastmath=True, cache=True)
def build_bird_vertices(
    positions: np.ndarray,
    orientations: np.ndarray,
    colors: np.ndarray,
    model: np.ndarray,
    vertices: np.ndarray,
    normals: np.ndarray,
    vert_colors: np.ndarray,
    num_boids: int
):
    """Transform the bird model by every instance basis into flat vertex arrays."""
    verts_per_bird = model.shape[0]
    for i in prange(num_boids):
        base = i * verts_per_bird
        m = orientations[i]
        for v in range(verts_per_bird):
            lx, ly, lz = model[v, 0], model[v, 1], model[v, 2]
            for k in range(3):
                vertices[base + v, k] = (
                    positions[i, k] + m[k, 0] * lx + m[k, 1] * ly + m[k, 2] * lz
                )
            vert_colors[base + v, 0] = colors[i, 0]
            vert_colors[base + v, 1] = colors[i, 1]
            vert_colors[base + v, 2] = colors[i, 2]

        # Flat normals, one per triangle
        for t in range(0, verts_per_bird, 3):
            ax = vertices[base + t + 1, 0] - vertices[base + t, 0]
            ay = vertices[base + t + 1, 1] - vertices[base + t, 1]
            az = vertices[base + t + 1, 2] - vertices[base + t, 2]
            bx = vertices[base + t + 2, 0] - vertices[base + t, 0]
            by = vertices[base + t + 2, 1] - vertices[base + t, 1]
            bz = vertices[base + t + 2, 2] - vertices[base + t, 2]
            nx = ay * bz - az * by
            ny = az * bx - ax * bz
            nz = ax * by - ay * bx
            n_len = (nx * nx + ny * ny + nz * nz) ** 0.5
            if n_len > 1e-9:
                nx /= n_len
                ny /= n_len
                nz /= n_len
            for v in range(3):
                normals[base + t + v, 0] = nx
                normals[base + t + v, 1] = ny
                normals[base + t + v, 2] = nz


def bird_colors(count: int, rng: np.random.Generator) -> np.ndarray:
    """Pale blue palette with a gentle hue wave across the flock."""
    birds = config.BIRDS
    colors = np.zeros((count, 3), dtype=np.float32)
    for i in range(count):
        hue = birds["hue_base"] + np.sin(i * birds["hue_step"]) * birds["hue_spread"]
        lightness = birds["lightness_min"] + rng.random() * birds["lightness_jitter"]
        colors[i] = colorsys.hls_to_rgb(hue % 1.0, lightness, birds["saturation"])
    return colors


class BirdRenderer:
    """Draws every bird of a flock as a small flat-shaded glider."""

    def __init__(self, seed=None):
        self._rng = np.random.default_rng(seed)
        self._count = -1
        self._colors = np.zeros((0, 3), dtype=np.float32)
        self._vbo_vertices = None
        self._vbo_normals = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_normals = vbo.VBO(self._normals, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            # Fallback to client-side arrays
            print(f"[Birds] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def _resize(self, count: int):
        """Reallocate buffers after a flock respawn."""
        self._count = count
        self._colors = bird_colors(count, self._rng).astype(np.float64)
        total = count * len(BIRD_TRIANGLES)
        self._vertices = np.zeros((total, 3), dtype=np.float32)
        self._normals = np.zeros((total, 3), dtype=np.float32)
        self._vert_colors = np.zeros((total, 3), dtype=np.float32)
        if self._vbos_initialized:
            self._vbo_vertices.delete()
            self._vbo_normals.delete()
            self._vbo_colors.delete()
            self._vbos_initialized = False

    def draw(self, flock):
        if len(flock) != self._count:
            self._resize(len(flock))
        if self._count == 0:
            return

        build_bird_vertices(
            flock.positions,
            flock.orientations,
            self._colors,
            BIRD_TRIANGLES,
            self._vertices,
            self._normals,
            self._vert_colors,
            self._count
        )
        total_verts = len(self._vertices)

        if not self._vbos_initialized:
            self._init_vbos()

        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_NORMAL_ARRAY)
        glEnableClientState(GL_COLOR_ARRAY)

        if self._vbos_initialized:
            self._vbo_vertices.set_array(self._vertices)
            self._vbo_normals.set_array(self._normals)
            self._vbo_colors.set_array(self._vert_colors)

            self._vbo_vertices.bind()
            glVertexPointer(3, GL_FLOAT, 0, None)
            self._vbo_normals.bind()
            glNormalPointer(GL_FLOAT, 0, None)
            self._vbo_colors.bind()
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_colors.unbind()
        else:
            glVertexPointer(3, GL_FLOAT, 0, self._vertices)
            glNormalPointer(GL_FLOAT, 0, self._normals)
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors)
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_NORMAL_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)
