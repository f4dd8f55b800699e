"""Terrain, scenery, sky and pond rendering."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from OpenGL.arrays import vbo

from config import flock as config
from environment.terrain import (
    advance_ripple, build_decorations, build_terrain_mesh, build_water_disc,
    sky_gradient, water_ripple
)


class Terrain:
    """Draws the rolling ground mesh sampled from the height field."""

    def __init__(self, world_size: float):
        self.color = config.TERRAIN["color"]
        self.vertices, self.normals, self.indices = build_terrain_mesh(world_size)
        self._vbo_vertices = None
        self._vbo_normals = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Upload the static mesh once."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self.vertices, usage=GL_STATIC_DRAW)
            self._vbo_normals = vbo.VBO(self.normals, usage=GL_STATIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Terrain] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def draw(self):
        if not self._vbos_initialized:
            self._init_vbos()

        glColor3f(*self.color)
        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_NORMAL_ARRAY)

        if self._vbos_initialized:
            self._vbo_vertices.bind()
            glVertexPointer(3, GL_FLOAT, 0, None)
            self._vbo_normals.bind()
            glNormalPointer(GL_FLOAT, 0, None)
            self._vbo_normals.unbind()
        else:
            glVertexPointer(3, GL_FLOAT, 0, self.vertices)
            glNormalPointer(GL_FLOAT, 0, self.normals)

        glDrawElements(GL_TRIANGLES, len(self.indices), GL_UNSIGNED_INT, self.indices)

        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_NORMAL_ARRAY)


class Water:
    """Translucent pond disc with a slow ripple in opacity and sway."""

    def __init__(self):
        self.center = config.WATER["center"]
        self.color = config.WATER["color"]
        self.disc = build_water_disc()
        self.ripple_time = 0.0
        self.ripples = config.WATER["ripples"]

    def update(self, dt: float):
        self.ripple_time = advance_ripple(self.ripple_time, dt, self.ripples)

    def draw(self):
        opacity, sway = water_ripple(self.ripple_time)

        glPushMatrix()
        glTranslatef(*self.center)
        glRotatef(math.degrees(sway), 0.0, 1.0, 0.0)

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glDepthMask(GL_FALSE)
        glColor4f(*self.color, opacity)
        glNormal3f(0.0, 1.0, 0.0)

        glBegin(GL_TRIANGLE_FAN)
        for x, y, z in np.asarray(self.disc, dtype=np.float64):
            glVertex3f(x, y, z)
        glEnd()

        glDepthMask(GL_TRUE)
        glDisable(GL_BLEND)
        glPopMatrix()


def icosahedron(radius: float) -> np.ndarray:
    """Triangle list (60, 3) of a regular icosahedron."""
    p = (1.0 + math.sqrt(5.0)) / 2.0
    verts = np.array([
        [-1, p, 0], [1, p, 0], [-1, -p, 0], [1, -p, 0],
        [0, -1, p], [0, 1, p], [0, -1, -p], [0, 1, -p],
        [p, 0, -1], [p, 0, 1], [-p, 0, -1], [-p, 0, 1],
    ], dtype=np.float64)
    verts *= radius / np.linalg.norm(verts[0])
    faces = [
        (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
        (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
        (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
        (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
    ]
    return verts[np.array(faces).ravel()]


class Scenery:
    """Rocks, trees and grass seated on the terrain, compiled into one display list."""

    def __init__(self, world_size: float, seed=None):
        self.items = build_decorations(world_size, np.random.default_rng(seed))
        self._rock = icosahedron(config.DECORATIONS["rocks"]["radius"])
        self._list = None
        counts = ", ".join(f"{len(v['positions'])} {k}" for k, v in self.items.items())
        print(f"[Scenery] Placed {counts}")

    def _place(self, position, yaw, scale):
        glTranslatef(*position)
        glRotatef(math.degrees(yaw), 0.0, 1.0, 0.0)
        glScalef(scale, scale, scale)

    def _draw_rocks(self):
        rocks = self.items["rocks"]
        glColor3f(*config.DECORATIONS["rocks"]["color"])
        for position, yaw, scale in zip(rocks["positions"], rocks["yaw"], rocks["scales"]):
            glPushMatrix()
            self._place(position, yaw, scale)
            glBegin(GL_TRIANGLES)
            for a, b, c in self._rock.reshape(-1, 3, 3):
                # Flat shaded
                normal = np.cross(b - a, c - a)
                glNormal3f(*normal)
                glVertex3f(*a)
                glVertex3f(*b)
                glVertex3f(*c)
            glEnd()
            glPopMatrix()

    def _draw_trees(self, quadric):
        trees = config.DECORATIONS["trees"]
        top_r, bottom_r, trunk_h = trees["trunk"]
        leaf_r, leaf_h, leaf_center = trees["leaves"]
        items = self.items["trees"]
        for position, yaw, scale in zip(items["positions"], items["yaw"], items["scales"]):
            glPushMatrix()
            self._place(position, yaw, scale)
            # GLU cylinders run along +z
            glRotatef(-90.0, 1.0, 0.0, 0.0)
            glColor3f(*trees["trunk_color"])
            gluCylinder(quadric, bottom_r, top_r, trunk_h, 6, 1)
            glTranslatef(0.0, 0.0, leaf_center - leaf_h / 2)
            glColor3f(*trees["leaf_color"])
            gluCylinder(quadric, leaf_r, 0.0, leaf_h, 8, 1)
            glPopMatrix()

    def _draw_grass(self):
        grass = config.DECORATIONS["grass"]
        half_w = grass["blade"][0] / 2
        height = grass["blade"][1]
        items = self.items["grass"]
        glColor3f(*grass["color"])
        glBegin(GL_QUADS)
        for (x, y, z), yaw, scale in zip(items["positions"], items["yaw"], items["scales"]):
            dx = math.cos(yaw) * half_w * scale
            dz = -math.sin(yaw) * half_w * scale
            top = y + height * scale
            glNormal3f(-dz, 0.0, dx)
            glVertex3f(x - dx, y, z - dz)
            glVertex3f(x + dx, y, z + dz)
            glVertex3f(x + dx, top, z + dz)
            glVertex3f(x - dx, top, z - dz)
        glEnd()

    def _compile(self):
        quadric = gluNewQuadric()
        gluQuadricNormals(quadric, GLU_SMOOTH)
        self._list = glGenLists(1)
        glNewList(self._list, GL_COMPILE)
        self._draw_rocks()
        self._draw_trees(quadric)
        self._draw_grass()
        glEndList()
        gluDeleteQuadric(quadric)

    def draw(self):
        if self._list is None:
            self._compile()
        glCallList(self._list)


class Sky:
    """Gradient dome centred on the eye, drawn behind everything else."""

    def __init__(self):
        sky = config.SKY
        radius = sky["radius"]
        slices, stacks = sky["slices"], sky["stacks"]
        lat = np.linspace(-math.pi / 2, math.pi / 2, stacks + 1)
        lon = np.linspace(0.0, 2.0 * math.pi, slices + 1)
        lat_g, lon_g = np.meshgrid(lat, lon, indexing="ij")
        up = np.sin(lat_g)
        self.vertices = np.stack([
            np.cos(lat_g) * np.cos(lon_g), up, np.cos(lat_g) * np.sin(lon_g)
        ], axis=-1) * radius
        self.colors = sky_gradient(up)

    def draw(self, eye):
        glPushAttrib(GL_ENABLE_BIT)
        glDisable(GL_LIGHTING)
        glDisable(GL_FOG)
        glDepthMask(GL_FALSE)

        glPushMatrix()
        glTranslatef(*eye)
        for row in range(len(self.vertices) - 1):
            glBegin(GL_TRIANGLE_STRIP)
            for col in range(self.vertices.shape[1]):
                for r in (row, row + 1):
                    glColor3f(*self.colors[r, col])
                    glVertex3f(*self.vertices[r, col])
            glEnd()
        glPopMatrix()

        glDepthMask(GL_TRUE)
        glPopAttrib()
