"""HUD text overlay."""

import pygame
from OpenGL.GL import *

from config import flock as config


class TextRenderer:
    """Renders status lines in the top-left corner using pygame fonts."""

    def __init__(self, font_name: str = "monospace", font_size: int = 16, line_spacing: int = 22):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.line_spacing = line_spacing
        self.color = tuple(int(c * 255) for c in config.COLORS["text"])
        self._cache = {}

    def _surface_data(self, text: str):
        """Rasterized RGBA bytes for a line, reused while the text is unchanged."""
        if text not in self._cache:
            if len(self._cache) > 64:
                self._cache.clear()
            surface = self.font.render(text, True, self.color)
            self._cache[text] = (pygame.image.tostring(surface, "RGBA", True), surface.get_size())
        return self._cache[text]

    def draw_lines(self, lines, x: int, y: int, screen_size: tuple):
        """Draw lines of text downward from (x, y), measured from the top-left."""
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glPushAttrib(GL_ENABLE_BIT)
        glDisable(GL_LIGHTING)
        glDisable(GL_DEPTH_TEST)
        glDisable(GL_FOG)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        for row, text in enumerate(lines):
            data, (w, h) = self._surface_data(text)
            glRasterPos2f(x, screen_size[1] - y - row * self.line_spacing - h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)

        glPopAttrib()

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
