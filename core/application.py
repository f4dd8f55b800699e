"""Main application class that ties everything together."""

from typing import Optional

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import flock as config
from .camera import Camera, ChaseCamera
from .input_handler import InputHandler
from .tuning import ParameterTuner
from rendering import BirdRenderer, Scenery, Sky, Terrain, Water, TextRenderer
from boids.flock import Flock
from boids.params import SimulationParameters
from environment import ground_height_at


class Application:
    """Main application managing the frame loop, simulation and rendering."""

    def __init__(
        self,
        params: Optional[SimulationParameters] = None,
        seed: Optional[int] = None,
        bird_view: bool = False
    ):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        self.params = params or SimulationParameters.from_config()

        # Cameras and input
        self.camera = Camera()
        self.chase_camera = ChaseCamera()
        self.input_handler = InputHandler(self.camera)
        self.tuner = ParameterTuner(self.params)

        # Rendering components
        self.sky = Sky()
        self.terrain = Terrain(self.params.world_size)
        self.scenery = Scenery(self.params.world_size, seed=seed)
        self.water = Water()
        self.birds = BirdRenderer(seed=seed)
        self.text_renderer = TextRenderer()

        # Simulation
        self.flock = Flock(num_boids=self.params.population, seed=seed)

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False
        self.bird_view = bird_view
        self.fps = 0

        self._setup_gl()
        print(f"[App] {self.flock.num_boids} birds, {'bird' if bird_view else 'orbit'} view")

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)

        glEnable(GL_FOG)
        glFogi(GL_FOG_MODE, GL_EXP2)
        glFogfv(GL_FOG_COLOR, config.COLORS["fog"])
        glFogf(GL_FOG_DENSITY, config.COLORS["fog_density"])

        glEnable(GL_LIGHTING)
        glEnable(GL_LIGHT0)
        glEnable(GL_NORMALIZE)
        glEnable(GL_COLOR_MATERIAL)
        glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
        glLightModeli(GL_LIGHT_MODEL_TWO_SIDE, GL_TRUE)
        glLightModelfv(GL_LIGHT_MODEL_AMBIENT, config.SUN["ambient"])
        glLightfv(GL_LIGHT0, GL_DIFFUSE, config.SUN["diffuse"])

    def _set_projection(self):
        fov = config.CHASE_CAMERA["fov"] if self.bird_view else config.CAMERA["fov"]
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            fov,
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _apply_params(self, params: SimulationParameters):
        """Take a new parameter snapshot between frames."""
        self.params = params
        self.flock.sync(params)

    def _perform(self, action: str):
        """Carry out a discrete input action."""
        if action == "quit":
            self.running = False
        elif action == "toggle_pause":
            self.paused = not self.paused
        elif action == "toggle_bird_view":
            self.bird_view = not self.bird_view
        elif action == "orbit_view":
            self.bird_view = False
        elif action == "next_bird":
            self.chase_camera.next_bird(self.flock)
        elif action == "next_param":
            self.tuner.select(1)
        elif action == "previous_param":
            self.tuner.select(-1)
        elif action == "increase":
            self._apply_params(self.tuner.nudge(1))
        elif action == "decrease":
            self._apply_params(self.tuner.nudge(-1))

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            action = self.input_handler.handle_event(event)
            if action is not None:
                self._perform(action)

    def _update(self, dt: float):
        """Advance one frame."""
        # Cap dt to prevent instability after stalls
        dt = min(dt, config.PHYSICS["max_frame_dt"])

        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)

        if self.paused:
            return

        self.flock.step(dt, self.params, ground_height_at)
        if self.bird_view:
            self.chase_camera.update(dt, self.flock)
        self.water.update(dt)

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._set_projection()

        if self.bird_view:
            self.chase_camera.apply()
            eye = self.chase_camera.position
        else:
            self.camera.apply()
            eye = self.camera.get_position()

        self.sky.draw(eye)

        # Directional light positioned in world space
        glLightfv(GL_LIGHT0, GL_POSITION, (*config.SUN["position"], 0.0))

        self.terrain.draw()
        self.scenery.draw()
        self.birds.draw(self.flock)
        self.water.draw()

        # Draw HUD
        screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        mode = "Bird view" if self.bird_view else "Orbit view"
        status = "  |  PAUSED" if self.paused else ""
        self.text_renderer.draw_lines(
            [
                f"{self.flock.num_boids} birds  |  {mode}  |  FPS: {self.fps:.0f}{status}",
                f"[TAB] {self.tuner.describe()}  [-/=] adjust",
                "[SPACE] pause  [B] bird view  [O] orbit  [N] next bird",
            ],
            10, 10, screen_size
        )

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = self.clock.tick() / 1000.0  # Uncapped FPS
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
