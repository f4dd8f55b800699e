"""Flock state and per-frame update - exhaustive neighbor scan with Numba JIT kernels."""

import math
import numpy as np
from numba import njit
from typing import Callable, Iterator, Optional

from config import flock as config
from .boid import Agent, DEFAULT_ORIENTATION, orientation_basis
from .params import SimulationParameters


HeightField = Callable[[float, float], float]


# ============================================================================
# NUMBA JIT-COMPILED KERNELS
# ============================================================================

@njit(cache=True)
def compute_steering(
    positions: np.ndarray,
    velocities: np.ndarray,
    ground: np.ndarray,
    alignment: np.ndarray,
    cohesion: np.ndarray,
    separation: np.ndarray,
    terrain: np.ndarray,
    wind: np.ndarray,
    accelerations: np.ndarray,
    perception_radius: float,
    separation_radius: float,
    align_strength: float,
    cohesion_strength: float,
    separation_strength: float,
    max_speed: float,
    terrain_avoid: float,
    sky_lift: float,
    wind_strength: float,
    elapsed: float,
    clearance: float,
    terrain_scale: float,
    wind_freq_x: float,
    wind_freq_z: float,
    wind_spatial: float,
    wind_damping: float,
    sep_epsilon: float,
    num_boids: int
):
    """Compute every steering term from the pre-step state, O(n^2) pairwise."""
    for i in range(num_boids):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]

        align_x, align_y, align_z = 0.0, 0.0, 0.0
        coh_x, coh_y, coh_z = 0.0, 0.0, 0.0
        sep_x, sep_y, sep_z = 0.0, 0.0, 0.0
        neighbor_count = 0

        for j in range(num_boids):
            if i == j:
                continue

            dx = px - positions[j, 0]
            dy = py - positions[j, 1]
            dz = pz - positions[j, 2]
            dist = math.sqrt(dx * dx + dy * dy + dz * dz)

            if dist < perception_radius:
                align_x += velocities[j, 0]
                align_y += velocities[j, 1]
                align_z += velocities[j, 2]

                coh_x += positions[j, 0]
                coh_y += positions[j, 1]
                coh_z += positions[j, 2]

                neighbor_count += 1

            # Summed, not averaged, and independent of neighbor_count
            if dist < separation_radius:
                inv = 1.0 / max(dist, sep_epsilon)
                sep_x += dx * inv
                sep_y += dy * inv
                sep_z += dz * inv

        if neighbor_count > 0:
            align_x /= neighbor_count
            align_y /= neighbor_count
            align_z /= neighbor_count

            align_mag = math.sqrt(align_x * align_x + align_y * align_y + align_z * align_z)
            if align_mag > 0:
                align_x = align_x / align_mag * max_speed
                align_y = align_y / align_mag * max_speed
                align_z = align_z / align_mag * max_speed

            alignment[i, 0] = (align_x - velocities[i, 0]) * align_strength
            alignment[i, 1] = (align_y - velocities[i, 1]) * align_strength
            alignment[i, 2] = (align_z - velocities[i, 2]) * align_strength

            cohesion[i, 0] = (coh_x / neighbor_count - px) * cohesion_strength
            cohesion[i, 1] = (coh_y / neighbor_count - py) * cohesion_strength
            cohesion[i, 2] = (coh_z / neighbor_count - pz) * cohesion_strength
        else:
            for k in range(3):
                alignment[i, k] = 0.0
                cohesion[i, k] = 0.0

        separation[i, 0] = sep_x * separation_strength
        separation[i, 1] = sep_y * separation_strength
        separation[i, 2] = sep_z * separation_strength

        avoid = max(0.0, ground[i] + clearance - py)
        terrain[i, 0] = 0.0
        terrain[i, 1] = avoid * terrain_avoid * terrain_scale + sky_lift
        terrain[i, 2] = 0.0

        wind[i, 0] = math.sin(elapsed * wind_freq_x + pz * wind_spatial) * wind_strength * wind_damping
        wind[i, 1] = 0.0
        wind[i, 2] = math.cos(elapsed * wind_freq_z + px * wind_spatial) * wind_strength * wind_damping

        for k in range(3):
            accelerations[i, k] = (
                alignment[i, k] + cohesion[i, k] + separation[i, k] + terrain[i, k] + wind[i, k]
            )


@njit(cache=True)
def integrate(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    orientations: np.ndarray,
    max_speed: float,
    half_horizontal: float,
    half_vertical: float,
    altitude_floor: float,
    dt: float,
    frame_rate: float,
    velocity_epsilon: float,
    num_boids: int
):
    """Integrate velocity and position, cap speed, wrap bounds and orient."""
    for i in range(num_boids):
        scale = dt * frame_rate
        velocities[i, 0] += accelerations[i, 0] * scale
        velocities[i, 1] += accelerations[i, 1] * scale
        velocities[i, 2] += accelerations[i, 2] * scale

        speed = math.sqrt(
            velocities[i, 0] ** 2 +
            velocities[i, 1] ** 2 +
            velocities[i, 2] ** 2
        )
        if speed > max_speed:
            cap = max_speed / speed
            velocities[i, 0] *= cap
            velocities[i, 1] *= cap
            velocities[i, 2] *= cap

        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt
        positions[i, 2] += velocities[i, 2] * dt

        # Teleport wrap, y band is narrower
        for dim in range(3):
            half = half_vertical if dim == 1 else half_horizontal
            if positions[i, dim] > half:
                positions[i, dim] = -half
            if positions[i, dim] < -half:
                positions[i, dim] = half

        positions[i, 1] = max(altitude_floor, positions[i, 1])

        orientation_basis(velocities[i], orientations[i], orientations[i], velocity_epsilon)


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Flock:
    """
    A flock of birds advanced one frame at a time.

    State is stored as arrays (positions, velocities, accelerations,
    orientations); indexing the flock yields Agent views into them. The
    per-term steering arrays of the last step (alignment, cohesion,
    separation, terrain, wind) stay readable after step() returns.
    """

    _kernels_ready = False

    def __init__(self, num_boids: int = config.FLOCK["population"], seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)
        self.elapsed_time = 0.0
        self._install(self._spawn_state(num_boids))
        self._warmup_numba()
        print(f"[Flock] Spawned {num_boids} birds")

    @classmethod
    def from_state(
        cls,
        positions: np.ndarray,
        velocities: np.ndarray,
        orientations: Optional[np.ndarray] = None,
        seed: Optional[int] = None
    ) -> "Flock":
        """Build a flock from explicit agent state (copied)."""
        positions = np.array(positions, dtype=np.float64).reshape(-1, 3)
        velocities = np.array(velocities, dtype=np.float64).reshape(-1, 3)
        if positions.shape != velocities.shape:
            raise ValueError(
                f"positions {positions.shape} and velocities {velocities.shape} differ in shape"
            )
        n = len(positions)
        if orientations is None:
            orientations = np.tile(DEFAULT_ORIENTATION, (n, 1, 1))
        else:
            orientations = np.array(orientations, dtype=np.float64)
            if orientations.shape != (n, 3, 3):
                raise ValueError(f"orientations must have shape ({n}, 3, 3), got {orientations.shape}")

        flock = cls.__new__(cls)
        flock._rng = np.random.default_rng(seed)
        flock.elapsed_time = 0.0
        flock._install(cls._empty_state(n))
        flock.positions[:] = positions
        flock.velocities[:] = velocities
        flock.orientations[:] = orientations
        flock._warmup_numba()
        return flock

    @staticmethod
    def _empty_state(num_boids: int) -> dict:
        if num_boids < 0:
            raise ValueError(f"num_boids must be >= 0, got {num_boids}")
        state = {
            name: np.zeros((num_boids, 3), dtype=np.float64)
            for name in ("positions", "velocities", "accelerations",
                         "alignment", "cohesion", "separation", "terrain", "wind")
        }
        state["orientations"] = np.tile(DEFAULT_ORIENTATION, (num_boids, 1, 1))
        state["ground"] = np.zeros(num_boids, dtype=np.float64)
        return state

    def _spawn_state(self, num_boids: int) -> dict:
        """Fresh state with randomized positions and velocities."""
        state = self._empty_state(num_boids)
        spawn = config.SPAWN
        state["positions"][:] = self._rng.uniform(
            spawn["position_min"], spawn["position_max"], size=(num_boids, 3)
        )
        state["velocities"][:] = self._rng.uniform(
            spawn["velocity_min"], spawn["velocity_max"], size=(num_boids, 3)
        )
        return state

    def _install(self, state: dict):
        """Swap in a complete state dict in one go."""
        self.positions = state["positions"]
        self.velocities = state["velocities"]
        self.accelerations = state["accelerations"]
        self.orientations = state["orientations"]
        self.alignment = state["alignment"]
        self.cohesion = state["cohesion"]
        self.separation = state["separation"]
        self.terrain = state["terrain"]
        self.wind = state["wind"]
        self._ground = state["ground"]

    @classmethod
    def _warmup_numba(cls):
        """Pre-compile Numba kernels once per process."""
        if cls._kernels_ready:
            return

        n = 4
        pos = np.random.rand(n, 3) * 10
        vel = np.random.rand(n, 3)
        forces = [np.zeros((n, 3)) for _ in range(6)]
        orient = np.tile(DEFAULT_ORIENTATION, (n, 1, 1))

        compute_steering(
            pos, vel, np.zeros(n), *forces,
            5.0, 2.0, 0.1, 0.1, 0.1, 10.0, 1.0, 0.1, 0.1, 0.0,
            6.0, 0.02, 0.1, 0.12, 0.01, 0.02, 0.001, n
        )
        integrate(pos, vel, forces[-1], orient, 10.0, 50.0, 30.0, 1.0, 0.016, 60.0, 1e-6, n)

        cls._kernels_ready = True
        print("[Flock] Numba kernels compiled")

    @property
    def num_boids(self) -> int:
        return len(self.positions)

    def __len__(self) -> int:
        return self.num_boids

    def __getitem__(self, index: int) -> Agent:
        return Agent(
            position=self.positions[index],
            velocity=self.velocities[index],
            acceleration=self.accelerations[index],
            orientation=self.orientations[index],
        )

    def __iter__(self) -> Iterator[Agent]:
        for i in range(self.num_boids):
            yield self[i]

    def respawn(self, num_boids: int):
        """Discard every bird and spawn a new population of num_boids."""
        self._install(self._spawn_state(num_boids))
        print(f"[Flock] Respawned {num_boids} birds")

    def sync(self, params: SimulationParameters) -> bool:
        """Respawn if the population size changed. Returns True on respawn."""
        if params.population == self.num_boids:
            return False
        self.respawn(params.population)
        return True

    def _sample_ground(self, height_at: HeightField) -> np.ndarray:
        """Query the height field once per bird at its current x/z."""
        for i in range(self.num_boids):
            self._ground[i] = height_at(float(self.positions[i, 0]), float(self.positions[i, 2]))
        return self._ground

    def step(
        self,
        dt: float,
        params: SimulationParameters,
        height_at: HeightField,
        elapsed_time: Optional[float] = None
    ):
        """
        Advance every bird by one frame.

        Args:
            dt: Frame time in seconds, already clamped by the caller
            params: Parameter snapshot for this frame
            height_at: Ground elevation oracle (x, z) -> y
            elapsed_time: Wind clock override; defaults to the flock's own
                clock advanced by dt
        """
        if elapsed_time is None:
            self.elapsed_time += dt
        else:
            self.elapsed_time = float(elapsed_time)

        n = self.num_boids
        if n == 0:
            return

        physics = config.PHYSICS
        ground = self._sample_ground(height_at)

        compute_steering(
            self.positions,
            self.velocities,
            ground,
            self.alignment,
            self.cohesion,
            self.separation,
            self.terrain,
            self.wind,
            self.accelerations,
            float(params.perception_radius),
            float(params.separation_radius),
            float(params.align_strength),
            float(params.cohesion_strength),
            float(params.separation_strength),
            float(params.max_speed),
            float(params.terrain_avoid),
            float(params.sky_lift),
            float(params.wind_strength),
            float(self.elapsed_time),
            float(physics["terrain_clearance"]),
            float(physics["terrain_scale"]),
            float(physics["wind_time_freq_x"]),
            float(physics["wind_time_freq_z"]),
            float(physics["wind_spatial_freq"]),
            float(physics["wind_damping"]),
            float(physics["separation_epsilon"]),
            n
        )

        integrate(
            self.positions,
            self.velocities,
            self.accelerations,
            self.orientations,
            float(params.max_speed),
            float(params.world_size),
            float(params.vertical_extent),
            float(physics["altitude_floor"]),
            float(dt),
            float(physics["frame_rate"]),
            float(physics["velocity_epsilon"]),
            n
        )

    def transforms(self) -> np.ndarray:
        """Per-bird 4x4 instance matrices (rotation basis plus translation)."""
        n = self.num_boids
        matrices = np.zeros((n, 4, 4), dtype=np.float64)
        matrices[:, :3, :3] = self.orientations
        matrices[:, :3, 3] = self.positions
        matrices[:, 3, 3] = 1.0
        return matrices


def create_flock(population_size: int, seed: Optional[int] = None) -> Flock:
    """Spawn a new flock of population_size birds."""
    return Flock(num_boids=population_size, seed=seed)
