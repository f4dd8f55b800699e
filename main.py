"""
Terrain Flock
=============

A real-time flocking simulation of birds gliding over rolling terrain.

Usage:
    python main.py                  # Default flock
    python main.py --birds 200      # Larger flock
    python main.py --seed 7         # Reproducible spawn
    python main.py --bird-view      # Start in the chase camera

Controls:
    - W/S: Rotate camera up/down
    - A/D: Rotate camera left/right
    - Q/E: Zoom in/out
    - Mouse drag: Rotate camera
    - Mouse wheel: Zoom
    - SPACE: Pause/Resume
    - B: Toggle bird view
    - O: Orbit view
    - N: Follow next bird
    - TAB / Shift+TAB: Select parameter
    - -/=: Adjust selected parameter
    - ESC: Quit
"""

import argparse

from config import flock as config
from boids.params import SimulationParameters


def main():
    parser = argparse.ArgumentParser(description="Terrain flocking simulation")
    lo, hi, _ = config.TUNING["population"]
    parser.add_argument("--birds", "-n", type=int, default=config.FLOCK["population"],
                        help=f"Number of birds ({lo}-{hi})")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the spawn and scenery randomizers")
    parser.add_argument("--bird-view", action="store_true", help="Start in the chase camera")
    args = parser.parse_args()

    if not lo <= args.birds <= hi:
        parser.error(f"--birds must be between {lo} and {hi}")

    # Imported here so --help works without a display
    from core import Application

    params = SimulationParameters.from_config(population=args.birds)
    app = Application(params=params, seed=args.seed, bird_view=args.bird_view)
    app.run()


if __name__ == "__main__":
    main()
