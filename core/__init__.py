"""Core application components."""

from .camera import Camera, ChaseCamera
from .input_handler import InputHandler
from .tuning import ParameterTuner
from .application import Application

__all__ = ["Camera", "ChaseCamera", "InputHandler", "ParameterTuner", "Application"]
