"""Keyboard-driven live tuning of simulation parameters."""

from boids.params import SimulationParameters, adjust, tunable_names


class ParameterTuner:
    """Cycles through the tunable parameters and nudges the selected one."""

    def __init__(self, params: SimulationParameters):
        self.params = params
        self.names = tunable_names()
        self.selected = 0

    @property
    def selected_name(self) -> str:
        return self.names[self.selected]

    def select(self, offset: int):
        self.selected = (self.selected + offset) % len(self.names)

    def nudge(self, steps: int) -> SimulationParameters:
        """Move the selected parameter by steps and return the new snapshot."""
        self.params = adjust(self.params, self.selected_name, steps)
        return self.params

    def describe(self) -> str:
        value = getattr(self.params, self.selected_name)
        label = self.selected_name.replace("_", " ")
        if isinstance(value, int):
            return f"{label}: {value}"
        return f"{label}: {value:.2f}"
