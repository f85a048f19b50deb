"""User commands and how they change the simulation state."""
from __future__ import annotations

import enum
import logging

from .recorder import FrameRecorder
from .state import SimulationState

LOG = logging.getLogger("gravel_shotter.controls")


class Command(enum.Enum):
    TOGGLE_RECORDING = "toggle_recording"
    SNAPSHOT = "snapshot"
    INCREASE_DISPLACEMENT = "increase_displacement"
    DECREASE_DISPLACEMENT = "decrease_displacement"
    INCREASE_ROTATION = "increase_rotation"
    DECREASE_ROTATION = "decrease_rotation"


class InputController:
    """Applies discrete commands to the state; never draws or writes frames itself."""

    def __init__(self, state: SimulationState, recorder: FrameRecorder, step: float = 0.1) -> None:
        self.state = state
        self.recorder = recorder
        self.step = step

    def dispatch(self, command: Command) -> None:
        state = self.state
        if command is Command.TOGGLE_RECORDING:
            self.recorder.toggle(state)
        elif command is Command.SNAPSHOT:
            state.snapshot_requested = True
        elif command is Command.INCREASE_DISPLACEMENT:
            state.displacement_adjust = self._nudge(state.displacement_adjust, self.step)
        elif command is Command.DECREASE_DISPLACEMENT:
            state.displacement_adjust = self._nudge(state.displacement_adjust, -self.step)
        elif command is Command.INCREASE_ROTATION:
            state.rotation_adjust = self._nudge(state.rotation_adjust, self.step)
        elif command is Command.DECREASE_ROTATION:
            state.rotation_adjust = self._nudge(state.rotation_adjust, -self.step)
        else:
            raise ValueError(f"Unknown command: {command!r}")
        LOG.debug(
            "%s -> displacement=%.2f rotation=%.2f",
            command.value,
            state.displacement_adjust,
            state.rotation_adjust,
        )

    def _nudge(self, value: float, delta: float) -> float:
        if self.state.settling:
            return 0.0
        return max(0.0, round(value + delta, 6))


__all__ = ["Command", "InputController"]
