"""Per-tick ordering of update, render and capture for a fixed-length run."""
from __future__ import annotations

import logging

from .recorder import FrameRecorder
from .render import Renderer
from .state import SimulationState
from .stones import RandomSource, StoneField

LOG = logging.getLogger("gravel_shotter.director")


class Director:
    """Owns the field and state and runs them for ``total_ticks`` plus a grace period.

    Halfway through the run both adjustments are forced to zero.  Stones
    are not snapped back; each one drifts home once its current segment
    ends and a new (rest) target is drawn.
    """

    def __init__(
        self,
        field: StoneField,
        state: SimulationState,
        rng: RandomSource,
        renderer: Renderer,
        recorder: FrameRecorder,
        total_ticks: int,
        grace_ticks: int = 1,
    ) -> None:
        if total_ticks < 1:
            raise ValueError("A run needs at least one tick")
        self.field = field
        self.state = state
        self.rng = rng
        self.renderer = renderer
        self.recorder = recorder
        self.total_ticks = total_ticks
        self.grace_ticks = max(0, grace_ticks)

    @property
    def midpoint(self) -> int:
        return self.total_ticks // 2

    @property
    def finished(self) -> bool:
        return self.state.tick_count >= self.total_ticks + self.grace_ticks

    def tick(self) -> bool:
        """Run one tick; returns False once the run is over."""
        if self.finished:
            return False
        state = self.state
        state.tick_count += 1

        if state.tick_count == self.midpoint:
            LOG.info("Tick %d: settling, adjustments forced to 0", state.tick_count)
        if state.tick_count >= self.midpoint:
            state.settle()

        self.field.advance(state, self.rng)
        self.renderer.render(self.field)
        self.recorder.on_tick(state)

        if self.finished:
            LOG.info("Run complete after %d ticks (%d frame(s) recorded)", state.tick_count, state.frame_index)
            return False
        return True

    def run(self) -> None:
        while self.tick():
            pass


__all__ = ["Director"]
