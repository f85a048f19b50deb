"""Frame capture cadence, frame filenames and the output directory."""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable, Optional

import pygame

from .state import SimulationState

LOG = logging.getLogger("gravel_shotter.recorder")

CaptureFn = Callable[[Path], None]


class DirectoryStatus(enum.Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class OutputDirectoryError(RuntimeError):
    """The frames directory could not be created; recording cannot proceed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Problem creating directory {path}: {reason}")
        self.path = path


def ensure_output_directory(path: Path) -> DirectoryStatus:
    """Create ``path`` (and parents) if needed; an existing directory is fine."""
    try:
        path.mkdir(parents=True)
    except FileExistsError as exc:
        if path.is_dir():
            return DirectoryStatus.ALREADY_EXISTS
        raise OutputDirectoryError(path, "a file with that name already exists") from exc
    except OSError as exc:
        raise OutputDirectoryError(path, exc.strerror or str(exc)) from exc
    return DirectoryStatus.CREATED


class SurfaceCapture:
    """Saves a pygame surface to disk; drops the request if the display is gone."""

    def __init__(self, surface: Optional[pygame.Surface] = None) -> None:
        self.surface = surface

    def __call__(self, path: Path) -> None:
        surface = self.surface
        if surface is None:
            surface = pygame.display.get_surface() if pygame.display.get_init() else None
        if surface is None:
            LOG.debug("No display surface, dropping capture of %s", path)
            return
        try:
            pygame.image.save(surface, str(path))
        except pygame.error as exc:
            LOG.debug("Capture of %s dropped: %s", path, exc)


class FrameRecorder:
    """Decides once per tick whether the rendered frame is written to disk."""

    def __init__(
        self,
        capture: CaptureFn,
        snapshot_path: Path,
        stride: int = 2,
        max_frame_index: int = 9999,
        prefix: str = "shotter",
    ) -> None:
        if stride < 1:
            raise ValueError("Capture stride must be at least 1")
        self.capture = capture
        self.snapshot_path = snapshot_path
        self.stride = stride
        self.max_frame_index = max_frame_index
        self.prefix = prefix

    def frame_path(self, state: SimulationState) -> Path:
        return state.output_directory / f"{self.prefix}{state.frame_index:04d}.png"

    # ------------------------------------------------------------------
    def start(self, state: SimulationState) -> DirectoryStatus:
        status = ensure_output_directory(state.output_directory)
        state.recording = True
        state.frame_index = 0
        LOG.info("Recording ON -> %s (%s)", state.output_directory, status.value)
        return status

    def stop(self, state: SimulationState) -> None:
        state.recording = False
        LOG.info("Recording OFF after %d frame(s)", state.frame_index)

    def toggle(self, state: SimulationState) -> None:
        if state.recording:
            self.stop(state)
        else:
            self.start(state)

    # ------------------------------------------------------------------
    def on_tick(self, state: SimulationState) -> None:
        if state.snapshot_requested:
            state.snapshot_requested = False
            self.capture(self.snapshot_path)
            LOG.info("Saved snapshot: %s", self.snapshot_path)

        if not state.recording or state.tick_count % self.stride != 0:
            return
        if state.frame_index >= self.max_frame_index:
            # no wraparound; the index stays at its cap
            state.recording = False
            LOG.info("Frame index would pass %d, recording stopped", self.max_frame_index)
            return
        state.frame_index += 1
        path = self.frame_path(state)
        self.capture(path)
        LOG.debug("Captured frame %s", path)


__all__ = [
    "CaptureFn",
    "DirectoryStatus",
    "FrameRecorder",
    "OutputDirectoryError",
    "SurfaceCapture",
    "ensure_output_directory",
]
