"""Global simulation state shared by the director, recorder and controls."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


@dataclass
class SimulationState:
    """Run-wide parameters; one instance lives for the whole process."""

    output_directory: Path
    motion_probability: float = 1.0
    displacement_adjust: float = 1.0
    rotation_adjust: float = 1.0
    tick_count: int = 0
    recording: bool = False
    frame_index: int = 0
    snapshot_requested: bool = False
    settling: bool = False

    @classmethod
    def from_config(cls, config: Dict[str, Any], output_directory: Path) -> "SimulationState":
        return cls(
            output_directory=output_directory,
            motion_probability=min(1.0, max(0.0, float(config["motion_probability"]))),
            displacement_adjust=max(0.0, float(config["displacement_adjust"])),
            rotation_adjust=max(0.0, float(config["rotation_adjust"])),
        )

    def settle(self) -> None:
        """Pin both adjustments to zero for the rest of the run."""
        self.settling = True
        self.displacement_adjust = 0.0
        self.rotation_adjust = 0.0


__all__ = ["SimulationState"]
