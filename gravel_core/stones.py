"""Stones, the stone field and the per-tick random walk that moves them.

Every stone coasts in a straight line toward a target for a number of
ticks (a segment).  When its cycle counter runs out a new segment is drawn:
either an idle one (stand still) or an active one with a fresh target whose
amplitude grows with the stone's row.  Velocities are always derived as
remaining distance over segment length, so a stone lands exactly on its
target when the segment ends.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Tuple

from .state import SimulationState

CYCLE_RANGE: Tuple[int, int] = (50, 300)
MAX_DISPLACEMENT = 0.5  # cells
MAX_ROTATION = math.pi / 4.0


class RandomSource(Protocol):
    """Anything that can hand out uniform floats and half-open ints."""

    def uniform(self, low: float, high: float) -> float: ...

    def randint(self, low: int, high: int) -> int: ...


class PyRandomSource:
    """RandomSource backed by :class:`random.Random`; pass a seed for repeatable runs."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def randint(self, low: int, high: int) -> int:
        # half-open like range(): low <= n < high
        return self._rng.randrange(low, high)


@dataclass
class Stone:
    """A single grid cell with its current displacement and coasting velocity."""

    grid_x: int
    grid_y: int
    offset_x: float = 0.0
    offset_y: float = 0.0
    rotation: float = 0.0
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    velocity_rot: float = 0.0
    cycles_remaining: int = 0


def advance(
    stone: Stone,
    state: SimulationState,
    rng: RandomSource,
    rows: int,
    cycle_range: Tuple[int, int] = CYCLE_RANGE,
) -> Stone:
    """Move ``stone`` forward by one tick (in place) and return it."""

    if stone.cycles_remaining == 0:
        if rng.uniform(0.0, 1.0) > state.motion_probability:
            stone.velocity_x = 0.0
            stone.velocity_y = 0.0
            stone.velocity_rot = 0.0
            stone.cycles_remaining = rng.randint(*cycle_range)
            return stone

        depth_factor = stone.grid_y / rows
        disp_factor = depth_factor * state.displacement_adjust
        rot_factor = depth_factor * state.rotation_adjust

        target_x = disp_factor * rng.uniform(-MAX_DISPLACEMENT, MAX_DISPLACEMENT)
        target_y = disp_factor * rng.uniform(-MAX_DISPLACEMENT, MAX_DISPLACEMENT)
        target_rot = rot_factor * rng.uniform(-MAX_ROTATION, MAX_ROTATION)
        new_cycles = rng.randint(*cycle_range)

        stone.velocity_x = (target_x - stone.offset_x) / new_cycles
        stone.velocity_y = (target_y - stone.offset_y) / new_cycles
        stone.velocity_rot = (target_rot - stone.rotation) / new_cycles
        stone.cycles_remaining = new_cycles
    else:
        stone.offset_x += stone.velocity_x
        stone.offset_y += stone.velocity_y
        stone.rotation += stone.velocity_rot
        stone.cycles_remaining -= 1
    return stone


@dataclass
class StoneField:
    """The fixed grid of stones, stored row by row."""

    rows: int
    cols: int
    stones: List[Stone] = field(default_factory=list)
    cycle_range: Tuple[int, int] = CYCLE_RANGE

    @classmethod
    def build(cls, rows: int, cols: int, cycle_range: Tuple[int, int] = CYCLE_RANGE) -> "StoneField":
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid must have at least one row and column, got {rows}x{cols}")
        low, high = cycle_range
        if not 0 < low < high:
            raise ValueError(f"Invalid cycle range {cycle_range!r}")
        stones = [Stone(x, y) for y in range(rows) for x in range(cols)]
        return cls(rows=rows, cols=cols, stones=stones, cycle_range=(int(low), int(high)))

    def __iter__(self) -> Iterator[Stone]:
        return iter(self.stones)

    def __len__(self) -> int:
        return len(self.stones)

    def advance(self, state: SimulationState, rng: RandomSource) -> None:
        for stone in self.stones:
            advance(stone, state, rng, self.rows, self.cycle_range)

    def at_rest(self, tolerance: float = 1e-9) -> bool:
        return all(
            abs(s.offset_x) <= tolerance and abs(s.offset_y) <= tolerance and abs(s.rotation) <= tolerance
            for s in self.stones
        )


__all__ = [
    "CYCLE_RANGE",
    "MAX_DISPLACEMENT",
    "MAX_ROTATION",
    "PyRandomSource",
    "RandomSource",
    "Stone",
    "StoneField",
    "advance",
]
