"""Draw the stone field onto a pygame surface."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
import pygame

from .colors import stone_color
from .stones import StoneField

# unit square around its centre, in cells
_UNIT_SQUARE = np.array([(-0.5, -0.5), (0.5, -0.5), (0.5, 0.5), (-0.5, 0.5)], dtype=float)


@dataclass(frozen=True)
class Layout:
    """Pixel geometry of the grid; row 0 is the top of the window."""

    rows: int
    cols: int
    cell: int
    margin: int

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Layout":
        return cls(
            rows=int(config["rows"]),
            cols=int(config["cols"]),
            cell=int(config["cell_size"]),
            margin=int(config["margin"]),
        )

    @property
    def width(self) -> int:
        return self.cols * self.cell + 2 * self.margin

    @property
    def height(self) -> int:
        return self.rows * self.cell + 2 * self.margin

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


def stone_polygons(field: StoneField, layout: Layout) -> np.ndarray:
    """Return the pixel corners of every stone as an ``(n, 4, 2)`` array."""

    n = len(field)
    centers = np.empty((n, 2), dtype=float)
    angles = np.empty(n, dtype=float)
    for i, stone in enumerate(field):
        centers[i, 0] = stone.grid_x + 0.5 + stone.offset_x
        centers[i, 1] = stone.grid_y + 0.5 + stone.offset_y
        angles[i] = stone.rotation

    cos = np.cos(angles)[:, None]
    sin = np.sin(angles)[:, None]
    xs = _UNIT_SQUARE[None, :, 0]
    ys = _UNIT_SQUARE[None, :, 1]
    corners = np.empty((n, 4, 2), dtype=float)
    corners[:, :, 0] = xs * cos - ys * sin + centers[:, 0:1]
    corners[:, :, 1] = xs * sin + ys * cos + centers[:, 1:2]
    return corners * layout.cell + layout.margin


class Renderer:
    """Clears the surface and strokes one rotated square outline per stone."""

    def __init__(
        self,
        surface: pygame.Surface,
        layout: Layout,
        line_width: float = 0.06,
        background: Tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        self.surface = surface
        self.layout = layout
        self.stroke = max(1, int(round(line_width * layout.cell)))
        self.background = tuple(background)

    def render(self, field: StoneField) -> pygame.Surface:
        self.surface.fill(self.background)
        polygons = stone_polygons(field, self.layout)
        for stone, corners in zip(field, polygons):
            color = stone_color(stone, field.rows, field.cols)
            pygame.draw.polygon(self.surface, color, corners.tolist(), self.stroke)
        return self.surface


__all__ = ["Layout", "Renderer", "stone_polygons"]
