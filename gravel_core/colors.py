"""Stroke colours derived from how far a stone sits from a neutral rest."""
from __future__ import annotations

from typing import Tuple

from PIL import ImageColor

from .stones import MAX_DISPLACEMENT, MAX_ROTATION, Stone

SATURATION = 1.0
LIGHTNESS = 0.5


def abs_normalize(value: float, maximum: float) -> float:
    return abs(value) / maximum


def stone_hue(stone: Stone, rows: int, cols: int) -> float:
    """Mean of five normalised deviations; not clamped, may exceed 1."""
    basis = (
        abs_normalize(stone.grid_x, cols)
        + abs_normalize(stone.grid_y, rows)
        + abs_normalize(stone.rotation, MAX_ROTATION)
        + abs_normalize(stone.offset_x, MAX_DISPLACEMENT)
        + abs_normalize(stone.offset_y, MAX_DISPLACEMENT)
    )
    return basis / 5.0


def hsl_to_rgb(hue: float, saturation: float = SATURATION, lightness: float = LIGHTNESS) -> Tuple[int, int, int]:
    """Convert a hue in turns to RGB; hues outside [0, 1) wrap around the wheel."""
    degrees = (hue % 1.0) * 360.0
    # ImageColor only takes colour strings; 4 decimals is far below one 8-bit step
    spec = f"hsl({degrees:.4f}, {saturation * 100.0:.4f}%, {lightness * 100.0:.4f}%)"
    return ImageColor.getrgb(spec)[:3]


def stone_color(stone: Stone, rows: int, cols: int) -> Tuple[int, int, int]:
    return hsl_to_rgb(stone_hue(stone, rows, cols))


__all__ = ["abs_normalize", "hsl_to_rgb", "stone_color", "stone_hue"]
