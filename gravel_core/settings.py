"""Helpers for loading and working with gravel shotter settings."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    # Canvas / grid
    "rows": 22,
    "cols": 12,
    "cell_size": 30,
    "margin": 35,
    "line_width": 0.06,  # in cells
    "background_color": (0, 0, 0),

    # Run length
    "fps": 60,
    "seconds": 30,
    "grace_ticks": 1,

    # Motion
    "motion_probability": 1.0,
    "displacement_adjust": 1.0,
    "rotation_adjust": 1.0,
    "adjust_step": 0.1,
    "cycle_range": (50, 300),
    "seed": None,

    # Recording
    "record_on_start": True,
    "capture_stride": 2,
    "max_frame_index": 9999,
    "frame_prefix": "shotter",
    "frames_dir_suffix": "_frames",
    "program_name": None,
}


def _coerce_config_value(value: Any, default: Any) -> Any:
    """Best-effort coercion of JSON-loaded values to match defaults."""

    if isinstance(default, tuple):
        return tuple(value) if isinstance(value, (list, tuple)) else default
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, float) and isinstance(value, int):
        return float(value)
    return value


def load_config(config_path: Path | None = None) -> Dict[str, Any]:
    """Load the config file if it exists, otherwise return defaults."""
    data: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
    if config_path and config_path.exists():
        try:
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"Failed to parse config file {config_path}: {exc}") from exc
        for key, value in loaded.items():
            if key in data:
                data[key] = _coerce_config_value(value, data[key])
            else:
                data[key] = value
    return data


def total_ticks(config: Dict[str, Any]) -> int:
    """Number of animated ticks in a run, excluding the grace ticks."""
    return int(config["fps"]) * int(config["seconds"])


__all__ = ["DEFAULT_CONFIG", "load_config", "total_ticks"]
