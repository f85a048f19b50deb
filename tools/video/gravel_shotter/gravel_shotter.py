#!/usr/bin/env python3
"""
Gravel Shotter: jittering grid of square outlines, saved frame by frame
----------------------------------------------------------------------
Runs for a fixed number of ticks. Halfway through, the stones are told to
settle back into the grid. While recording, every second frame is written
as a numbered PNG ready to be stitched into a video.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict

import pygame

REPO_ROOT = Path(__file__).resolve().parents[3]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gravel_core.controls import Command, InputController  # noqa: E402
from gravel_core.director import Director  # noqa: E402
from gravel_core.recorder import FrameRecorder, OutputDirectoryError, SurfaceCapture  # noqa: E402
from gravel_core.render import Layout, Renderer  # noqa: E402
from gravel_core.settings import load_config, total_ticks  # noqa: E402
from gravel_core.state import SimulationState  # noqa: E402
from gravel_core.stones import PyRandomSource, StoneField  # noqa: E402

LOG = logging.getLogger("gravel_shotter")

SCRIPT_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = SCRIPT_DIR / "config.json"

KEY_BINDINGS: Dict[int, Command] = {
    pygame.K_r: Command.TOGGLE_RECORDING,
    pygame.K_s: Command.SNAPSHOT,
    pygame.K_UP: Command.INCREASE_DISPLACEMENT,
    pygame.K_DOWN: Command.DECREASE_DISPLACEMENT,
    pygame.K_RIGHT: Command.INCREASE_ROTATION,
    pygame.K_LEFT: Command.DECREASE_ROTATION,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gravel Shotter animator")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to a JSON config file")
    parser.add_argument(
        "--output-dir",
        help="Base directory for the recorded frames folder (defaults to the working directory)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a repeatable run")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Render without a visible window and without frame-rate limiting",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging verbosity (e.g. DEBUG, INFO, WARNING)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    log_level_name = str(args.log_level).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    LOG.debug("starting...")

    config = load_config(Path(args.config))
    if args.seed is not None:
        config["seed"] = args.seed

    program_name = config.get("program_name") or Path(sys.argv[0]).stem or "gravel_shotter"
    base_dir = Path(args.output_dir).resolve() if args.output_dir else Path.cwd()
    frames_dir = base_dir / f"{program_name}{config['frames_dir_suffix']}"
    snapshot_path = Path.cwd() / f"{program_name}.png"

    if args.headless:
        os.environ["SDL_VIDEODRIVER"] = "dummy"

    pygame.init()
    layout = Layout.from_config(config)
    screen = pygame.display.set_mode(layout.size)
    pygame.display.set_caption(program_name)
    clock = pygame.time.Clock()

    field = StoneField.build(layout.rows, layout.cols, tuple(config["cycle_range"]))
    state = SimulationState.from_config(config, frames_dir)
    renderer = Renderer(screen, layout, float(config["line_width"]), tuple(config["background_color"]))
    recorder = FrameRecorder(
        SurfaceCapture(screen),
        snapshot_path,
        stride=int(config["capture_stride"]),
        max_frame_index=int(config["max_frame_index"]),
        prefix=str(config["frame_prefix"]),
    )
    controls = InputController(state, recorder, step=float(config["adjust_step"]))
    director = Director(
        field,
        state,
        PyRandomSource(config["seed"]),
        renderer,
        recorder,
        total_ticks=total_ticks(config),
        grace_ticks=int(config["grace_ticks"]),
    )
    LOG.info(
        "Launching %s: %dx%d stones, %d ticks at %d fps (seed=%s)",
        program_name,
        layout.cols,
        layout.rows,
        director.total_ticks,
        config["fps"],
        config["seed"],
    )

    try:
        if config["record_on_start"]:
            recorder.start(state)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_BINDINGS:
                        controls.dispatch(KEY_BINDINGS[event.key])
            if not running:
                LOG.info("Stopped by user at tick %d", state.tick_count)
                break

            running = director.tick()
            pygame.display.flip()
            if not args.headless:
                clock.tick(int(config["fps"]))
    except OutputDirectoryError as exc:
        LOG.error("%s", exc)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
