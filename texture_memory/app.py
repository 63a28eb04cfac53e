"""Program startup and the render/simulation event loop.

Setup runs once: load the sample image, extract training pairs, fill the
pattern memory, calibrate the kernel and seed the grid. The loop then draws
``current`` every iteration and steps the simulation whenever the fixed
timestep has elapsed.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .common.config import SimulationConfig
from .common.errors import TextureMemoryError
from .common.logger import get_logger, set_level
from .memory.codec import uniform_area
from .memory.kernel import ExponentialKernel, Threshold
from .memory.pattern_memory import PatternMemory
from .memory.training import build_training_set
from .rendering.image_io import load_pixels, save_frame
from .simulation.engine import GridSimulationEngine, SimulationState

logger = get_logger(__name__)


@dataclass
class Setup:
    config: SimulationConfig
    memory: PatternMemory
    threshold: Threshold
    engine: GridSimulationEngine


def calibrate(config: SimulationConfig) -> Threshold:
    base = ExponentialKernel(config.base_sharpness)
    return Threshold.from_reference_areas(
        base,
        uniform_area(config.near_color),
        uniform_area(config.far_color),
        w_near=config.w_near,
        w_far=config.w_far,
    )


def build(config: SimulationConfig, image: Optional[np.ndarray] = None) -> Setup:
    """Train the memory and seed the grid; ``image`` defaults to ``config.image_path``."""
    config.validate()
    if image is None:
        image = load_pixels(config.image_path)
    memory = PatternMemory(build_training_set(image, config.sample_count))
    threshold = calibrate(config)
    retriever = memory.evaluate(threshold.kernel)
    rng = np.random.default_rng(config.seed)
    state = SimulationState.seeded(config.grid_size, config.timestep_seconds, rng=rng)
    return Setup(config, memory, threshold, GridSimulationEngine(retriever, state))


def run_window(setup: Setup) -> None:
    from .rendering.pygame_render import PygameGridRenderer

    config = setup.config
    renderer = PygameGridRenderer(config.window_size, config.cell_size)
    engine = setup.engine
    try:
        while not renderer.quit_requested():
            renderer.draw(engine.current)
            engine.update()
    finally:
        renderer.close()
    logger.info(f"window closed after {engine.state.steps} steps")


def run_headless(setup: Setup, steps: int) -> None:
    setup.engine.run_steps(steps)
    logger.info(f"ran {steps} steps headless")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texture-memory",
        description="Grow an evolving texture from the local color patterns of a sample image.",
    )
    parser.add_argument("image", nargs="?", default=None, help="sample image to learn from")
    parser.add_argument("--grid-size", type=int, default=None, help="grid dimension in cells")
    parser.add_argument("--sample-count", type=int, default=None, help="training stratification divisor")
    parser.add_argument("--timestep", type=float, default=None, help="simulation tick period in seconds")
    parser.add_argument("--window-size", type=int, default=None, help="window side length in pixels")
    parser.add_argument("--seed", type=int, default=None, help="seed for the initial random grid")
    parser.add_argument("--steps", type=int, default=None, help="run N steps without a window")
    parser.add_argument("--save-frame", default=None, help="write the final grid to this PNG")
    parser.add_argument("--verbose", action="store_true", help="log at INFO")
    parser.add_argument("--debug", action="store_true", help="log at DEBUG")
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig.from_env()
    return config.with_overrides(
        image_path=args.image,
        grid_size=args.grid_size,
        sample_count=args.sample_count,
        timestep_seconds=args.timestep,
        window_size=args.window_size,
        seed=args.seed,
    ).validate()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        set_level(logging.DEBUG)
    elif args.verbose:
        set_level(logging.INFO)
    try:
        config = config_from_args(args)
        setup = build(config)
        if args.steps is not None:
            run_headless(setup, args.steps)
        else:
            run_window(setup)
        if args.save_frame:
            save_frame(setup.engine.current, args.save_frame, max(1, int(config.cell_size)))
    except TextureMemoryError as exc:
        logger.error(str(exc))
        return 1
    return 0
