# -*- coding: utf-8 -*-
"""Learn local color patterns from an image and grow a texture with them.

The pattern memory is trained once from (3x3 context -> center color) pairs
sampled from an image. A toroidal grid is then rewritten cell by cell from
that memory on a fixed timestep, with two buffers swapping roles each step.
"""

from .common import SimulationConfig, TextureMemoryError
from .memory import (
    ExponentialKernel,
    PatternMemory,
    Retriever,
    Threshold,
    TrainingPair,
    build_training_set,
)
from .simulation import GridSimulationEngine, SimulationState

__version__ = "0.1.0"

__all__ = [
    "SimulationConfig",
    "TextureMemoryError",
    "ExponentialKernel",
    "PatternMemory",
    "Retriever",
    "Threshold",
    "TrainingPair",
    "build_training_set",
    "GridSimulationEngine",
    "SimulationState",
]
