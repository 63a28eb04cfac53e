# -*- coding: utf-8 -*-
"""Shared plumbing: configuration, logging, errors, buffering and timing.

Nothing in here knows about colors or patterns; the memory and simulation
packages build on these pieces.
"""

from .config import SimulationConfig
from .double_buffer import DoubleBuffer
from .errors import (
    ConfigError,
    DisplayError,
    EmptyMemoryError,
    FrameExportError,
    ImageLoadError,
    TextureMemoryError,
)
from .logger import get_logger
from .timestep import FixedTimestep, GateState

__all__ = [
    "SimulationConfig",
    "DoubleBuffer",
    "FixedTimestep",
    "GateState",
    "get_logger",
    # Errors
    "TextureMemoryError",
    "ImageLoadError",
    "DisplayError",
    "EmptyMemoryError",
    "ConfigError",
    "FrameExportError",
]
