# -*- coding: utf-8 -*-
"""Grid simulation engine.

Each step rebuilds every cell of the ``next`` page from the Area around the
same coordinate in the ``current`` page, then swaps page roles. The engine
owns one :class:`SimulationState`; the event loop holds the engine.

State machine
-------------
- Idle: :meth:`GridSimulationEngine.update` polls the timestep gate.
- Stepping: one full grid pass plus swap, run to completion before the gate
  returns to Idle.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from ..common.double_buffer import DoubleBuffer
from ..common.logger import get_logger
from ..common.timestep import FixedTimestep
from ..memory.codec import CELL_N, vectorize_area
from .grid import area_at, context_vectors, random_grid

if TYPE_CHECKING:
    # Only for type hints; memory.training imports this package
    from ..memory.pattern_memory import Retriever

logger = get_logger(__name__)


@dataclass
class SimulationState:
    buffers: DoubleBuffer
    timer: FixedTimestep

    @property
    def current(self) -> np.ndarray:
        return self.buffers.current

    @property
    def next(self) -> np.ndarray:
        return self.buffers.next

    @property
    def size(self) -> int:
        return self.buffers.current.shape[0]

    @property
    def steps(self) -> int:
        return self.timer.steps

    @classmethod
    def seeded(cls, size: int, timestep: float, *, rng: Optional[np.random.Generator] = None,
               clock: Callable[[], float] = time.perf_counter) -> "SimulationState":
        """Random ``current`` page with ``next`` starting as a copy of it."""
        return cls(DoubleBuffer.mirrored(random_grid(size, rng)), FixedTimestep(timestep, clock=clock))

    @classmethod
    def from_grid(cls, grid: np.ndarray, timestep: float, *,
                  clock: Callable[[], float] = time.perf_counter) -> "SimulationState":
        grid = np.asarray(grid, dtype=np.uint8)
        if grid.ndim != 3 or grid.shape[0] != grid.shape[1] or grid.shape[2] != CELL_N:
            raise ValueError(f"grid must have shape (size, size, {CELL_N}), got {grid.shape}")
        return cls(DoubleBuffer.mirrored(grid.copy()), FixedTimestep(timestep, clock=clock))


class GridSimulationEngine:
    def __init__(self, retriever: Retriever, state: SimulationState):
        self.retriever = retriever
        self.state = state

    @property
    def current(self) -> np.ndarray:
        return self.state.current

    def step(self) -> None:
        """Recompute every cell into ``next`` and swap roles."""
        t0 = time.perf_counter()
        current = self.state.current
        size = current.shape[0]
        contexts = context_vectors(current).reshape(size * size, -1)
        cells = self.retriever.get_many(contexts).reshape(size, size, CELL_N)
        self.state.buffers.for_write(lambda page: np.copyto(page, cells))
        self.state.buffers.swap()
        logger.debug(f"step {self.state.timer.steps + 1} took {(time.perf_counter() - t0) * 1000.0:.2f} ms")

    def step_cellwise(self) -> None:
        """Per-coordinate rendition of :meth:`step`; same result, one query per cell."""
        current = self.state.current
        target = self.state.next
        size = current.shape[0]
        for i in range(size):
            for j in range(size):
                target[i, j] = self.retriever.get(vectorize_area(area_at(current, i, j)))
        self.state.buffers.swap()

    def update(self, now: Optional[float] = None) -> bool:
        """Step once if the timestep has elapsed; return whether a step ran."""
        timer = self.state.timer
        if not timer.ready(now):
            return False
        try:
            self.step()
        finally:
            timer.finish(now)
        return True

    def run_steps(self, count: int) -> None:
        """Advance ``count`` steps immediately, ignoring wall-clock pacing."""
        for _ in range(count):
            self.step()
            self.state.timer.steps += 1
