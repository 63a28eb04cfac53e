# -*- coding: utf-8 -*-
"""Fixed-timestep gating for the simulation loop.

Glossary
--------
- timestep: minimum wall-clock time between two simulation steps
  (e.g. 1/60s).
- Idle: the gate is waiting for ``timestep`` to elapse since the reference.
- Stepping: the caller is running one step; :meth:`FixedTimestep.finish`
  returns the gate to Idle and advances the reference.

The reference advances by exactly one ``timestep`` per step so that a run of
``T`` seconds polled finely yields ``floor(T / timestep)`` steps. If the loop
falls more than one timestep behind, the reference snaps to the current time
instead of queueing catch-up steps.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


class GateState(Enum):
    IDLE = "idle"
    STEPPING = "stepping"


@dataclass
class FixedTimestep:
    timestep: float
    clock: Callable[[], float] = time.perf_counter
    reference: Optional[float] = None
    state: GateState = GateState.IDLE
    steps: int = field(default=0)

    def __post_init__(self) -> None:
        if not self.timestep > 0.0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")
        if self.reference is None:
            self.reference = self.clock()

    def ready(self, now: Optional[float] = None) -> bool:
        """Return ``True`` and enter Stepping once elapsed time exceeds the timestep."""
        if self.state is GateState.STEPPING:
            return False
        now = self.clock() if now is None else now
        if now - self.reference > self.timestep:
            self.state = GateState.STEPPING
            return True
        return False

    def finish(self, now: Optional[float] = None) -> None:
        """Leave Stepping and move the elapsed-time reference forward."""
        now = self.clock() if now is None else now
        self.reference += self.timestep
        if now - self.reference > self.timestep:
            self.reference = now
        self.steps += 1
        self.state = GateState.IDLE
