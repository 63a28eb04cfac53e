"""Toroidal grids and the double-buffered simulation engine."""

from .engine import GridSimulationEngine, SimulationState
from .grid import area_at, cell_at, context_vectors, random_grid

__all__ = [
    "GridSimulationEngine",
    "SimulationState",
    "area_at",
    "cell_at",
    "context_vectors",
    "random_grid",
]
