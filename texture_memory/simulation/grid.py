"""Toroidal grid helpers.

Grids are ``(width, height, 3)`` ``uint8`` arrays indexed ``[i, j]`` with
``i`` horizontal and ``j`` vertical. Every lookup wraps modulo the grid size
in both axes.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from ..memory.codec import AREA_N, CELL_N, CONTEXT_POSITIONS


def cell_at(grid: np.ndarray, i: int, j: int) -> np.ndarray:
    """Read-only toroidal accessor."""
    width, height = grid.shape[:2]
    return grid[i % width, j % height]


def area_at(grid: np.ndarray, i: int, j: int) -> np.ndarray:
    """Return the ``(3, 3, 3)`` Area centred on ``(i, j)``.

    ``area[row, column]`` is the cell at ``(i + column - 1, j + row - 1)``.
    """
    area = np.empty((3, 3, CELL_N), dtype=grid.dtype)
    for row in range(3):
        for column in range(3):
            area[row, column] = cell_at(grid, i + column - 1, j + row - 1)
    return area


def context_vectors(grid: np.ndarray) -> np.ndarray:
    """Vectorised contexts for every coordinate, shape ``(width, height, 24)``.

    Entry ``[i, j]`` equals ``vectorize_area(area_at(grid, i, j))``.
    """
    width, height = grid.shape[:2]
    shifted = [
        np.roll(grid, shift=(1 - column, 1 - row), axis=(0, 1))
        for row, column in CONTEXT_POSITIONS
    ]
    stacked = np.stack(shifted, axis=2).astype(np.float64) / 255.0
    return stacked.reshape(width, height, AREA_N)


def random_grid(size: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """A ``size x size`` grid of independent uniform 8-bit channels."""
    rng = np.random.default_rng() if rng is None else rng
    return rng.integers(0, 256, size=(size, size, CELL_N), dtype=np.uint8)
