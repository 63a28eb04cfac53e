"""Conversions between colors, neighbourhoods and float vectors.

A Cell is three 8-bit channels; its vector is the channels divided by 255.
An Area is a ``(3, 3, 3)`` block ``[row, column, channel]`` whose center is
the target; its vector is the 8 context cells in row-major order with the
center skipped, giving 24 floats.
"""
from __future__ import annotations

import numpy as np

CELL_N = 3
AREA_N = 8 * CELL_N

# Row-major (row, column) positions of the 8 context cells.
CONTEXT_POSITIONS = tuple((r, c) for r in range(3) for c in range(3) if (r, c) != (1, 1))

# Values a hair below an integer after the float round trip still land on it.
_QUANTIZE_EPS = 1e-6


def vectorize_cell(cell) -> np.ndarray:
    cell = np.asarray(cell)
    if cell.shape[-1] != CELL_N:
        raise ValueError(f"cell must have {CELL_N} channels, got shape {cell.shape}")
    return cell.astype(np.float64) / 255.0


def devectorize_cell(vector) -> np.ndarray:
    """Clamp to [0, 1], scale to 255 and truncate to ``uint8``.

    Works on a single 3-vector or any ``(..., 3)`` batch.
    """
    vector = np.asarray(vector, dtype=np.float64)
    if vector.shape[-1] != CELL_N:
        raise ValueError(f"vector must have {CELL_N} components, got shape {vector.shape}")
    scaled = np.floor(np.clip(vector, 0.0, 1.0) * 255.0 + _QUANTIZE_EPS)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def vectorize_area(area) -> np.ndarray:
    area = np.asarray(area)
    if area.shape != (3, 3, CELL_N):
        raise ValueError(f"area must have shape (3, 3, {CELL_N}), got {area.shape}")
    context = np.stack([area[r, c] for r, c in CONTEXT_POSITIONS])
    return vectorize_cell(context).reshape(AREA_N)


def uniform_area(color) -> np.ndarray:
    """Area whose nine cells all share ``color``."""
    cell = np.asarray(color, dtype=np.uint8).reshape(CELL_N)
    return np.broadcast_to(cell, (3, 3, CELL_N)).copy()
