"""Extract (context -> center) training pairs from a sample image.

Coordinates are kept on two interleaved diagonal stripes: ``(i, j)`` is
sampled when ``(i * height + j) % stride == 0`` or
``(j * width + i) % stride == 0`` with ``stride = total // sample_count``.
The result depends only on the image.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

import numpy as np

from ..common.logger import get_logger
from ..simulation.grid import area_at
from .codec import AREA_N, CELL_N, vectorize_area, vectorize_cell

logger = get_logger(__name__)

DEFAULT_SAMPLE_COUNT = 10


@dataclass(frozen=True)
class TrainingPair:
    context: np.ndarray
    target: np.ndarray

    def __post_init__(self) -> None:
        context = np.array(self.context, dtype=np.float64).reshape(AREA_N)
        target = np.array(self.target, dtype=np.float64).reshape(CELL_N)
        context.setflags(write=False)
        target.setflags(write=False)
        object.__setattr__(self, "context", context)
        object.__setattr__(self, "target", target)

    @classmethod
    def from_area(cls, area) -> "TrainingPair":
        area = np.asarray(area)
        return cls(vectorize_area(area), vectorize_cell(area[1, 1]))


def sample_stride(width: int, height: int, sample_count: int = DEFAULT_SAMPLE_COUNT) -> int:
    if sample_count <= 0:
        raise ValueError(f"sample_count must be positive, got {sample_count}")
    return max(1, (width * height) // sample_count)


def sampled_coordinates(width: int, height: int, sample_count: int = DEFAULT_SAMPLE_COUNT) -> Iterator[tuple]:
    stride = sample_stride(width, height, sample_count)
    for i in range(width):
        for j in range(height):
            if (i * height + j) % stride == 0 or (j * width + i) % stride == 0:
                yield i, j


def build_training_set(image: np.ndarray, sample_count: int = DEFAULT_SAMPLE_COUNT) -> List[TrainingPair]:
    """Return the stratified training pairs for a ``(width, height, 3)`` image."""
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != CELL_N:
        raise ValueError(f"image must have shape (width, height, {CELL_N}), got {image.shape}")
    width, height = image.shape[:2]
    pairs = [
        TrainingPair.from_area(area_at(image, i, j))
        for i, j in sampled_coordinates(width, height, sample_count)
    ]
    logger.info(f"extracted {len(pairs)} training pairs from {width}x{height} image")
    return pairs
