"""Pattern memory: codec, training pairs, kernels and retrieval."""

from .codec import (
    AREA_N,
    CELL_N,
    devectorize_cell,
    uniform_area,
    vectorize_area,
    vectorize_cell,
)
from .kernel import ExponentialKernel, Threshold, euclidean
from .pattern_memory import PatternMemory, Retriever
from .training import TrainingPair, build_training_set, sample_stride, sampled_coordinates

__all__ = [
    "AREA_N",
    "CELL_N",
    "vectorize_cell",
    "devectorize_cell",
    "vectorize_area",
    "uniform_area",
    "ExponentialKernel",
    "Threshold",
    "euclidean",
    "PatternMemory",
    "Retriever",
    "TrainingPair",
    "build_training_set",
    "sample_stride",
    "sampled_coordinates",
]
