# -*- coding: utf-8 -*-
"""Distance kernels and threshold calibration.

A kernel maps a Euclidean distance between context vectors to a retrieval
weight. The exponential family is

    kernel(d) = exp(-sharpness * (d - offset))

with ``offset = 0`` for an uncalibrated kernel. Larger ``sharpness`` pushes
retrieval toward winner-take-all; smaller values blend more patterns.

Calibration
-----------
Given a "near" distance that should score ``w_near`` and a "far" distance
that should score ``w_far``:

    sharpness = ln(w_near / w_far) / (d_far - d_near)
    offset    = d_near + ln(w_near) / sharpness

The offset scales every weight by the same constant, so normalized
retrieval only depends on ``sharpness``; it is kept so the calibrated
kernel reproduces both target weights exactly.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..common.errors import ConfigError
from ..common.logger import get_logger
from .codec import vectorize_area

logger = get_logger(__name__)

DEFAULT_W_NEAR = 0.99
DEFAULT_W_FAR = 0.01


def euclidean(a, b) -> np.ndarray:
    """Distance along the last axis; broadcasts over leading axes."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return np.sqrt(np.sum(diff * diff, axis=-1))


@dataclass(frozen=True)
class ExponentialKernel:
    sharpness: float
    offset: float = 0.0
    family: str = "exponential"

    def __post_init__(self) -> None:
        if not self.sharpness > 0.0:
            raise ConfigError(f"kernel sharpness must be positive, got {self.sharpness}")

    def __call__(self, distance):
        return np.exp(-self.sharpness * (np.asarray(distance, dtype=np.float64) - self.offset))

    def calibrated(self, d_near: float, d_far: float,
                   w_near: float = DEFAULT_W_NEAR, w_far: float = DEFAULT_W_FAR) -> "ExponentialKernel":
        """Return a kernel of this family with ``k(d_near)=w_near`` and ``k(d_far)=w_far``."""
        if not (0.0 < w_far < w_near <= 1.0):
            raise ConfigError(f"target weights must satisfy 0 < w_far < w_near <= 1, got {w_near}, {w_far}")
        if not d_far > d_near:
            raise ConfigError(f"far distance must exceed near distance, got d_near={d_near}, d_far={d_far}")
        sharpness = math.log(w_near / w_far) / (d_far - d_near)
        offset = d_near + math.log(w_near) / sharpness
        return ExponentialKernel(sharpness=sharpness, offset=offset, family=self.family)


AreaPair = Tuple[Sequence, Sequence]


class Threshold:
    """Calibrates a kernel family from reference Area pairs.

    ``near`` and ``far`` are each a pair of Areas; only their context
    vectors take part in the distance. The calibrated kernel is computed
    once and reused for every retrieval.
    """

    def __init__(self, base: ExponentialKernel, near: AreaPair, far: AreaPair,
                 w_near: float = DEFAULT_W_NEAR, w_far: float = DEFAULT_W_FAR):
        self.base = base
        self.d_near = float(euclidean(vectorize_area(near[0]), vectorize_area(near[1])))
        self.d_far = float(euclidean(vectorize_area(far[0]), vectorize_area(far[1])))
        self.w_near = w_near
        self.w_far = w_far
        self.kernel = base.calibrated(self.d_near, self.d_far, w_near, w_far)
        logger.info(
            f"calibrated {base.family} kernel: sharpness={self.kernel.sharpness:.4f} "
            f"(d_near={self.d_near:.4f}, d_far={self.d_far:.4f})"
        )

    @classmethod
    def from_reference_areas(cls, base: ExponentialKernel, reference, contrast,
                             w_near: float = DEFAULT_W_NEAR, w_far: float = DEFAULT_W_FAR) -> "Threshold":
        """Near case is ``reference`` against itself, far case is ``reference`` against ``contrast``."""
        return cls(base, (reference, reference), (reference, contrast), w_near, w_far)

    def __call__(self, distance):
        return self.kernel(distance)
