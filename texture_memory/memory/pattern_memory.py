# -*- coding: utf-8 -*-
"""Append-only exemplar store and kernel-weighted retrieval.

``PatternMemory.map`` records pairs in insertion order and never merges or
drops them. ``evaluate`` freezes the current pairs into a :class:`Retriever`
which answers queries with the kernel-weighted mean of every stored target:

    w_p   = kernel(|query - p.context|)
    value = sum(w_p * p.target) / sum(w_p)

When ``sum(w_p)`` underflows to (numerically) zero the nearest pattern's
target is returned instead.
"""
from __future__ import annotations

from typing import Callable, Iterable, List

import numpy as np

from ..common.errors import EmptyMemoryError
from ..common.logger import get_logger
from .codec import AREA_N, CELL_N, devectorize_cell
from .training import TrainingPair

logger = get_logger(__name__)

# Weight sums at or below this are treated as zero.
WEIGHT_FLOOR = 1e-300

# Queries per block; bounds the (rows, P) distance and weight temporaries.
BLOCK_ROWS = 1024


class PatternMemory:
    def __init__(self, pairs: Iterable[TrainingPair] = ()):
        self._pairs: List[TrainingPair] = []
        for pair in pairs:
            self.map(pair)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self):
        return iter(self._pairs)

    @property
    def pairs(self):
        return tuple(self._pairs)

    def map(self, pair: TrainingPair) -> None:
        self._pairs.append(pair)

    def evaluate(self, kernel: Callable, block_rows: int = BLOCK_ROWS) -> "Retriever":
        if not self._pairs:
            raise EmptyMemoryError("cannot evaluate an empty PatternMemory; map at least one pair first")
        contexts = np.stack([p.context for p in self._pairs])
        targets = np.stack([p.target for p in self._pairs])
        logger.debug(f"PatternMemory.evaluate over {len(self._pairs)} pairs")
        return Retriever(contexts, targets, kernel, block_rows)


class Retriever:
    """Kernel-bound, read-only view over a frozen set of exemplars."""

    def __init__(self, contexts: np.ndarray, targets: np.ndarray, kernel: Callable,
                 block_rows: int = BLOCK_ROWS):
        contexts = np.array(contexts, dtype=np.float64)
        targets = np.array(targets, dtype=np.float64)
        if contexts.ndim != 2 or contexts.shape[1] != AREA_N:
            raise ValueError(f"contexts must have shape (P, {AREA_N}), got {contexts.shape}")
        if targets.shape != (contexts.shape[0], CELL_N):
            raise ValueError(f"targets must have shape ({contexts.shape[0]}, {CELL_N}), got {targets.shape}")
        if contexts.shape[0] == 0:
            raise EmptyMemoryError("Retriever needs at least one exemplar")
        contexts.setflags(write=False)
        targets.setflags(write=False)
        self.contexts = contexts
        self.targets = targets
        self._context_sq = np.sum(contexts * contexts, axis=1)
        self.kernel = kernel
        if block_rows <= 0:
            raise ValueError(f"block_rows must be positive, got {block_rows}")
        self.block_rows = block_rows

    def __len__(self) -> int:
        return self.contexts.shape[0]

    def blend(self, queries) -> np.ndarray:
        """Weighted target vectors, shape ``(N, 3)`` for ``(N, 24)`` queries.

        Queries are processed ``block_rows`` at a time so peak memory stays
        proportional to ``block_rows * P`` rather than ``N * P``.
        """
        queries = np.asarray(queries, dtype=np.float64).reshape(-1, AREA_N)
        out = np.empty((queries.shape[0], CELL_N), dtype=np.float64)
        for start in range(0, queries.shape[0], self.block_rows):
            stop = start + self.block_rows
            self._blend_block(queries[start:stop], out[start:stop])
        return out

    def _blend_block(self, queries: np.ndarray, out: np.ndarray) -> None:
        # (rows, P) distances via |q|^2 - 2 q.c + |c|^2
        sq = (
            np.sum(queries * queries, axis=1)[:, None]
            - 2.0 * queries @ self.contexts.T
            + self._context_sq[None, :]
        )
        distances = np.sqrt(np.maximum(sq, 0.0, out=sq), out=sq)
        weights = np.asarray(self.kernel(distances), dtype=np.float64)
        totals = weights.sum(axis=1)
        degenerate = ~(np.isfinite(totals) & (totals > WEIGHT_FLOOR))
        safe = np.where(degenerate, 1.0, totals)
        np.divide(weights @ self.targets, safe[:, None], out=out)
        if np.any(degenerate):
            nearest = np.argmin(distances[degenerate], axis=1)
            out[degenerate] = self.targets[nearest]

    def get(self, query) -> np.ndarray:
        query = np.asarray(query)
        if query.shape != (AREA_N,):
            raise ValueError(f"query must have shape ({AREA_N},), got {query.shape}")
        return devectorize_cell(self.blend(query)[0])

    def get_many(self, queries) -> np.ndarray:
        """Batched :meth:`get`; returns ``(N, 3)`` ``uint8`` cells."""
        return devectorize_cell(self.blend(queries))
