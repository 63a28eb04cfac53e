# -*- coding: utf-8 -*-
"""Simulation configuration.

All values are fixed for the life of the process. They can come from the
dataclass defaults, a plain mapping (``gridSize``, ``sampleCount``,
``timestepSeconds`` or the field names), environment variables, or CLI
flags layered on top by :mod:`texture_memory.app`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigError

Color = Tuple[int, int, int]

# Recognized option names for :meth:`SimulationConfig.from_mapping`.
OPTION_ALIASES: Dict[str, str] = {
    "gridSize": "grid_size",
    "sampleCount": "sample_count",
    "timestepSeconds": "timestep_seconds",
}

ENV_PREFIX = "TEXTURE_MEMORY_"
_ENV_FIELDS: Dict[str, Tuple[str, Any]] = {
    "GRID_SIZE": ("grid_size", int),
    "SAMPLE_COUNT": ("sample_count", int),
    "TIMESTEP": ("timestep_seconds", float),
    "IMAGE": ("image_path", str),
    "SEED": ("seed", int),
}


@dataclass(frozen=True)
class SimulationConfig:
    """Static parameters for training and running the texture grid.

    Attributes
    ----------
    grid_size:
        Side length of the square toroidal simulation grid.
    sample_count:
        Training stratification divisor ``M``; stride is ``total // M``.
    timestep_seconds:
        Minimum wall-clock time between simulation steps.
    window_size:
        Side length of the square window in pixels.
    image_path:
        Sample image the pattern memory is trained from.
    base_sharpness:
        Sharpness of the exponential kernel family before calibration.
    near_color, far_color:
        Uniform Area colors used as calibration references.
    w_near, w_far:
        Target kernel weights at the near and far reference distances.
    seed:
        Optional seed for the random grid initialisation.
    """
    grid_size: int = 100
    sample_count: int = 10
    timestep_seconds: float = 1.0 / 60.0
    window_size: int = 800
    image_path: str = "leaf.png"
    base_sharpness: float = 10.0
    near_color: Color = (255, 100, 0)
    far_color: Color = (255, 255, 0)
    w_near: float = 0.99
    w_far: float = 0.01
    seed: Optional[int] = field(default=None)

    @property
    def cell_size(self) -> float:
        return self.window_size / self.grid_size

    def validate(self) -> "SimulationConfig":
        if self.grid_size <= 0:
            raise ConfigError(f"grid_size must be positive, got {self.grid_size}")
        if self.sample_count <= 0:
            raise ConfigError(f"sample_count must be positive, got {self.sample_count}")
        if not self.timestep_seconds > 0.0:
            raise ConfigError(f"timestep_seconds must be positive, got {self.timestep_seconds}")
        if self.window_size <= 0:
            raise ConfigError(f"window_size must be positive, got {self.window_size}")
        if not self.base_sharpness > 0.0:
            raise ConfigError(f"base_sharpness must be positive, got {self.base_sharpness}")
        if not (0.0 < self.w_far < self.w_near < 1.0):
            raise ConfigError(
                f"target weights must satisfy 0 < w_far < w_near < 1, got w_near={self.w_near}, w_far={self.w_far}"
            )
        for name in ("near_color", "far_color"):
            color = getattr(self, name)
            if len(color) != 3 or any(not 0 <= int(c) <= 255 for c in color):
                raise ConfigError(f"{name} must be three 8-bit channels, got {color!r}")
        return self

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], base: Optional["SimulationConfig"] = None) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        changes: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"unknown configuration option {key!r}")
            changes[name] = value
        return (base or cls()).with_overrides(**changes).validate()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional["SimulationConfig"] = None) -> "SimulationConfig":
        environ = os.environ if environ is None else environ
        changes: Dict[str, Any] = {}
        for suffix, (name, caster) in _ENV_FIELDS.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is None or raw == "":
                continue
            try:
                changes[name] = caster(raw)
            except ValueError as exc:
                raise ConfigError(f"{ENV_PREFIX + suffix}={raw!r} is not a valid {caster.__name__}") from exc
        return (base or cls()).with_overrides(**changes).validate()
