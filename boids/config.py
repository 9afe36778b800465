"""Immutable simulation parameters for the toroidal flock."""

import math
import numbers
from dataclasses import dataclass, fields, replace as _replace
from typing import Any, Mapping

import numpy as np


class ConfigError(ValueError):
    """Raised when a SimConfig is constructed with invalid parameters."""


@dataclass(frozen=True)
class SimConfig:
    """
    Parameters of one simulation run.

    Attributes:
        width, height: Extent of the toroidal world
        n_agents: Number of boids
        speed: Maximum velocity magnitude
        perception: Neighbor radius
        separation_dist: Radius below which neighbors repel (<= perception)
        w_sep, w_align, w_coh: Rule weights
        fov_deg: Field of view centered on the heading, in (0, 360]
        max_force: Maximum steering acceleration magnitude
        eps: Division guard
        dt: Fixed tick length
    """
    width: float = 5000.0
    height: float = 5000.0
    n_agents: int = 10000
    speed: float = 200.0
    perception: float = 80.0
    separation_dist: float = 20.0
    w_sep: float = 80.0
    w_align: float = 110.0
    w_coh: float = 10.0
    fov_deg: float = 80.0
    max_force: float = 1000.0
    eps: float = 1e-12
    dt: float = 0.02

    def __post_init__(self):
        self._validate()

    def _validate(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
                raise ConfigError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"{f.name} must be finite, got {value!r}")

        if self.n_agents != int(self.n_agents):
            raise ConfigError(f"n_agents must be an integer, got {self.n_agents!r}")
        if self.width <= 0:
            raise ConfigError(f"width must be > 0, got {self.width}")
        if self.height <= 0:
            raise ConfigError(f"height must be > 0, got {self.height}")
        if self.n_agents < 0:
            raise ConfigError(f"n_agents must be >= 0, got {self.n_agents}")
        if self.perception < 0:
            raise ConfigError(f"perception must be >= 0, got {self.perception}")
        if self.separation_dist < 0 or self.separation_dist > self.perception:
            raise ConfigError(
                f"separation_dist must be in [0, perception={self.perception}], "
                f"got {self.separation_dist}"
            )
        if not (0.0 < self.fov_deg <= 360.0):
            raise ConfigError(f"fov_deg must be in (0, 360], got {self.fov_deg}")
        if self.speed < 0:
            raise ConfigError(f"speed must be >= 0, got {self.speed}")
        if self.max_force < 0:
            raise ConfigError(f"max_force must be >= 0, got {self.max_force}")
        if self.eps <= 0:
            raise ConfigError(f"eps must be > 0, got {self.eps}")
        if self.dt <= 0:
            raise ConfigError(f"dt must be > 0, got {self.dt}")

    @property
    def cos_half_fov(self) -> float:
        """Visibility threshold on the cosine between heading and offset."""
        return math.cos(math.radians(self.fov_deg / 2.0))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SimConfig":
        """Build a config from a plain dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**values)

    def replace(self, **changes) -> "SimConfig":
        """Return a validated copy with the given fields overridden."""
        return _replace(self, **changes)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
