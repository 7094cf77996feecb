"""Data models for conic orbits and the values derived from them."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .config import ORBIT_CFG


class InvalidShapeError(ValueError):
    """Raised when an orbit shape cannot describe a two-body conic."""


class Regime(Enum):
    ELLIPTIC = "elliptic"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"


def classify_regime(e: float, band: float = ORBIT_CFG.parabolic_band) -> Regime:
    """Return the regime for eccentricity ``e``.

    Eccentricities strictly within ``band`` of 1 count as parabolic; the
    remaining ranges split on ``e < 1``.
    """

    if abs(e - 1.0) < band:
        return Regime.PARABOLIC
    if e < 1.0:
        return Regime.ELLIPTIC
    return Regime.HYPERBOLIC


@dataclass(frozen=True)
class OrbitShape:
    """Shape of a conic orbit about a focus at the origin.

    ``size`` is the semi-major axis (real semi-axis for hyperbolae) unless
    the eccentricity falls inside the parabolic band, in which case it is
    read as the periapsis distance.
    """

    size: float
    e: float
    mu: float = ORBIT_CFG.default_mu
    regime: Regime = field(init=False, compare=False)

    def __post_init__(self) -> None:
        for label, value in (("size", self.size), ("eccentricity", self.e), ("mu", self.mu)):
            if not math.isfinite(value):
                raise InvalidShapeError(f"Orbit {label} must be finite. Got: {value}")
        if self.size <= 0.0:
            raise InvalidShapeError(f"Orbit size must be positive. Got: {self.size}")
        if self.e < 0.0:
            raise InvalidShapeError(f"Eccentricity must be non-negative. Got: {self.e}")
        if self.mu <= 0.0:
            raise InvalidShapeError(f"Gravitational parameter must be positive. Got: {self.mu}")
        object.__setattr__(self, "regime", classify_regime(self.e))

    @property
    def is_bound(self) -> bool:
        return self.regime is Regime.ELLIPTIC


@dataclass(frozen=True)
class OrbitState:
    """Planar position, velocity and radius at one instant."""

    x: float
    y: float
    vx: float
    vy: float
    r: float

    @classmethod
    def zero(cls) -> "OrbitState":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy], dtype=float)

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)


@dataclass(frozen=True)
class SectorPolygon:
    """Closed polygon swept between two times, starting and ending at the focus."""

    start_point: tuple[float, float]
    end_point: tuple[float, float]
    boundary: np.ndarray

    @property
    def area(self) -> float:
        x = self.boundary[:, 0]
        y = self.boundary[:, 1]
        return 0.5 * abs(float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


@dataclass(frozen=True)
class Pose:
    position: np.ndarray
    facing: np.ndarray


__all__ = [
    "InvalidShapeError",
    "OrbitShape",
    "OrbitState",
    "Pose",
    "Regime",
    "SectorPolygon",
    "classify_regime",
]
