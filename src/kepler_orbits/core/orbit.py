"""Per-body propagator object used by the viewer."""
from __future__ import annotations

from .config import ORBIT_CFG, SOLVER_CFG, OrbitCfg, SolverCfg
from .model import OrbitShape, OrbitState, Regime, SectorPolygon
from .physics import (
    apsides,
    conic_center,
    empty_focus,
    mean_motion,
    orbit_state,
    orbital_period,
    periapsis_distance,
)
from .sampling import sample_curve, sectors


class KeplerOrbit:
    """Analytic propagator bound to one immutable orbit shape.

    Changing the shape means building a new instance. The outline and sector
    geometry are computed lazily and then reused for every frame.
    """

    def __init__(
        self,
        shape: OrbitShape,
        *,
        solver_cfg: SolverCfg = SOLVER_CFG,
        orbit_cfg: OrbitCfg = ORBIT_CFG,
    ) -> None:
        self._shape = shape
        self._solver_cfg = solver_cfg
        self._orbit_cfg = orbit_cfg
        self._q = periapsis_distance(shape)
        self._n = mean_motion(shape)
        self._period = orbital_period(shape)
        self._curve_cache: dict[int, list[tuple[float, float]]] = {}
        self._sector_cache: dict[int, list[SectorPolygon]] = {}

    @property
    def shape(self) -> OrbitShape:
        return self._shape

    @property
    def regime(self) -> Regime:
        return self._shape.regime

    @property
    def periapsis_distance(self) -> float:
        return self._q

    @property
    def mean_motion(self) -> float:
        return self._n

    @property
    def period(self) -> float | None:
        return self._period

    def state(self, t: float) -> OrbitState:
        return orbit_state(self._shape, t, self._solver_cfg)

    def time_for_phase(self, phase: float) -> float:
        """Time after periapsis at which the mean anomaly equals ``phase``."""

        return phase / self._n

    def curve_points(self, segments: int | None = None) -> list[tuple[float, float]]:
        if segments is None:
            segments = self._orbit_cfg.curve_segments
        cached = self._curve_cache.get(segments)
        if cached is None:
            cached = sample_curve(self._shape, segments, self._orbit_cfg)
            self._curve_cache[segments] = cached
        return cached

    def sectors(self, count: int | None = None) -> list[SectorPolygon]:
        if count is None:
            count = self._orbit_cfg.sector_count
        cached = self._sector_cache.get(count)
        if cached is None:
            cached = sectors(self._shape, count, self._orbit_cfg.sector_samples, self._solver_cfg)
            self._sector_cache[count] = cached
        return cached

    def apsides(self) -> tuple[tuple[float, float], tuple[float, float] | None]:
        return apsides(self._shape)

    def focal_points(self) -> tuple[tuple[float, float], tuple[float, float]] | None:
        """Conic centre and empty focus, or ``None`` for a parabola."""

        center = conic_center(self._shape)
        if center is None:
            return None
        return center, empty_focus(self._shape)

    def energy(self) -> float:
        """Specific energy of the orbit; zero for parabolae."""

        if self.regime is Regime.PARABOLIC:
            return 0.0
        if self.regime is Regime.ELLIPTIC:
            return -self._shape.mu / (2.0 * self._shape.size)
        return self._shape.mu / (2.0 * self._shape.size)


__all__ = ["KeplerOrbit"]
