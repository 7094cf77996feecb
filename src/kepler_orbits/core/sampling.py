"""Display geometry: orbit outlines and equal-time swept sectors."""
from __future__ import annotations

import math

import numpy as np

from .config import ORBIT_CFG, SOLVER_CFG, OrbitCfg, SolverCfg
from .model import OrbitShape, Regime, SectorPolygon
from .physics import orbit_state, orbital_period, periapsis_distance


def _to_points(xs: np.ndarray, ys: np.ndarray) -> list[tuple[float, float]]:
    return list(zip(xs.tolist(), ys.tolist()))


def sample_curve(
    shape: OrbitShape,
    segments: int = ORBIT_CFG.curve_segments,
    cfg: OrbitCfg = ORBIT_CFG,
) -> list[tuple[float, float]]:
    """Return ``segments + 1`` points tracing the orbit of ``shape``.

    Each regime is swept in its own native parameter rather than in time, so
    points do not bunch up away from periapsis:

    * elliptic: true anomaly over ``[0, 2pi]``; first and last points coincide.
    * hyperbolic: true anomaly over ``+-fraction * acos(-1/e)``, kept inside
      the asymptotes.
    * parabolic: ``D = tan(nu/2)`` over ``+-parabolic_anomaly_limit``.
    """

    if segments < 1:
        raise ValueError(f"Curve needs at least one segment. Got: {segments}")

    e = shape.e
    if shape.regime is Regime.PARABOLIC:
        limit = cfg.parabolic_anomaly_limit
        D = np.linspace(-limit, limit, segments + 1)
        r = periapsis_distance(shape) * (1.0 + D * D)
        nu = 2.0 * np.arctan(D)
    elif shape.regime is Regime.HYPERBOLIC:
        max_nu = cfg.hyperbolic_asymptote_fraction * math.acos(-1.0 / e)
        nu = np.linspace(-max_nu, max_nu, segments + 1)
        r = shape.size * (e * e - 1.0) / (1.0 + e * np.cos(nu))
    else:
        nu = np.linspace(0.0, 2.0 * math.pi, segments + 1)
        r = shape.size * (1.0 - e * e) / (1.0 + e * np.cos(nu))

    return _to_points(r * np.cos(nu), r * np.sin(nu))


def sectors(
    shape: OrbitShape,
    count: int = ORBIT_CFG.sector_count,
    samples: int = ORBIT_CFG.sector_samples,
    solver_cfg: SolverCfg = SOLVER_CFG,
) -> list[SectorPolygon]:
    """Split one period into ``count`` equal-time sectors.

    Every polygon runs focus -> arc (``samples + 1`` states) -> focus, so by
    Kepler's second law all areas agree up to the chord error of the arc.
    Open orbits have no period and yield an empty list.
    """

    if count < 1:
        raise ValueError(f"Sector count must be positive. Got: {count}")
    if samples < 1:
        raise ValueError(f"Sector samples must be positive. Got: {samples}")

    period = orbital_period(shape)
    if period is None:
        return []

    dt = period / count
    polygons: list[SectorPolygon] = []
    for i in range(count):
        t_start = i * dt
        arc = []
        for j in range(samples + 1):
            state = orbit_state(shape, t_start + dt * (j / samples), solver_cfg)
            arc.append((state.x, state.y))

        boundary = np.array([(0.0, 0.0), *arc, (0.0, 0.0)], dtype=float)
        polygons.append(SectorPolygon(start_point=arc[0], end_point=arc[-1], boundary=boundary))
    return polygons


__all__ = ["sample_curve", "sectors"]
