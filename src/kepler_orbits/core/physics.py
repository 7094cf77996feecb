"""Analytic two-body state evaluation for elliptic, parabolic and hyperbolic orbits.

The focus sits at the origin, periapsis lies on the +x axis and motion is
counter-clockwise. Time ``t`` is measured from periapsis passage and may be
negative.
"""
from __future__ import annotations

import math

import numpy as np

from .anomaly import solve_elliptic, solve_hyperbolic, solve_parabolic
from .config import ORBIT_CFG, SOLVER_CFG, SolverCfg
from .model import OrbitShape, OrbitState, Regime


def periapsis_distance(shape: OrbitShape) -> float:
    """Closest approach distance ``q`` to the focus."""

    if shape.regime is Regime.PARABOLIC:
        return shape.size
    if shape.regime is Regime.ELLIPTIC:
        return shape.size * (1.0 - shape.e)
    return shape.size * (shape.e - 1.0)


def mean_motion(shape: OrbitShape) -> float:
    """Mean motion ``n`` used to scale time into the regime's mean anomaly.

    For parabolic shapes this is ``sqrt(mu / p^3)`` with ``p = 2q`` the
    semi-latus rectum, so that ``Mp = n t`` satisfies Barker's equation.
    This is 1/sqrt(2) times the reference ``0.5 * sqrt(mu / q^3)``, which
    would not meet the elliptic and hyperbolic states as e approaches 1.
    """

    if shape.regime is Regime.PARABOLIC:
        p = 2.0 * shape.size
        return math.sqrt(shape.mu / p**3)
    return math.sqrt(shape.mu / shape.size**3)


def orbital_period(shape: OrbitShape) -> float | None:
    """Period of a bound orbit, ``None`` for open ones."""

    if shape.regime is not Regime.ELLIPTIC:
        return None
    return 2.0 * math.pi * math.sqrt(shape.size**3 / shape.mu)


def _elliptic_state(shape: OrbitShape, t: float, cfg: SolverCfg) -> OrbitState:
    a = shape.size
    e = shape.e
    mu = shape.mu
    M = mean_motion(shape) * t
    E = solve_elliptic(M, e, cfg)

    r = a * (1.0 - e * math.cos(E))
    if not math.isfinite(r):
        return OrbitState.zero()

    vx = -math.sqrt(mu * a) / r * math.sin(E)
    vy = math.sqrt(mu * a * (1.0 - e * e)) / r * math.cos(E)

    denom = 1.0 - e * math.cos(E)
    cos_nu = (math.cos(E) - e) / denom
    sin_nu = math.sqrt(1.0 - e * e) * math.sin(E) / denom
    return OrbitState(r * cos_nu, r * sin_nu, vx, vy, r)


def _parabolic_state(shape: OrbitShape, t: float) -> OrbitState:
    q = shape.size
    mu = shape.mu
    D = solve_parabolic(mean_motion(shape) * t)

    r = q * (1.0 + D * D)
    nu = 2.0 * math.atan(D)
    cos_nu = math.cos(nu)
    sin_nu = math.sin(nu)

    h = math.sqrt(2.0 * mu * q)
    vr = (mu / h) * sin_nu
    vt = (mu / h) * (1.0 + cos_nu)

    vx = vr * cos_nu - vt * sin_nu
    vy = vr * sin_nu + vt * cos_nu
    return OrbitState(r * cos_nu, r * sin_nu, vx, vy, r)


def _hyperbolic_state(shape: OrbitShape, t: float, cfg: SolverCfg) -> OrbitState:
    a = abs(shape.size)
    e = shape.e
    n = mean_motion(shape)
    H = solve_hyperbolic(n * t, e, cfg)

    try:
        cosh_h = math.cosh(H)
        sinh_h = math.sinh(H)
    except OverflowError:
        return OrbitState.zero()
    b_over_a = math.sqrt(e * e - 1.0)

    r = a * (e * cosh_h - 1.0)
    x = a * (e - cosh_h)
    y = a * b_over_a * sinh_h

    h_dot = n / (e * cosh_h - 1.0)
    vx = -a * sinh_h * h_dot
    vy = a * b_over_a * cosh_h * h_dot
    return OrbitState(x, y, vx, vy, r)


def orbit_state(shape: OrbitShape, t: float, cfg: SolverCfg = SOLVER_CFG) -> OrbitState:
    """Position, velocity and radius on ``shape`` at time ``t`` after periapsis."""

    if shape.regime is Regime.PARABOLIC:
        return _parabolic_state(shape, t)
    if shape.regime is Regime.ELLIPTIC:
        return _elliptic_state(shape, t, cfg)
    return _hyperbolic_state(shape, t, cfg)


def specific_energy(state: OrbitState, mu: float) -> float:
    """Specific mechanical energy ``v^2/2 - mu/r``."""

    return 0.5 * (state.vx * state.vx + state.vy * state.vy) - mu / state.r


def specific_angular_momentum(state: OrbitState) -> float:
    """Signed out-of-plane angular momentum ``x vy - y vx``."""

    return state.x * state.vy - state.y * state.vx


def eccentricity(state: OrbitState, mu: float) -> float:
    """Return the orbital eccentricity for ``state``."""

    r3 = np.array([state.x, state.y, 0.0])
    v3 = np.array([state.vx, state.vy, 0.0])
    h = np.cross(r3, v3)
    e_vec = np.cross(v3, h) / mu - r3 / np.linalg.norm(r3)
    return float(np.linalg.norm(e_vec[:2]))


def vis_viva_speed(shape: OrbitShape, r):
    """Speed at radius ``r`` (scalar or array) from the vis-viva relation."""

    if shape.regime is Regime.PARABOLIC:
        inverse_a = 0.0
    elif shape.regime is Regime.ELLIPTIC:
        inverse_a = 1.0 / shape.size
    else:
        inverse_a = -1.0 / shape.size
    return np.sqrt(shape.mu * (2.0 / np.asarray(r, dtype=float) - inverse_a))


def apsides(shape: OrbitShape) -> tuple[tuple[float, float], tuple[float, float] | None]:
    """Periapsis point and, for bound orbits, the apoapsis point."""

    periapsis = (periapsis_distance(shape), 0.0)
    if shape.regime is not Regime.ELLIPTIC:
        return periapsis, None
    return periapsis, (-shape.size * (1.0 + shape.e), 0.0)


def conic_center(shape: OrbitShape) -> tuple[float, float] | None:
    """Geometric centre of the conic; parabolae have none."""

    if shape.regime is Regime.PARABOLIC:
        return None
    offset = shape.size * shape.e
    if shape.regime is Regime.ELLIPTIC:
        return (-offset, 0.0)
    return (offset, 0.0)


def empty_focus(shape: OrbitShape) -> tuple[float, float] | None:
    """The focus not occupied by the central body."""

    center = conic_center(shape)
    if center is None:
        return None
    return (2.0 * center[0], 0.0)


def speed_radius_curve(
    shape: OrbitShape,
    steps: int = ORBIT_CFG.phase_plot_steps,
) -> list[tuple[float, float]]:
    """(r, v) pairs from periapsis to apoapsis for a bound orbit."""

    if shape.regime is not Regime.ELLIPTIC:
        return []
    a = shape.size
    e = shape.e
    nu = np.linspace(0.0, math.pi, steps + 1)
    r = a * (1.0 - e * e) / (1.0 + e * np.cos(nu))
    v = vis_viva_speed(shape, r)
    return list(zip(r.tolist(), v.tolist()))


__all__ = [
    "apsides",
    "conic_center",
    "eccentricity",
    "empty_focus",
    "mean_motion",
    "orbit_state",
    "orbital_period",
    "periapsis_distance",
    "specific_angular_momentum",
    "specific_energy",
    "speed_radius_curve",
    "vis_viva_speed",
]
