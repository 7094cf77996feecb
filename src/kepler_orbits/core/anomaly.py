"""Root finders that turn a time-proportional anomaly into the regime's anomaly.

All solvers are total for finite input. When Newton-Raphson runs out of
iterations, or the hyperbolic derivative gets too small to divide by, the
last iterate is returned as is. For well-posed inputs the residual left
behind is far below anything visible on screen, but it is an approximation,
not a converged root.
"""
from __future__ import annotations

import logging
import math

from .config import SOLVER_CFG, SolverCfg
from .model import Regime

logger = logging.getLogger(__name__)


def wrap_to_pi(angle: float) -> float:
    """Wrap ``angle`` into ``[-pi, pi)``."""

    return (angle + math.pi) % (2.0 * math.pi) - math.pi


def solve_elliptic(mean_anomaly: float, e: float, cfg: SolverCfg = SOLVER_CFG) -> float:
    """Solve ``M = E - e sin(E)`` for the eccentric anomaly ``E``."""

    M = wrap_to_pi(mean_anomaly)
    E = M
    for _ in range(cfg.max_iterations):
        dE = (E - e * math.sin(E) - M) / (1.0 - e * math.cos(E))
        E -= dE
        if abs(dE) < cfg.tolerance:
            break
    return E


def solve_hyperbolic(mean_anomaly: float, e: float, cfg: SolverCfg = SOLVER_CFG) -> float:
    """Solve ``M = e sinh(H) - H`` for the hyperbolic anomaly ``H``.

    The start ``M/(e-1)`` is capped at ``asinh(|M|/e) + 1``; both bound the
    root from above, so Newton descends monotonically and ``cosh`` stays
    finite for any realistic ``M``.
    """

    M = mean_anomaly
    H = math.copysign(min(abs(M / (e - 1.0)), math.asinh(abs(M) / e) + 1.0), M)
    for _ in range(cfg.max_iterations):
        try:
            df = e * math.cosh(H) - 1.0
            residual = e * math.sinh(H) - H - M
        except OverflowError:
            logger.debug("Hyperbolic anomaly overflow at H=%.6g, keeping last iterate", H)
            break
        if abs(df) < cfg.hyperbolic_derivative_floor:
            logger.debug("Hyperbolic derivative %.3g too small, keeping H=%.6g", df, H)
            break
        dH = residual / df
        H -= dH
        if abs(dH) < cfg.tolerance:
            break
    return H


def solve_parabolic(mean_anomaly: float) -> float:
    """Solve Barker's equation ``Mp = (D + D^3/3) / 2`` for ``D = tan(nu/2)``.

    With ``W = 3Mp`` and ``Y = cbrt(W + sqrt(W^2 + 1))``, ``D = Y - 1/Y`` is
    the real root of the depressed cubic ``D^3 + 3D - 2W = 0``; no iteration
    involved.
    The root is odd in ``Mp``, so it is evaluated for ``|Mp|`` to keep
    ``W + sqrt(W^2 + 1)`` clear of cancellation for large negative times.
    """

    W = 3.0 * abs(mean_anomaly)
    Y = math.cbrt(W + math.hypot(W, 1.0))
    return math.copysign(Y - 1.0 / Y, mean_anomaly)


def solve_anomaly(
    regime: Regime,
    mean_anomaly: float,
    e: float,
    cfg: SolverCfg = SOLVER_CFG,
) -> float:
    """Dispatch to the anomaly solver of ``regime``."""

    if regime is Regime.ELLIPTIC:
        return solve_elliptic(mean_anomaly, e, cfg)
    if regime is Regime.HYPERBOLIC:
        return solve_hyperbolic(mean_anomaly, e, cfg)
    return solve_parabolic(mean_anomaly)


__all__ = [
    "solve_anomaly",
    "solve_elliptic",
    "solve_hyperbolic",
    "solve_parabolic",
    "wrap_to_pi",
]
