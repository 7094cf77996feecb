"""Two-body orbit propagation, display sampling and scripted trajectories."""

from .anomaly import solve_anomaly, solve_elliptic, solve_hyperbolic, solve_parabolic
from .config import (
    MISSION_CFG,
    ORBIT_CFG,
    RENDER_CFG,
    SIM_CFG,
    SOLVER_CFG,
    MissionCfg,
    OrbitCfg,
    RenderCfg,
    SimCfg,
    SolverCfg,
)
from .model import (
    InvalidShapeError,
    OrbitShape,
    OrbitState,
    Pose,
    Regime,
    SectorPolygon,
    classify_regime,
)
from .orbit import KeplerOrbit
from .physics import (
    apsides,
    conic_center,
    eccentricity,
    empty_focus,
    mean_motion,
    orbit_state,
    orbital_period,
    periapsis_distance,
    specific_angular_momentum,
    specific_energy,
    speed_radius_curve,
    vis_viva_speed,
)
from .sampling import sample_curve, sectors
from .timekeeping import FrameTimer, TimeAccumulator
from .trajectory import EncounterEvent, EncounterSchedule, TrajectoryPathMapper

__all__ = [
    "EncounterEvent",
    "EncounterSchedule",
    "FrameTimer",
    "InvalidShapeError",
    "KeplerOrbit",
    "MISSION_CFG",
    "MissionCfg",
    "ORBIT_CFG",
    "OrbitCfg",
    "OrbitShape",
    "OrbitState",
    "Pose",
    "RENDER_CFG",
    "Regime",
    "RenderCfg",
    "SIM_CFG",
    "SOLVER_CFG",
    "SectorPolygon",
    "SimCfg",
    "SolverCfg",
    "TimeAccumulator",
    "TrajectoryPathMapper",
    "apsides",
    "classify_regime",
    "conic_center",
    "eccentricity",
    "empty_focus",
    "mean_motion",
    "orbit_state",
    "orbital_period",
    "periapsis_distance",
    "sample_curve",
    "sectors",
    "solve_anomaly",
    "solve_elliptic",
    "solve_hyperbolic",
    "solve_parabolic",
    "specific_angular_momentum",
    "specific_energy",
    "speed_radius_curve",
    "vis_viva_speed",
]
