"""Configuration dataclasses for the orbit viewer."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverCfg:
    max_iterations: int = 15
    tolerance: float = 1e-6
    # Below this |e*cosh(H) - 1| the hyperbolic Newton step is skipped.
    hyperbolic_derivative_floor: float = 1e-5


@dataclass(frozen=True)
class OrbitCfg:
    parabolic_band: float = 0.005
    default_mu: float = 10.0
    curve_segments: int = 200
    parabolic_anomaly_limit: float = 6.0
    hyperbolic_asymptote_fraction: float = 0.92
    sector_count: int = 12
    sector_samples: int = 10
    phase_plot_steps: int = 100


@dataclass(frozen=True)
class MissionCfg:
    extrapolation_speed: float = 2.5
    look_ahead: float = 0.01
    path_samples: int = 200
    exit_distance_factor: float = 1.5


@dataclass(frozen=True)
class SimCfg:
    default_speed: float = 1.0
    min_speed: float = 0.1
    max_speed: float = 50.0
    speed_step: float = 1.5
    log_every_frames: int = 5
    runs_dir: str = "data/runs"


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1100
    height: int = 800
    fps: int = 60
    background_color: tuple[int, int, int] = (0, 22, 48)
    star_color: tuple[int, int, int] = (255, 214, 102)
    star_pixel_radius: int = 10
    body_color: tuple[int, int, int] = (234, 241, 255)
    body_pixel_radius: int = 6
    orbit_color: tuple[int, int, int, int] = (255, 255, 255, 180)
    orbit_line_width: int = 2
    planet_orbit_color: tuple[int, int, int, int] = (120, 150, 200, 110)
    sector_color: tuple[int, int, int] = (255, 0, 221)
    sector_alt_color: tuple[int, int, int] = (255, 120, 240)
    sector_alpha: int = 60
    probe_color: tuple[int, int, int] = (0, 255, 255)
    probe_pixel_radius: int = 4
    probe_path_color: tuple[int, int, int, int] = (0, 255, 255, 90)
    periapsis_color: tuple[int, int, int] = (255, 255, 0)
    apoapsis_color: tuple[int, int, int] = (0, 255, 255)
    center_color: tuple[int, int, int] = (170, 170, 170)
    empty_focus_color: tuple[int, int, int] = (255, 68, 68)
    marker_pixel_radius: int = 4
    velocity_arrow_color: tuple[int, int, int] = (255, 220, 180)
    velocity_arrow_scale: float = 6.0
    velocity_arrow_max_pixels: int = 90
    velocity_arrow_head_length: int = 10
    velocity_arrow_head_angle_deg: int = 26
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, 160)
    max_rendered_orbit_points: int = 800
    default_pixels_per_unit: float = 40.0
    min_pixels_per_unit: float = 2.0
    max_pixels_per_unit: float = 400.0
    zoom_step: float = 1.15


SOLVER_CFG = SolverCfg()
ORBIT_CFG = OrbitCfg()
MISSION_CFG = MissionCfg()
SIM_CFG = SimCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "MISSION_CFG",
    "ORBIT_CFG",
    "RENDER_CFG",
    "SIM_CFG",
    "SOLVER_CFG",
    "MissionCfg",
    "OrbitCfg",
    "RenderCfg",
    "SimCfg",
    "SolverCfg",
]
