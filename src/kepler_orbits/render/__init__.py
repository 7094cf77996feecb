"""Rendering helpers for the orbit viewer."""

from .camera import Camera
from .draw import (
    draw_apsis_marker,
    draw_body,
    draw_focus_marker,
    draw_orbit_line,
    draw_probe,
    draw_sectors,
    draw_star,
    draw_velocity_arrow,
    downsample_points,
    focus_marker_lines,
    velocity_arrow_end,
)
from .text import hud_panel, load_font, text_surface

__all__ = [
    "Camera",
    "draw_apsis_marker",
    "draw_body",
    "draw_focus_marker",
    "draw_orbit_line",
    "draw_probe",
    "draw_sectors",
    "draw_star",
    "draw_velocity_arrow",
    "downsample_points",
    "focus_marker_lines",
    "hud_panel",
    "load_font",
    "text_surface",
    "velocity_arrow_end",
]
