from __future__ import annotations

import math
from typing import Sequence, TYPE_CHECKING

import numpy as np
import pygame

from .text import Color

if TYPE_CHECKING:  # pragma: no cover
    from kepler_orbits.core.config import RenderCfg


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _polar(origin: tuple[float, float], length: float, angle: float) -> tuple[float, float]:
    # Screen y grows downwards, so world angles flip sign on y.
    return (origin[0] + length * math.cos(angle), origin[1] - length * math.sin(angle))


def draw_body(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
) -> None:
    if radius > 0:
        pygame.draw.circle(surface, color, position, radius)


def draw_star(
    surface: pygame.Surface,
    position: tuple[int, int],
    *,
    render_cfg: RenderCfg,
) -> None:
    radius = render_cfg.star_pixel_radius
    glow = pygame.Surface((radius * 6, radius * 6), pygame.SRCALPHA)
    center = (radius * 3, radius * 3)
    pygame.draw.circle(glow, (*render_cfg.star_color, 40), center, radius * 3)
    pygame.draw.circle(glow, (*render_cfg.star_color, 90), center, int(radius * 1.8))
    surface.blit(glow, glow.get_rect(center=position))
    pygame.draw.circle(surface, render_cfg.star_color, position, radius)


def draw_orbit_line(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[int, int]],
    width: int,
    *,
    closed: bool = False,
) -> None:
    """Antialiased polyline; wider lines get a solid core under the AA edge."""

    if len(points) < 2:
        return
    if width > 1:
        pygame.draw.lines(surface, color, closed, points, width)
    pygame.draw.aalines(surface, color, closed, points)


def downsample_points(
    points: Sequence[tuple[float, float]], max_points: int
) -> list[tuple[float, float]]:
    """At most ``max_points`` evenly spread samples, always keeping both ends."""

    count = len(points)
    if count <= max_points:
        return list(points)
    keep = np.unique(np.linspace(0, count - 1, max(2, max_points)).round().astype(int))
    return [points[i] for i in keep]


def draw_sectors(
    surface: pygame.Surface,
    polygons: Sequence[Sequence[tuple[int, int]]],
    *,
    render_cfg: RenderCfg,
) -> None:
    """Fill screen-space sector polygons with alternating translucent colours."""

    if not polygons:
        return
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    for index, polygon in enumerate(polygons):
        if len(polygon) < 3:
            continue
        base = render_cfg.sector_color if index % 2 == 0 else render_cfg.sector_alt_color
        pygame.draw.polygon(overlay, (*base, render_cfg.sector_alpha), polygon)
    surface.blit(overlay, (0, 0))


def velocity_arrow_end(
    start: tuple[int, int],
    velocity: tuple[float, float],
    *,
    render_cfg: RenderCfg,
) -> tuple[int, int]:
    """Screen end point of a velocity arrow, length clamped to the configured maximum."""

    vx, vy = velocity
    length = _clamp(
        math.hypot(vx, vy) * render_cfg.velocity_arrow_scale,
        0.0,
        float(render_cfg.velocity_arrow_max_pixels),
    )
    x, y = _polar(start, length, math.atan2(vy, vx))
    return int(x), int(y)


def draw_velocity_arrow(
    surface: pygame.Surface,
    start: tuple[int, int],
    end: tuple[int, int],
    *,
    render_cfg: RenderCfg,
) -> None:
    if start == end:
        return
    color = render_cfg.velocity_arrow_color
    pygame.draw.line(surface, color, start, end, 2)
    # Head barbs point back towards ``start``.
    back = math.atan2(end[1] - start[1], start[0] - end[0])
    spread = math.radians(render_cfg.velocity_arrow_head_angle_deg)
    barbs = [
        _polar(end, render_cfg.velocity_arrow_head_length, back + side * spread)
        for side in (-1.0, 1.0)
    ]
    pygame.draw.polygon(surface, color, [end, *barbs])


def draw_apsis_marker(
    surface: pygame.Surface,
    position: tuple[int, int],
    *,
    color: tuple[int, int, int],
    radius: int,
) -> None:
    pygame.draw.circle(surface, color, position, radius)
    pygame.draw.circle(surface, color, position, radius + 4, 1)


def focus_marker_lines(
    position: tuple[int, int],
    radius: int,
) -> list[tuple[tuple[int, int], tuple[int, int]]]:
    """Two strokes of an x-shaped marker centred on ``position``."""

    x, y = position
    return [((x - radius, y - radius), (x + radius, y + radius)), ((x - radius, y + radius), (x + radius, y - radius))]


def draw_focus_marker(
    surface: pygame.Surface,
    position: tuple[int, int],
    *,
    color: tuple[int, int, int],
    radius: int,
) -> None:
    for start, end in focus_marker_lines(position, radius):
        pygame.draw.line(surface, color, start, end, 2)


def draw_probe(
    surface: pygame.Surface,
    position: tuple[int, int],
    facing: tuple[float, float],
    *,
    render_cfg: RenderCfg,
) -> None:
    """Small arrowhead at ``position`` pointing along world-space ``facing``."""

    size = render_cfg.probe_pixel_radius * 2
    heading = math.atan2(facing[1], facing[0])
    outline = [
        _polar(position, size, heading),
        _polar(position, size * 0.6, heading + 2.5),
        _polar(position, size * 0.6, heading - 2.5),
    ]
    pygame.draw.polygon(surface, render_cfg.probe_color, outline)
