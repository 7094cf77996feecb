"""Font lookup and cached HUD text rendering."""
from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Sequence, TYPE_CHECKING

import pygame

if TYPE_CHECKING:  # pragma: no cover
    from kepler_orbits.core.config import RenderCfg

Color = tuple[int, int, int] | tuple[int, int, int, int]


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    """First installed font from ``preferred_names``, else pygame's default."""

    names = list(preferred_names)
    path = next(
        (found for found in (pygame.font.match_font(name, bold=bold) for name in names) if found),
        None,
    )
    if path is not None:
        return pygame.font.Font(path, size)
    return pygame.font.SysFont(names[0] if names else None, size, bold=bold)


@lru_cache(maxsize=256)
def text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    # HUD lines repeat every frame; fonts hash by identity.
    return font.render(text, True, color)


def hud_panel(font: pygame.font.Font, lines: Sequence[str], *, render_cfg: RenderCfg) -> pygame.Surface:
    """Rounded translucent panel with one text row per entry of ``lines``."""

    padding_x, padding_y = 14, 8
    row = font.get_linesize()
    width = max((font.size(line)[0] for line in lines), default=0) + 2 * padding_x
    panel = pygame.Surface((width, row * len(lines) + 2 * padding_y), pygame.SRCALPHA)
    pygame.draw.rect(panel, render_cfg.hud_background_color, panel.get_rect(), border_radius=12)
    for index, line in enumerate(lines):
        panel.blit(
            text_surface(font, line, render_cfg.hud_text_color),
            (padding_x, padding_y + index * row),
        )
    return panel
