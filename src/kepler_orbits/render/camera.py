from __future__ import annotations

from typing import Sequence

import numpy as np


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


class Camera:
    """Maps the orbital plane onto the window.

    ``scale`` is in pixels per world unit and world +y points up. Centre and
    scale chase their goals in :meth:`update`, so re-framing an orbit eases
    in instead of jumping; panning and cursor zoom apply immediately.
    """

    def __init__(
        self,
        size: tuple[int, int],
        scale: float,
        *,
        min_scale: float,
        max_scale: float,
    ) -> None:
        self._size = size
        self._min_scale = min_scale
        self._max_scale = max_scale
        self._scale = _clamp(scale, min_scale, max_scale)
        self._scale_goal = self._scale
        self._center = np.zeros(2)
        self._center_goal = np.zeros(2)
        self._drag_from: tuple[int, int] | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def scale_target(self) -> float:
        return self._scale_goal

    @property
    def center(self) -> np.ndarray:
        return self._center

    def _half_size(self) -> np.ndarray:
        return np.array([self._size[0] // 2, self._size[1] // 2], dtype=float)

    def set_center(self, position: tuple[float, float]) -> None:
        self._center[:] = position
        self._center_goal[:] = position

    def set_target(self, position: tuple[float, float]) -> None:
        self._center_goal[:] = position

    def set_zoom(self, scale: float) -> None:
        self._scale = self._scale_goal = _clamp(scale, self._min_scale, self._max_scale)

    def zoom_by_factor(self, factor: float) -> None:
        self._scale_goal = _clamp(self._scale_goal * factor, self._min_scale, self._max_scale)

    def zoom_at(self, screen_pos: tuple[int, int], factor: float) -> None:
        """Zoom by ``factor`` keeping the world point under ``screen_pos`` fixed."""

        anchor = np.array(self.screen_to_world(*screen_pos))
        self.set_zoom(self._scale * factor)
        offset = np.array(screen_pos, dtype=float) - self._half_size()
        offset[1] = -offset[1]
        self.set_center(tuple(anchor - offset / self._scale))

    def fit_extent(self, extent: float, margin: float = 0.85) -> None:
        """Aim the zoom so a disc of radius ``extent`` around the centre fits."""

        if extent <= 0.0:
            return
        self._scale_goal = _clamp(
            margin * min(self._size) / 2.0 / extent, self._min_scale, self._max_scale
        )

    def update(self, smoothing: float = 0.1) -> None:
        self._scale = _clamp(
            self._scale + (self._scale_goal - self._scale) * smoothing,
            self._min_scale,
            self._max_scale,
        )
        self._center += (self._center_goal - self._center) * smoothing

    def begin_pan(self, position: tuple[int, int]) -> None:
        self._drag_from = position

    def pan(self, position: tuple[int, int]) -> None:
        if self._drag_from is None or position == self._drag_from:
            return
        shift = np.array(
            [position[0] - self._drag_from[0], self._drag_from[1] - position[1]], dtype=float
        )
        self.set_center(tuple(self._center - shift / self._scale))
        self._drag_from = position

    def end_pan(self) -> None:
        self._drag_from = None

    def project(self, points: Sequence[Sequence[float]] | np.ndarray) -> list[tuple[int, int]]:
        """World points to integer pixel coordinates, in one numpy pass."""

        world = np.asarray(points, dtype=float).reshape(-1, 2)
        offset = np.trunc((world - self._center) * self._scale)
        half = self._half_size()
        xs = half[0] + offset[:, 0]
        ys = half[1] - offset[:, 1]
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        return self.project([(x, y)])[0]

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        half = self._half_size()
        x = (sx - half[0]) / self._scale + self._center[0]
        y = (half[1] - sy) / self._scale + self._center[1]
        return float(x), float(y)
