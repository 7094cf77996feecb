"""Scripted multi-leg probe trajectory through timed encounter points."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np
from scipy.interpolate import CubicSpline

from .config import MISSION_CFG, SOLVER_CFG, MissionCfg, SolverCfg
from .model import OrbitShape, Pose
from .physics import mean_motion, orbit_state
from .timekeeping import TimeAccumulator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncounterEvent:
    """Where the probe has to be at ``elapsed_time``.

    The anchor is the position of a body on ``target_shape`` whose mean
    anomaly at mission start is ``phase_offset``. A ``fixed_position``
    replaces the body lookup for points that do not sit on an orbit.
    """

    elapsed_time: float
    target_shape: OrbitShape | None
    phase_offset: float = 0.0
    name: str = ""
    fixed_position: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.elapsed_time):
            raise ValueError(f"Encounter time must be finite. Got: {self.elapsed_time}")
        if self.target_shape is None and self.fixed_position is None:
            raise ValueError("Encounter needs a target shape or a fixed position.")

    def anchor_point(self, cfg: SolverCfg = SOLVER_CFG) -> np.ndarray:
        if self.fixed_position is not None:
            return np.array(self.fixed_position, dtype=float)
        shape = self.target_shape
        t = self.phase_offset / mean_motion(shape) + self.elapsed_time
        return orbit_state(shape, t, cfg).position


@dataclass(frozen=True)
class EncounterSchedule:
    """Immutable, time-ordered list of encounters."""

    events: tuple[EncounterEvent, ...]

    def __init__(self, events: Iterable[EncounterEvent]) -> None:
        events = tuple(events)
        if len(events) < 2:
            raise ValueError(f"Schedule needs at least two encounters. Got: {len(events)}")
        for prev, nxt in zip(events, events[1:]):
            if nxt.elapsed_time <= prev.elapsed_time:
                raise ValueError(
                    "Encounter times must be strictly increasing: "
                    f"{prev.elapsed_time} then {nxt.elapsed_time}"
                )
        object.__setattr__(self, "events", events)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[EncounterEvent]:
        return iter(self.events)

    @property
    def times(self) -> np.ndarray:
        return np.array([event.elapsed_time for event in self.events], dtype=float)

    @property
    def start_time(self) -> float:
        return self.events[0].elapsed_time

    @property
    def end_time(self) -> float:
        return self.events[-1].elapsed_time


def _unit(vector: np.ndarray) -> np.ndarray | None:
    norm = float(np.linalg.norm(vector))
    if norm <= 1e-12 or not math.isfinite(norm):
        return None
    return vector / norm


class TrajectoryPathMapper:
    """Maps mission elapsed time to a probe pose on a smooth scripted path.

    The path is a cubic spline through the encounter anchors with anchor
    ``i`` at curve parameter ``i / (N - 1)``. Inside the schedule, time maps
    piecewise linearly onto the curve parameter, so each anchor is reached
    exactly at its encounter time. Past the last encounter the probe leaves
    along the terminal tangent at a constant speed.
    """

    def __init__(
        self,
        cfg: MissionCfg = MISSION_CFG,
        *,
        solver_cfg: SolverCfg = SOLVER_CFG,
    ) -> None:
        self._cfg = cfg
        self._solver_cfg = solver_cfg
        self.accumulator = TimeAccumulator()
        self._schedule: EncounterSchedule | None = None
        self._anchors: np.ndarray | None = None
        self._knots: np.ndarray | None = None
        self._curve: CubicSpline | None = None
        self._end_point: np.ndarray | None = None
        self._end_tangent: np.ndarray | None = None

    @property
    def armed(self) -> bool:
        return self._curve is not None

    @property
    def paused(self) -> bool:
        return self.accumulator.paused

    @paused.setter
    def paused(self, value: bool) -> None:
        self.accumulator.paused = value

    @property
    def elapsed_time(self) -> float:
        return self.accumulator.value

    @property
    def schedule(self) -> EncounterSchedule | None:
        return self._schedule

    @property
    def anchors(self) -> np.ndarray | None:
        return None if self._anchors is None else self._anchors.copy()

    def arm(self, schedule: EncounterSchedule) -> None:
        """Build the path for ``schedule`` and restart the mission clock."""

        anchors = np.array(
            [event.anchor_point(self._solver_cfg) for event in schedule], dtype=float
        )
        knots = np.linspace(0.0, 1.0, len(schedule))
        curve = CubicSpline(knots, anchors, axis=0)

        end_point = np.asarray(curve(1.0), dtype=float)
        tangent = _unit(np.asarray(curve(1.0, 1), dtype=float))
        if tangent is None:
            tangent = _unit(anchors[-1] - anchors[-2])
        if tangent is None:
            tangent = np.array([1.0, 0.0])

        self._schedule = schedule
        self._anchors = anchors
        self._knots = knots
        self._curve = curve
        self._end_point = end_point
        self._end_tangent = tangent
        self.accumulator.reset()
        self.accumulator.paused = False
        logger.info(
            "Trajectory armed with %d encounters over t=[%g, %g]",
            len(schedule),
            schedule.start_time,
            schedule.end_time,
        )

    def disarm(self) -> None:
        self._schedule = None
        self._anchors = None
        self._knots = None
        self._curve = None
        self._end_point = None
        self._end_tangent = None
        self.accumulator.reset()
        logger.info("Trajectory disarmed")

    def _require_curve(self) -> CubicSpline:
        if self._curve is None:
            raise RuntimeError("Trajectory is not armed.")
        return self._curve

    def curve_parameter(self, t: float) -> float:
        """Curve parameter reached at mission time ``t``, clamped to ``[0, 1]``."""

        self._require_curve()
        return float(np.interp(t, self._schedule.times, self._knots))

    def pose_at(self, t: float) -> Pose:
        curve = self._require_curve()
        if t > self._schedule.end_time:
            overshoot = t - self._schedule.end_time
            position = self._end_point + self._end_tangent * (
                overshoot * self._cfg.extrapolation_speed
            )
            return Pose(position=position, facing=self._end_tangent.copy())

        u = self.curve_parameter(t)
        position = np.asarray(curve(u), dtype=float)
        look_target = np.asarray(curve(min(u + self._cfg.look_ahead, 1.0)), dtype=float)
        facing = _unit(look_target - position)
        if facing is None:
            facing = _unit(np.asarray(curve(u, 1), dtype=float))
        if facing is None:
            facing = self._end_tangent.copy()
        return Pose(position=position, facing=facing)

    def advance(self, delta: float, speed: float = 1.0) -> Pose | None:
        """Advance the mission clock by one host frame and return the pose.

        Returns ``None`` while disarmed; a paused mapper keeps returning the
        pose at the frozen time.
        """

        if not self.armed:
            return None
        t = self.accumulator.advance(delta, speed)
        return self.pose_at(t)

    def path_points(self, count: int | None = None) -> list[tuple[float, float]]:
        """Evenly spaced curve samples between the first and last anchor."""

        curve = self._require_curve()
        if count is None:
            count = self._cfg.path_samples
        u = np.linspace(0.0, 1.0, count + 1)
        points = np.asarray(curve(u), dtype=float)
        return [(float(x), float(y)) for x, y in points]


__all__ = ["EncounterEvent", "EncounterSchedule", "TrajectoryPathMapper"]
