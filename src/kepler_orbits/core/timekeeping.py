"""Frame timing and elapsed-time accumulators."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)
    max_delta: float = 0.25

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return min(dt, self.max_delta)


@dataclass
class TimeAccumulator:
    """Simulation time advanced by the host's frame deltas.

    Frozen while ``paused``. Non-positive deltas and speeds are ignored, so
    the value only moves forward.
    """

    value: float = 0.0
    paused: bool = False

    def advance(self, delta: float, speed: float = 1.0) -> float:
        if not self.paused and delta > 0.0 and speed > 0.0:
            self.value += delta * speed
        return self.value

    def reset(self, value: float = 0.0) -> None:
        self.value = value


__all__ = ["FrameTimer", "TimeAccumulator"]
