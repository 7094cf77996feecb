"""Run recording for the orbit viewer.

A run is a directory ``<root>/<run_id>/`` holding ``timeseries.csv``,
``events.csv`` and ``meta.json``; ``<root>/last_run.txt`` names the newest
run so the analysis script can pick it up without arguments.
"""
from __future__ import annotations

import csv
import itertools
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .model import OrbitState
from .physics import specific_angular_momentum, specific_energy


class _BufferedCsv:
    """CSV file that collects rows in memory and writes them in batches."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self._fh = path.open("w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._writer.writerow(header)
        self._rows: list[list[str]] = []
        self._threshold = max(1, threshold)

    def append(self, row: list[str]) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._rows:
            self._writer.writerows(self._rows)
            self._rows.clear()
            self._fh.flush()

    def close(self) -> None:
        self.flush()
        self._fh.close()


def _cell(value: object) -> str:
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    if isinstance(value, (int, float)):
        return f"{value:.10g}"
    return str(value)


class RunLogger:
    """Records sampled orbit states and discrete events of one viewer run."""

    TIMESERIES_HEADER = ["t", "x", "y", "vx", "vy", "r", "v", "energy", "h"]
    EVENTS_HEADER = ["t", "type", "r", "v", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.run_id = self._unique_run_id(run_id)
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._timeseries = _BufferedCsv(
            self.timeseries_path, self.TIMESERIES_HEADER, timeseries_flush_threshold
        )
        self._events = _BufferedCsv(self.events_path, self.EVENTS_HEADER, events_flush_threshold)
        self._closed = False

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    def _unique_run_id(self, requested: Optional[str]) -> str:
        if requested:
            base, suffixes = requested, (f"{requested}_{n}" for n in itertools.count(1))
        else:
            base = datetime.now().strftime("%Y%m%d_%H%M%S") + "_run"
            suffixes = (f"{base}_{n:02d}" for n in itertools.count(1))
        return next(
            candidate
            for candidate in itertools.chain([base], suffixes)
            if not (self.root_dir / candidate).exists()
        )

    def write_meta(self, meta: dict) -> None:
        self.meta_path.write_text(json.dumps(meta, indent=2, sort_keys=True), encoding="utf-8")

    def log_ts(self, values: Sequence[float]) -> None:
        self._timeseries.append([_cell(value) for value in values])

    def log_state(self, t: float, state: OrbitState, mu: float) -> None:
        """Append one row for ``state`` together with its energy and momentum."""

        self.log_ts(
            [
                t,
                state.x,
                state.y,
                state.vx,
                state.vy,
                state.r,
                state.speed,
                specific_energy(state, mu),
                specific_angular_momentum(state),
            ]
        )

    def log_event(self, values: Sequence[object]) -> None:
        """Append ``[t, type, r, v, details]``; a dict ``details`` is stored as JSON."""

        self._events.append([_cell(value) for value in values])

    def close(self) -> None:
        if self._closed:
            return
        self._timeseries.close()
        self._events.close()
        self._closed = True

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["RunLogger"]
