"""Analyze a recorded viewer run and generate diagnostic figures.

Reads ``timeseries.csv``, ``events.csv`` and ``meta.json`` of one run,
reports how well energy and angular momentum were conserved and writes
orbit, invariant and phase plots into ``<run>/figs``.
"""
from __future__ import annotations

import argparse
import csv
import json
import math
from collections import Counter
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from kepler_orbits.core.config import SIM_CFG
from kepler_orbits.core.model import OrbitShape, Regime
from kepler_orbits.core.physics import speed_radius_curve


RUN_FILES = ("meta.json", "timeseries.csv", "events.csv")
FIGS_SUBDIR = "figs"
ENERGY_TOL = 1e-9
COUNTED_EVENTS = ("periapsis", "apoapsis", "launch")


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    """Column name -> float array; an empty file yields no columns."""

    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        header = next(reader, [])
        rows = [[float(cell) for cell in row] for row in reader if row]
    if not header:
        return {}
    table = np.asarray(rows, dtype=float).reshape(-1, len(header))
    return {name: table[:, index] for index, name in enumerate(header)}


def _parse_details(raw: str) -> object | None:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def load_events(path: Path) -> List[dict]:
    events: List[dict] = []
    with path.open(newline="", encoding="utf-8") as fh:
        for row in csv.DictReader(fh):
            event = {key: float(row[key]) for key in ("t", "r", "v")}
            event["type"] = row["type"]
            details = _parse_details(row.get("details") or "")
            if details is not None:
                event["details"] = details
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    path = run_dir / FIGS_SUBDIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def relative_drift(values: np.ndarray) -> float:
    """Largest deviation from the first sample, relative to its magnitude."""

    if values.size == 0:
        return 0.0
    reference = values[0]
    denom = abs(reference) if abs(reference) > 1e-12 else 1.0
    return float(np.max(np.abs(values - reference)) / denom)


def classify_orbit(energy: float) -> str:
    if energy < -ENERGY_TOL:
        return "elliptic"
    if energy > ENERGY_TOL:
        return "hyperbolic"
    return "parabolic"


def summarize_events(events: List[dict]) -> Dict[str, int]:
    counts = Counter(event["type"] for event in events)
    return {kind: counts.get(kind, 0) for kind in COUNTED_EVENTS}


def estimate_period(events: List[dict]) -> float | None:
    """Time between the last two recorded periapsis passages."""

    passages = [event["t"] for event in events if event["type"] == "periapsis"]
    if len(passages) < 2:
        return None
    return passages[-1] - passages[-2]


def plot_orbit(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["x"], ts["y"], color="#6bc5c0", lw=1.5, label="Body")
    ax.scatter([0.0], [0.0], color="#ffd43b", s=60, label="Focus")
    ax.set_aspect("equal", "box")
    ax.set(xlabel="x", ylabel="y", title="Orbit (x-y)")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "orbit_xy.png", dpi=150)
    plt.close(fig)


def plot_invariants(fig_dir: Path, ts: Dict[str, np.ndarray], energy_drift: float, h_drift: float) -> None:
    fig, (ax_e, ax_h) = plt.subplots(2, 1, figsize=(7, 6), sharex=True)
    ax_e.plot(ts["t"], ts["energy"], color="#ffa94d")
    ax_e.set(ylabel="specific energy")
    ax_e.set_title(f"Energy drift {energy_drift:.2e}, angular momentum drift {h_drift:.2e}")
    ax_h.plot(ts["t"], ts["h"], color="#94d82d")
    ax_h.set(xlabel="t", ylabel="h")
    for ax in (ax_e, ax_h):
        ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "invariants.png", dpi=150)
    plt.close(fig)


def plot_phase(fig_dir: Path, ts: Dict[str, np.ndarray], shape: OrbitShape | None) -> None:
    """Recorded (r, v) samples over the analytic vis-viva curve when bound."""

    fig, ax = plt.subplots(figsize=(7, 4))
    if shape is not None and shape.regime is Regime.ELLIPTIC:
        r_curve, v_curve = np.array(speed_radius_curve(shape)).T
        ax.plot(r_curve, v_curve, color="#475569", linestyle="--", label="vis-viva")
    ax.scatter(ts["r"], ts["v"], color="#00bcd4", s=6, label="recorded")
    ax.set(xlabel="r", ylabel="v", title="Phase plot (v vs r)")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "phase_rv.png", dpi=150)
    plt.close(fig)


def shape_from_meta(meta: dict) -> OrbitShape | None:
    try:
        return OrbitShape(float(meta["size"]), float(meta["e"]), float(meta["mu"]))
    except (KeyError, TypeError, ValueError):
        return None


def resolve_run_dir(run: str | None, runs_root: Path) -> Path:
    """Run directory from a path, a run id under ``runs_root`` or ``last_run.txt``."""

    if run is None:
        marker = runs_root / "last_run.txt"
        if not marker.exists():
            raise FileNotFoundError(f"No run given and {marker} is missing.")
        run = marker.read_text(encoding="utf-8").strip()
    for candidate in (Path(run), runs_root / run):
        if candidate.is_dir():
            missing = [name for name in RUN_FILES if not (candidate / name).exists()]
            if missing:
                raise FileNotFoundError(f"{candidate} is missing {', '.join(missing)}.")
            return candidate
    raise FileNotFoundError(f"Run directory not found: {run}")


def analyze_run(run_dir: Path) -> dict:
    """Compute the run summary and write all figures."""

    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    ts = load_timeseries(run_dir / "timeseries.csv")
    if ts.get("t", np.array([])).size == 0:
        raise ValueError(f"{run_dir / 'timeseries.csv'} has no samples.")
    events = load_events(run_dir / "events.csv")

    summary = {
        "meta": meta,
        "orbit_class": classify_orbit(float(np.mean(ts["energy"]))),
        "energy_drift": relative_drift(ts["energy"]),
        "h_drift": relative_drift(ts["h"]),
        "period": estimate_period(events),
        "events": summarize_events(events),
    }

    fig_dir = ensure_fig_dir(run_dir)
    plot_orbit(fig_dir, ts)
    plot_invariants(fig_dir, ts, summary["energy_drift"], summary["h_drift"])
    plot_phase(fig_dir, ts, shape_from_meta(meta))
    return summary


def print_summary(run_dir: Path, summary: dict) -> None:
    meta = summary["meta"]
    print(f"Run: {run_dir.name}")
    print(f" Orbit: {meta.get('orbit_type', 'unknown')} ({summary['orbit_class']})")
    if meta.get("period") is not None:
        print(f" Analytic period T = {meta['period']:.4f}")
    if summary["period"] is not None:
        print(f" Period between last two periapses = {summary['period']:.4f}")
    else:
        print(" Recorded period: needs at least two periapses")
    print(f" Relative energy drift = {summary['energy_drift']:.3e}")
    print(f" Relative angular momentum drift = {summary['h_drift']:.3e}")
    print(" Events:" + ",".join(f" {kind}: {count}" for kind, count in summary["events"].items()))
    if not math.isfinite(summary["energy_drift"]):
        print(" Warning: non-finite energy samples in run")


def main() -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="Run directory or run id (default: last run)")
    parser.add_argument("--runs-root", default=SIM_CFG.runs_dir, help="Directory holding runs")
    args = parser.parse_args()

    try:
        run_dir = resolve_run_dir(args.run_dir, Path(args.runs_root))
        summary = analyze_run(run_dir)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    print_summary(run_dir, summary)


if __name__ == "__main__":
    main()
