"""Preset orbits and the scripted outer-planet grand tour."""
from __future__ import annotations

from dataclasses import dataclass

from kepler_orbits.core.config import MISSION_CFG, ORBIT_CFG, MissionCfg
from kepler_orbits.core.model import OrbitShape
from kepler_orbits.core.trajectory import EncounterEvent, EncounterSchedule


@dataclass(frozen=True)
class BodyPreset:
    key: str
    name: str
    size: float
    e: float
    color: tuple[int, int, int]
    radius: float
    description: str = ""

    def shape(self, mu: float = ORBIT_CFG.default_mu) -> OrbitShape:
        return OrbitShape(self.size, self.e, mu)


BODY_DEFINITIONS: tuple[BodyPreset, ...] = (
    BodyPreset("mercury", "Mercury", 2.5, 0.206, (165, 165, 165), 0.1),
    BodyPreset("venus", "Venus", 3.5, 0.007, (227, 187, 118), 0.2),
    BodyPreset("earth", "Earth", 4.5, 0.017, (34, 136, 238), 0.2),
    BodyPreset("mars", "Mars", 6.0, 0.093, (221, 69, 36), 0.15),
    BodyPreset("jupiter", "Jupiter", 12.0, 0.049, (217, 174, 111), 0.5),
    BodyPreset("saturn", "Saturn", 18.0, 0.056, (234, 214, 184), 0.45),
    BodyPreset("uranus", "Uranus", 26.0, 0.046, (209, 231, 231), 0.4),
    BodyPreset("neptune", "Neptune", 35.0, 0.009, (91, 93, 223), 0.4),
    BodyPreset(
        "halley",
        "Halley's Comet",
        32.0,
        0.967,
        (255, 255, 255),
        0.15,
        description="Long, thin ellipse with perihelion just inside Earth's orbit.",
    ),
    BodyPreset(
        "voyager_launch",
        "Voyager 2 (Launch)",
        5.0,
        2.5,
        (255, 0, 255),
        0.1,
        description="Hyperbolic escape from the inner system.",
    ),
)

BODIES: dict[str, BodyPreset] = {body.key: body for body in BODY_DEFINITIONS}
PLANET_KEYS: list[str] = [
    "mercury", "venus", "earth", "mars", "jupiter", "saturn", "uranus", "neptune",
]


@dataclass(frozen=True)
class OrbitType:
    key: str
    label: str
    size: float
    e: float

    def shape(self, mu: float = ORBIT_CFG.default_mu) -> OrbitShape:
        return OrbitShape(self.size, self.e, mu)


ORBIT_TYPES: tuple[OrbitType, ...] = (
    OrbitType("circular", "Circular", 5.0, 0.0),
    OrbitType("elliptical", "Elliptical", 5.0, 0.5),
    OrbitType("high_e", "High Eccentricity", 5.0, 0.8),
    OrbitType("hohmann", "Hohmann Transfer", 5.0, 0.7),
    OrbitType("parabolic", "Parabolic (Escape)", 5.0, 1.0),
    OrbitType("hyperbolic", "Hyperbolic (Escape)", 5.0, 1.3),
)
ORBIT_TYPE_ORDER: list[str] = [orbit_type.key for orbit_type in ORBIT_TYPES]
DEFAULT_ORBIT_TYPE_KEY = "elliptical"


def preset_shape(key: str, mu: float = ORBIT_CFG.default_mu) -> OrbitShape:
    """Shape for a body preset or sandbox orbit type, looked up by key."""

    if key in BODIES:
        return BODIES[key].shape(mu)
    for orbit_type in ORBIT_TYPES:
        if orbit_type.key == key:
            return orbit_type.shape(mu)
    raise KeyError(f"Unknown orbit preset: {key!r}")


# Mean anomaly of each planet at launch, chosen so the planets line up
# with the probe at the encounter times below.
MISSION_PHASE_OFFSETS: dict[str, float] = {
    "earth": 5.71,
    "jupiter": 1.57,
    "saturn": 2.46,
    "uranus": 3.80,
    "neptune": 4.41,
}

# Encounter times in mission years.
MISSION_ENCOUNTERS: tuple[tuple[str, float], ...] = (
    ("earth", 0.0),
    ("jupiter", 1.7),
    ("saturn", 3.5),
    ("uranus", 8.0),
    ("neptune", 12.0),
)
MISSION_EXIT_TIME = 18.0


def build_grand_tour_schedule(
    mu: float = ORBIT_CFG.default_mu,
    cfg: MissionCfg = MISSION_CFG,
) -> EncounterSchedule:
    """Earth departure, four giant-planet flybys and a deep-space exit point.

    The exit anchor sits beyond Neptune's encounter position, scaled by
    ``cfg.exit_distance_factor``.
    """

    events = [
        EncounterEvent(
            elapsed_time=t,
            target_shape=BODIES[key].shape(mu),
            phase_offset=MISSION_PHASE_OFFSETS[key],
            name=BODIES[key].name,
        )
        for key, t in MISSION_ENCOUNTERS
    ]
    last = events[-1]
    exit_point = last.anchor_point() * cfg.exit_distance_factor
    events.append(
        EncounterEvent(
            elapsed_time=MISSION_EXIT_TIME,
            target_shape=None,
            name="Exit",
            fixed_position=(float(exit_point[0]), float(exit_point[1])),
        )
    )
    return EncounterSchedule(events)


__all__ = [
    "BODIES",
    "BODY_DEFINITIONS",
    "BodyPreset",
    "DEFAULT_ORBIT_TYPE_KEY",
    "MISSION_ENCOUNTERS",
    "MISSION_EXIT_TIME",
    "MISSION_PHASE_OFFSETS",
    "ORBIT_TYPES",
    "ORBIT_TYPE_ORDER",
    "OrbitType",
    "PLANET_KEYS",
    "build_grand_tour_schedule",
    "preset_shape",
]
