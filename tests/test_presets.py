import numpy as np
import pytest

from kepler_orbits.core.model import Regime
from kepler_orbits.core.trajectory import TrajectoryPathMapper
from kepler_orbits.data.presets import (
    BODIES,
    BODY_DEFINITIONS,
    DEFAULT_ORBIT_TYPE_KEY,
    MISSION_ENCOUNTERS,
    MISSION_EXIT_TIME,
    ORBIT_TYPE_ORDER,
    PLANET_KEYS,
    build_grand_tour_schedule,
    preset_shape,
)


def test_every_body_preset_is_a_valid_shape():
    for body in BODY_DEFINITIONS:
        shape = body.shape()
        assert shape.size == body.size
        assert shape.e == body.e
    assert all(key in BODIES for key in PLANET_KEYS)


def test_preset_regimes():
    assert preset_shape("circular").regime is Regime.ELLIPTIC
    assert preset_shape("parabolic").regime is Regime.PARABOLIC
    assert preset_shape("hyperbolic").regime is Regime.HYPERBOLIC
    assert preset_shape("halley").regime is Regime.ELLIPTIC
    assert preset_shape("voyager_launch").regime is Regime.HYPERBOLIC
    assert DEFAULT_ORBIT_TYPE_KEY in ORBIT_TYPE_ORDER


def test_preset_shape_uses_given_mu():
    assert preset_shape("earth", 3.0).mu == 3.0


def test_unknown_preset_raises():
    with pytest.raises(KeyError, match="pluto"):
        preset_shape("pluto")


def test_grand_tour_schedule_layout():
    schedule = build_grand_tour_schedule()
    assert len(schedule) == len(MISSION_ENCOUNTERS) + 1
    expected_times = [t for _, t in MISSION_ENCOUNTERS] + [MISSION_EXIT_TIME]
    assert np.allclose(schedule.times, expected_times)
    assert [event.name for event in schedule][:2] == ["Earth", "Jupiter"]

    neptune = schedule.events[-2].anchor_point()
    exit_event = schedule.events[-1]
    assert exit_event.target_shape is None
    assert np.allclose(exit_event.anchor_point(), neptune * 1.5)


def test_grand_tour_meets_each_planet():
    schedule = build_grand_tour_schedule()
    mapper = TrajectoryPathMapper()
    mapper.arm(schedule)
    for event in schedule.events[:-1]:
        pose = mapper.pose_at(event.elapsed_time)
        assert np.allclose(pose.position, event.anchor_point(), atol=1e-9)
