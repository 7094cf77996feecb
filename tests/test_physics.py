import math

import numpy as np
import pytest

from kepler_orbits.core.model import OrbitShape, Regime
from kepler_orbits.core.orbit import KeplerOrbit
from kepler_orbits.core.physics import (
    apsides,
    conic_center,
    eccentricity,
    empty_focus,
    mean_motion,
    orbit_state,
    orbital_period,
    periapsis_distance,
    specific_angular_momentum,
    specific_energy,
    speed_radius_curve,
    vis_viva_speed,
)

SHAPES = [
    OrbitShape(5.0, 0.0),
    OrbitShape(5.0, 0.5),
    OrbitShape(5.0, 0.9),
    OrbitShape(2.0, 1.0),
    OrbitShape(5.0, 1.3),
    OrbitShape(3.0, 2.5, 4.0),
]
TIMES = np.linspace(-3.0, 3.0, 13)


def _expected_energy(shape):
    if shape.regime is Regime.PARABOLIC:
        return 0.0
    if shape.regime is Regime.ELLIPTIC:
        return -shape.mu / (2.0 * shape.size)
    return shape.mu / (2.0 * shape.size)


def _expected_momentum(shape):
    if shape.regime is Regime.PARABOLIC:
        return math.sqrt(2.0 * shape.mu * shape.size)
    return math.sqrt(shape.mu * shape.size * abs(1.0 - shape.e**2))


def test_circular_orbit_keeps_radius_and_speed():
    shape = OrbitShape(5.0, 0.0, 10.0)
    for t in [0.0, 0.7, 3.3, 12.0, -4.0]:
        state = orbit_state(shape, t)
        assert math.isclose(state.r, 5.0, rel_tol=1e-12)
        assert math.isclose(math.hypot(state.x, state.y), 5.0, rel_tol=1e-12)
        assert math.isclose(state.speed, math.sqrt(2.0), rel_tol=1e-12)


def test_elliptic_state_at_periapsis():
    state = orbit_state(OrbitShape(5.0, 0.5, 10.0), 0.0)
    assert math.isclose(state.r, 2.5)
    assert math.isclose(state.x, 2.5)
    assert abs(state.y) < 1e-12
    assert abs(state.vx) < 1e-12
    assert state.vy > 0.0
    assert math.isclose(state.vy, math.sqrt(10.0 * 1.5 / 2.5))


def test_elliptic_apoapsis_at_half_period():
    shape = OrbitShape(5.0, 0.5, 10.0)
    state = orbit_state(shape, orbital_period(shape) / 2.0)
    assert math.isclose(state.r, 7.5, rel_tol=1e-9)
    assert math.isclose(state.x, -7.5, rel_tol=1e-9)


@pytest.mark.parametrize("e", [0.1, 0.5, 0.7])
@pytest.mark.parametrize("t", [0.3, 2.0, 7.5])
def test_elliptic_state_is_periodic(e, t):
    shape = OrbitShape(5.0, e, 10.0)
    period = orbital_period(shape)
    first = orbit_state(shape, t)
    later = orbit_state(shape, t + period)
    assert np.allclose(first.position, later.position, atol=1e-6)
    assert np.allclose(first.velocity, later.velocity, atol=1e-6)


@pytest.mark.parametrize("shape", SHAPES)
def test_energy_is_conserved(shape):
    expected = _expected_energy(shape)
    tol = 1e-9 * max(1.0, abs(expected))
    for t in TIMES:
        state = orbit_state(shape, float(t))
        assert abs(specific_energy(state, shape.mu) - expected) < tol


@pytest.mark.parametrize("shape", SHAPES)
def test_angular_momentum_is_conserved(shape):
    expected = _expected_momentum(shape)
    for t in TIMES:
        state = orbit_state(shape, float(t))
        assert math.isclose(specific_angular_momentum(state), expected, rel_tol=1e-9)


@pytest.mark.parametrize("shape", SHAPES)
def test_recovered_eccentricity_matches_shape(shape):
    state = orbit_state(shape, 0.8)
    assert math.isclose(eccentricity(state, shape.mu), shape.e, abs_tol=1e-9)


@pytest.mark.parametrize("shape", SHAPES)
def test_negative_time_mirrors_across_apsidal_line(shape):
    for t in [0.4, 1.7]:
        ahead = orbit_state(shape, t)
        behind = orbit_state(shape, -t)
        assert math.isclose(behind.x, ahead.x, rel_tol=1e-9, abs_tol=1e-9)
        assert math.isclose(behind.y, -ahead.y, rel_tol=1e-9, abs_tol=1e-9)
        assert math.isclose(behind.vx, -ahead.vx, rel_tol=1e-9, abs_tol=1e-9)
        assert math.isclose(behind.vy, ahead.vy, rel_tol=1e-9, abs_tol=1e-9)


@pytest.mark.parametrize("shape", SHAPES)
def test_state_radius_matches_position(shape):
    for t in TIMES:
        state = orbit_state(shape, float(t))
        assert math.isclose(state.r, math.hypot(state.x, state.y), rel_tol=1e-9)
        assert state.r >= periapsis_distance(shape) * (1.0 - 1e-12)


def _boundary_error(e, t, q=1.0, mu=10.0):
    parabola = orbit_state(OrbitShape(q, 1.0, mu), t)
    near = orbit_state(OrbitShape(q / abs(1.0 - e), e, mu), t)
    return float(np.linalg.norm(near.position - parabola.position)), parabola


@pytest.mark.parametrize("t", [0.0, 0.25, 0.5, 1.0])
def test_states_approach_parabola_at_band_edges(t):
    for e in [0.99, 1.01]:
        error, parabola = _boundary_error(e, t)
        assert error <= 0.05 * parabola.r


def test_boundary_error_shrinks_towards_parabola():
    far, _ = _boundary_error(0.98, 1.0)
    near, _ = _boundary_error(0.99, 1.0)
    assert near < far
    far, _ = _boundary_error(1.02, 1.0)
    near, _ = _boundary_error(1.01, 1.0)
    assert near < far


def test_periapsis_speed_matches_vis_viva():
    for shape in SHAPES:
        state = orbit_state(shape, 0.0)
        assert math.isclose(state.speed, vis_viva_speed(shape, state.r), rel_tol=1e-9)


def test_mean_motion_and_period():
    shape = OrbitShape(5.0, 0.5, 10.0)
    assert math.isclose(mean_motion(shape), math.sqrt(10.0 / 125.0))
    assert math.isclose(orbital_period(shape), 2.0 * math.pi / mean_motion(shape))
    assert orbital_period(OrbitShape(5.0, 1.0)) is None
    assert orbital_period(OrbitShape(5.0, 1.3)) is None
    assert math.isclose(mean_motion(OrbitShape(2.0, 1.0, 10.0)), math.sqrt(10.0 / 64.0))


def test_periapsis_distance_per_regime():
    assert math.isclose(periapsis_distance(OrbitShape(5.0, 0.5)), 2.5)
    assert math.isclose(periapsis_distance(OrbitShape(5.0, 1.0)), 5.0)
    assert math.isclose(periapsis_distance(OrbitShape(5.0, 1.3)), 1.5)


def test_apsides_and_centres():
    ellipse = OrbitShape(5.0, 0.5)
    periapsis, apoapsis = apsides(ellipse)
    assert periapsis == (2.5, 0.0)
    assert apoapsis == (-7.5, 0.0)
    assert conic_center(ellipse) == (-2.5, 0.0)
    assert empty_focus(ellipse) == (-5.0, 0.0)

    hyperbola = OrbitShape(5.0, 1.3)
    periapsis, apoapsis = apsides(hyperbola)
    assert math.isclose(periapsis[0], 1.5)
    assert apoapsis is None
    assert math.isclose(conic_center(hyperbola)[0], 6.5)
    assert math.isclose(empty_focus(hyperbola)[0], 13.0)

    parabola = OrbitShape(5.0, 1.0)
    assert apsides(parabola)[1] is None
    assert conic_center(parabola) is None
    assert empty_focus(parabola) is None


def test_speed_radius_curve_spans_apsides():
    shape = OrbitShape(5.0, 0.5, 10.0)
    curve = speed_radius_curve(shape, steps=50)
    assert len(curve) == 51
    assert math.isclose(curve[0][0], 2.5)
    assert math.isclose(curve[-1][0], 7.5)
    assert curve[0][1] > curve[-1][1]
    assert speed_radius_curve(OrbitShape(5.0, 1.3)) == []


def test_kepler_orbit_caches_geometry():
    orbit = KeplerOrbit(OrbitShape(5.0, 0.5, 10.0))
    assert orbit.regime is Regime.ELLIPTIC
    assert math.isclose(orbit.periapsis_distance, 2.5)
    assert math.isclose(orbit.energy(), -1.0)
    assert orbit.curve_points() is orbit.curve_points()
    assert len(orbit.curve_points(40)) == 41
    assert orbit.sectors() is orbit.sectors()
    assert len(orbit.sectors(6)) == 6


def test_kepler_orbit_time_for_phase():
    orbit = KeplerOrbit(OrbitShape(5.0, 0.5, 10.0))
    t = orbit.time_for_phase(math.pi)
    assert math.isclose(t, orbit.period / 2.0)
    assert math.isclose(orbit.state(t).r, 7.5, rel_tol=1e-9)


def test_kepler_orbit_open_regimes():
    parabola = KeplerOrbit(OrbitShape(2.0, 1.0))
    assert parabola.period is None
    assert parabola.energy() == 0.0
    assert parabola.sectors() == []
    hyperbola = KeplerOrbit(OrbitShape(5.0, 1.3))
    assert math.isclose(hyperbola.energy(), 1.0)


@pytest.mark.parametrize(
    "shape",
    [OrbitShape(5.0, 1.3, 10.0), OrbitShape(5.0, 1.01, 10.0), OrbitShape(5.0, 1.006, 10.0)],
)
@pytest.mark.parametrize("t", [20.0, 30.0, 800.0, -800.0, 1e5])
def test_hyperbolic_state_far_from_periapsis(shape, t):
    state = orbit_state(shape, t)
    assert all(math.isfinite(value) for value in (state.x, state.y, state.vx, state.vy, state.r))
    assert math.isclose(specific_energy(state, shape.mu), shape.mu / (2.0 * shape.size), rel_tol=1e-8)

    e = shape.e
    H = math.asinh(state.y / (shape.size * math.sqrt(e * e - 1.0)))
    assert math.isclose(e * math.sinh(H) - H, mean_motion(shape) * t, rel_tol=1e-8)


def test_vis_viva_speed_accepts_arrays():
    shape = OrbitShape(5.0, 0.5, 10.0)
    r = np.array([2.5, 5.0, 7.5])
    speeds = vis_viva_speed(shape, r)
    assert speeds.shape == (3,)
    assert math.isclose(speeds[1], math.sqrt(10.0 / 5.0))
    assert math.isclose(vis_viva_speed(OrbitShape(2.0, 1.0, 10.0), 4.0), math.sqrt(5.0))


def test_speed_radius_curve_follows_vis_viva():
    shape = OrbitShape(5.0, 0.5, 10.0)
    for r, v in speed_radius_curve(shape, steps=20):
        assert math.isclose(v, vis_viva_speed(shape, r), rel_tol=1e-12)


def test_kepler_orbit_focal_points():
    center, other_focus = KeplerOrbit(OrbitShape(5.0, 0.5)).focal_points()
    assert center == (-2.5, 0.0)
    assert other_focus == (-5.0, 0.0)
    center, other_focus = KeplerOrbit(OrbitShape(5.0, 1.3)).focal_points()
    assert math.isclose(center[0], 6.5)
    assert math.isclose(other_focus[0], 13.0)
    assert KeplerOrbit(OrbitShape(2.0, 1.0)).focal_points() is None
