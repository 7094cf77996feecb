import math

from kepler_orbits.core.timekeeping import FrameTimer, TimeAccumulator


def test_accumulator_scales_by_speed():
    clock = TimeAccumulator()
    assert math.isclose(clock.advance(0.1, 3.0), 0.3)
    assert math.isclose(clock.advance(0.2), 0.5)


def test_accumulator_ignores_non_positive_steps():
    clock = TimeAccumulator(value=2.0)
    assert clock.advance(-1.0) == 2.0
    assert clock.advance(0.0) == 2.0
    assert clock.advance(1.0, 0.0) == 2.0
    assert clock.advance(1.0, -2.0) == 2.0


def test_accumulator_pause_and_reset():
    clock = TimeAccumulator()
    clock.advance(1.0)
    clock.paused = True
    assert clock.advance(5.0) == 1.0
    clock.paused = False
    assert clock.advance(1.0) == 2.0
    clock.reset()
    assert clock.value == 0.0
    clock.reset(4.0)
    assert clock.value == 4.0


def test_frame_timer_clamps_long_frames():
    timer = FrameTimer(max_delta=0.25)
    timer.last_time -= 10.0
    assert timer.tick() == 0.25
    assert 0.0 <= timer.tick() <= 0.25
