import math

import pytest

from kepler_orbits.core.config import RenderCfg
from kepler_orbits.render.camera import Camera
from kepler_orbits.render.draw import downsample_points, focus_marker_lines, velocity_arrow_end


def _camera():
    return Camera((800, 600), 40.0, min_scale=2.0, max_scale=400.0)


def test_origin_maps_to_screen_centre():
    assert _camera().world_to_screen(0.0, 0.0) == (400, 300)


def test_world_y_points_up():
    camera = _camera()
    sx, sy = camera.world_to_screen(1.0, 1.0)
    assert sx == 440
    assert sy == 260


def test_screen_to_world_inverts_projection():
    camera = _camera()
    camera.set_center((3.0, -2.0))
    x, y = camera.screen_to_world(*camera.world_to_screen(5.0, 1.0))
    assert math.isclose(x, 5.0, abs_tol=1.0 / 40.0)
    assert math.isclose(y, 1.0, abs_tol=1.0 / 40.0)


def test_zoom_is_clamped():
    camera = _camera()
    camera.set_zoom(1e6)
    assert camera.scale == 400.0
    camera.zoom_by_factor(1e-9)
    assert camera.scale_target == 2.0


def test_fit_extent_targets_visible_disc():
    camera = _camera()
    camera.fit_extent(10.0, margin=1.0)
    assert camera.scale_target == pytest.approx(30.0)
    camera.fit_extent(0.0)
    assert camera.scale_target == pytest.approx(30.0)


def test_pan_moves_centre_opposite_to_drag():
    camera = _camera()
    camera.begin_pan((400, 300))
    camera.pan((440, 300))
    camera.end_pan()
    assert camera.center[0] == pytest.approx(-1.0)
    camera.pan((0, 0))
    assert camera.center[0] == pytest.approx(-1.0)


def test_downsample_keeps_last_point():
    points = [(float(i), 0.0) for i in range(1001)]
    sampled = downsample_points(points, 100)
    assert len(sampled) <= 102
    assert sampled[0] == points[0]
    assert sampled[-1] == points[-1]
    assert downsample_points(points[:10], 100) == points[:10]


def test_velocity_arrow_length_is_capped():
    cfg = RenderCfg()
    end = velocity_arrow_end((100, 100), (1000.0, 0.0), render_cfg=cfg)
    assert end == (100 + cfg.velocity_arrow_max_pixels, 100)
    up = velocity_arrow_end((100, 100), (0.0, 1.0), render_cfg=cfg)
    assert up == (100, 100 - int(cfg.velocity_arrow_scale))


def test_zoom_at_keeps_point_under_cursor():
    camera = _camera()
    cursor = (500, 300)
    before = camera.screen_to_world(*cursor)
    camera.zoom_at(cursor, 2.0)
    assert camera.scale == 80.0
    assert camera.world_to_screen(*before) == cursor


def test_focus_marker_is_a_cross_through_the_point():
    strokes = focus_marker_lines((100, 50), 4)
    assert strokes == [((96, 46), (104, 54)), ((96, 54), (104, 46))]
