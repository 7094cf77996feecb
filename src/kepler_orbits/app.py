"""
Kepler Orbits - interactive two-body orbit viewer
=================================================

Sandbox mode shows one body on a preset conic, optionally with Kepler's
equal-time sectors. Solar mode shows the planets and flies a scripted
grand-tour probe past the outer planets.

Controls: SPACE pause, UP/DOWN time warp, LEFT/RIGHT orbit preset,
S sectors, M switch mode, L launch probe, R reset, mouse wheel zoom,
drag to pan, ESC quit.
"""
from __future__ import annotations

import logging
import sys

import pygame

from kepler_orbits.core.config import MISSION_CFG, ORBIT_CFG, RENDER_CFG, SIM_CFG
from kepler_orbits.core.logging_utils import RunLogger
from kepler_orbits.core.orbit import KeplerOrbit
from kepler_orbits.core.timekeeping import FrameTimer, TimeAccumulator
from kepler_orbits.core.trajectory import TrajectoryPathMapper
from kepler_orbits.data.presets import (
    BODIES,
    DEFAULT_ORBIT_TYPE_KEY,
    MISSION_PHASE_OFFSETS,
    ORBIT_TYPE_ORDER,
    ORBIT_TYPES,
    PLANET_KEYS,
    build_grand_tour_schedule,
    preset_shape,
)
from kepler_orbits.render import (
    Camera,
    draw_apsis_marker,
    draw_body,
    draw_focus_marker,
    draw_orbit_line,
    draw_probe,
    draw_sectors,
    draw_star,
    draw_velocity_arrow,
    downsample_points,
    hud_panel,
    load_font,
    velocity_arrow_end,
)

logger = logging.getLogger("kepler_orbits.app")

ORBIT_TYPE_LABELS = {orbit_type.key: orbit_type.label for orbit_type in ORBIT_TYPES}


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    pygame.display.set_caption("Kepler Orbits")
    screen = pygame.display.set_mode((RENDER_CFG.width, RENDER_CFG.height), pygame.RESIZABLE)
    font = load_font(["JetBrains Mono", "DejaVu Sans Mono", "Consolas"], 16)
    clock = pygame.time.Clock()
    frame_timer = FrameTimer()

    camera = Camera(
        screen.get_size(),
        RENDER_CFG.default_pixels_per_unit,
        min_scale=RENDER_CFG.min_pixels_per_unit,
        max_scale=RENDER_CFG.max_pixels_per_unit,
    )

    mode = "sandbox"
    speed = SIM_CFG.default_speed
    paused = False
    show_sectors = False
    orbit_index = ORBIT_TYPE_ORDER.index(DEFAULT_ORBIT_TYPE_KEY)

    sandbox_orbit = KeplerOrbit(preset_shape(DEFAULT_ORBIT_TYPE_KEY))
    sandbox_clock = TimeAccumulator()
    planets = {key: KeplerOrbit(BODIES[key].shape(ORBIT_CFG.default_mu)) for key in PLANET_KEYS}
    planet_clocks: dict[str, TimeAccumulator] = {}
    mapper = TrajectoryPathMapper(MISSION_CFG)
    probe_path: list[tuple[float, float]] = []

    run_logger: RunLogger | None = None
    frame_counter = 0
    prev_r: float | None = None
    prev_dr: float | None = None

    def close_logger() -> None:
        nonlocal run_logger
        if run_logger is not None:
            run_logger.close()
            run_logger = None

    def init_run_logging() -> None:
        nonlocal run_logger, frame_counter, prev_r, prev_dr
        close_logger()
        run_logger = RunLogger(SIM_CFG.runs_dir)
        shape = sandbox_orbit.shape
        run_logger.write_meta(
            {
                "orbit_type": ORBIT_TYPE_ORDER[orbit_index],
                "size": shape.size,
                "e": shape.e,
                "mu": shape.mu,
                "regime": shape.regime.value,
                "period": sandbox_orbit.period,
                "log_every_frames": SIM_CFG.log_every_frames,
            }
        )
        frame_counter = 0
        prev_r = None
        prev_dr = None

    def reset_planet_clocks() -> None:
        # Each planet starts at its mission phase so the flybys line up.
        planet_clocks.clear()
        for key, orbit in planets.items():
            phase = MISSION_PHASE_OFFSETS.get(key, 0.0)
            planet_clocks[key] = TimeAccumulator(value=orbit.time_for_phase(phase))

    def select_orbit(index: int) -> None:
        nonlocal orbit_index, sandbox_orbit
        orbit_index = index % len(ORBIT_TYPE_ORDER)
        sandbox_orbit = KeplerOrbit(preset_shape(ORBIT_TYPE_ORDER[orbit_index]))
        sandbox_clock.reset()
        logger.info("Selected %s orbit %s", sandbox_orbit.regime.value, ORBIT_TYPE_ORDER[orbit_index])
        camera.set_center((0.0, 0.0))
        apoapsis = sandbox_orbit.apsides()[1]
        camera.fit_extent(abs(apoapsis[0]) if apoapsis else 4.0 * sandbox_orbit.periapsis_distance)
        init_run_logging()

    def switch_mode() -> None:
        nonlocal mode
        mode = "solar" if mode == "sandbox" else "sandbox"
        camera.set_center((0.0, 0.0))
        if mode == "solar":
            reset_planet_clocks()
            camera.fit_extent(BODIES["neptune"].size * 1.2)
        else:
            mapper.disarm()
            select_orbit(orbit_index)

    def launch_probe() -> None:
        nonlocal probe_path
        if mode != "solar":
            return
        reset_planet_clocks()
        mapper.arm(build_grand_tour_schedule(ORBIT_CFG.default_mu, MISSION_CFG))
        mapper.paused = paused
        probe_path = mapper.path_points()
        if run_logger is not None:
            run_logger.log_event([0.0, "launch", 0.0, 0.0, {"encounters": len(mapper.schedule)}])

    def quit_app() -> None:
        close_logger()
        pygame.quit()
        sys.exit()

    def draw_orbit(orbit: KeplerOrbit, color) -> None:
        points = downsample_points(orbit.curve_points(), RENDER_CFG.max_rendered_orbit_points)
        draw_orbit_line(screen, color, camera.project(points), RENDER_CFG.orbit_line_width)

    def draw_hud(lines: list[str]) -> None:
        screen.blit(hud_panel(font, lines, render_cfg=RENDER_CFG), (16, 16))

    select_orbit(orbit_index)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_app()
            elif event.type == pygame.VIDEORESIZE:
                try:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                except pygame.error:
                    continue
                camera.update_size(screen.get_size())
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_app()
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                    mapper.paused = paused
                elif event.key == pygame.K_UP:
                    speed = min(speed * SIM_CFG.speed_step, SIM_CFG.max_speed)
                elif event.key == pygame.K_DOWN:
                    speed = max(speed / SIM_CFG.speed_step, SIM_CFG.min_speed)
                elif event.key == pygame.K_RIGHT and mode == "sandbox":
                    select_orbit(orbit_index + 1)
                elif event.key == pygame.K_LEFT and mode == "sandbox":
                    select_orbit(orbit_index - 1)
                elif event.key == pygame.K_s:
                    show_sectors = not show_sectors
                elif event.key == pygame.K_m:
                    switch_mode()
                elif event.key == pygame.K_l:
                    launch_probe()
                elif event.key == pygame.K_r:
                    if mode == "sandbox":
                        select_orbit(orbit_index)
                    else:
                        mapper.disarm()
                        reset_planet_clocks()
            elif event.type == pygame.MOUSEWHEEL:
                camera.zoom_at(
                    pygame.mouse.get_pos(),
                    RENDER_CFG.zoom_step if event.y > 0 else 1.0 / RENDER_CFG.zoom_step,
                )
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                camera.begin_pan(event.pos)
            elif event.type == pygame.MOUSEMOTION:
                camera.pan(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                camera.end_pan()

        delta = frame_timer.tick()
        step = 0.0 if paused else delta
        camera.update()
        screen.fill(RENDER_CFG.background_color)
        origin = camera.world_to_screen(0.0, 0.0)

        if mode == "sandbox":
            t = sandbox_clock.advance(step, speed)
            state = sandbox_orbit.state(t)

            if show_sectors:
                polygons = [camera.project(sector.boundary.tolist()) for sector in sandbox_orbit.sectors()]
                draw_sectors(screen, polygons, render_cfg=RENDER_CFG)
            draw_orbit(sandbox_orbit, RENDER_CFG.orbit_color)

            periapsis, apoapsis = sandbox_orbit.apsides()
            draw_apsis_marker(
                screen,
                camera.world_to_screen(*periapsis),
                color=RENDER_CFG.periapsis_color,
                radius=RENDER_CFG.marker_pixel_radius,
            )
            if apoapsis is not None:
                draw_apsis_marker(
                    screen,
                    camera.world_to_screen(*apoapsis),
                    color=RENDER_CFG.apoapsis_color,
                    radius=RENDER_CFG.marker_pixel_radius,
                )
            focal_points = sandbox_orbit.focal_points()
            if focal_points is not None:
                center, other_focus = focal_points
                for point, color in ((center, RENDER_CFG.center_color), (other_focus, RENDER_CFG.empty_focus_color)):
                    draw_focus_marker(
                        screen,
                        camera.world_to_screen(*point),
                        color=color,
                        radius=RENDER_CFG.marker_pixel_radius,
                    )

            draw_star(screen, origin, render_cfg=RENDER_CFG)
            body_pos = camera.world_to_screen(state.x, state.y)
            draw_body(screen, body_pos, RENDER_CFG.body_pixel_radius, color=RENDER_CFG.body_color)
            arrow_end = velocity_arrow_end(body_pos, (state.vx, state.vy), render_cfg=RENDER_CFG)
            draw_velocity_arrow(screen, body_pos, arrow_end, render_cfg=RENDER_CFG)

            if run_logger is not None and not paused and step > 0.0:
                frame_counter += 1
                if frame_counter % SIM_CFG.log_every_frames == 0:
                    run_logger.log_state(t, state, sandbox_orbit.shape.mu)
                if prev_r is not None:
                    dr = state.r - prev_r
                    if prev_dr is not None and prev_dr < 0.0 <= dr:
                        run_logger.log_event([t, "periapsis", state.r, state.speed, ""])
                    elif prev_dr is not None and prev_dr > 0.0 >= dr:
                        run_logger.log_event([t, "apoapsis", state.r, state.speed, ""])
                    if dr != 0.0:
                        prev_dr = dr
                prev_r = state.r

            shape = sandbox_orbit.shape
            hud = [
                f"Orbit: {ORBIT_TYPE_LABELS[ORBIT_TYPE_ORDER[orbit_index]]} ({shape.regime.value})",
                f"a/q: {shape.size:.2f}   e: {shape.e:.3f}",
                f"t: {t:,.2f}   warp: {speed:.2f}x{'  [paused]' if paused else ''}",
                f"r: {state.r:.3f}   v: {state.speed:.3f}",
                f"energy: {sandbox_orbit.energy():.3f}",
            ]
            if sandbox_orbit.period is not None:
                hud.append(f"period: {sandbox_orbit.period:.2f}")
        else:
            draw_star(screen, origin, render_cfg=RENDER_CFG)
            for key, orbit in planets.items():
                draw_orbit(orbit, RENDER_CFG.planet_orbit_color)
                t_planet = planet_clocks[key].advance(step, speed)
                state = orbit.state(t_planet)
                radius = max(2, int(BODIES[key].radius * 12))
                draw_body(screen, camera.world_to_screen(state.x, state.y), radius, color=BODIES[key].color)

            hud = [
                "Solar system",
                f"warp: {speed:.2f}x{'  [paused]' if paused else ''}",
            ]
            pose = mapper.advance(delta, speed)
            if pose is not None:
                if len(probe_path) >= 2:
                    draw_orbit_line(screen, RENDER_CFG.probe_path_color, camera.project(probe_path), 1)
                probe_pos = camera.world_to_screen(float(pose.position[0]), float(pose.position[1]))
                draw_probe(
                    screen,
                    probe_pos,
                    (float(pose.facing[0]), float(pose.facing[1])),
                    render_cfg=RENDER_CFG,
                )
                hud.append(f"mission t: {mapper.elapsed_time:.2f} yr")
            else:
                hud.append("press L to launch")

        draw_hud(hud)
        pygame.display.flip()
        clock.tick(RENDER_CFG.fps)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pygame.quit()
