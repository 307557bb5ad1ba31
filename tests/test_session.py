#!/usr/bin/env python3
"""
Tests for the session driver: lifecycle, tick bookkeeping, camera, HUD and log
"""

import pytest

from defiant.session import GameSession, InputState, MissionLog, generate_asteroids


class TestLifecycle:

    def test_title_screen_does_not_tick(self, idle_session):
        idle_session.player.vx = 3.0
        idle_session.tick(InputState(forward=True))
        assert idle_session.game_time == 0
        assert idle_session.player.x == -300.0

    def test_start_logs_launch(self, idle_session):
        idle_session.start()
        assert idle_session.started
        assert idle_session.log.lines == [
            "> Deep Space Nine in sight...",
            "> USS Defiant ready for launch.",
            "> Captain, the station is in sight.",
        ]

    def test_start_is_idempotent(self, idle_session):
        idle_session.start()
        idle_session.start()
        assert len(idle_session.log) == 3

    def test_scheduler_polled_on_title_screen(self, idle_session, clock):
        fired = []
        idle_session.scheduler.schedule(1.0, lambda: fired.append(True))
        clock.advance(1.0)
        idle_session.tick()
        assert fired == [True]

    def test_game_time_counts_ticks(self, session):
        for _ in range(5):
            session.tick()
        assert session.game_time == 5

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            GameSession(respawn_delay=-1)
        with pytest.raises(AssertionError):
            GameSession(world_size=0)


class TestWorld:

    def test_asteroid_belt(self):
        import random
        rocks = generate_asteroids(random.Random(3), 30)
        assert len(rocks) == 30
        for a in rocks:
            assert 1500 <= (a.x ** 2 + a.y ** 2) ** 0.5 <= 3500
            assert 8 <= a.size <= 28
            assert 6 <= len(a.vertices) <= 9
            assert all(0.7 * a.size <= r <= a.size for _, r in a.vertices)

    def test_asteroids_drift_and_spin(self, clock):
        s = GameSession(seed=11, clock=clock)
        s.start()
        before = [(a.x, a.y, a.rotation) for a in s.asteroids]
        s.tick()
        for a, (x, y, rot) in zip(s.asteroids, before):
            assert a.x == pytest.approx(x + a.vx)
            assert a.y == pytest.approx(y + a.vy)
            assert a.rotation == pytest.approx(rot + a.rot_speed)

    def test_landmarks_animate(self, session):
        session.tick()
        assert session.station.rotation == pytest.approx(0.0005)
        assert session.wormhole.pulse_phase == pytest.approx(0.02)
        assert len(session.station.docking_ports) == 6


class TestCameraAndShake:

    def test_camera_eases_toward_player(self, session):
        # Player at (-300, -300) projects to iso (0, -300)
        session.tick()
        assert session.camera.x == pytest.approx(0.0, abs=1e-9)
        assert session.camera.y == pytest.approx(-24.0)

    def test_camera_converges(self, session):
        for _ in range(300):
            session.tick()
        assert session.camera.y == pytest.approx(-300.0, abs=1e-6)

    def test_shake_decays(self, session):
        session.shake = 10.0
        session.tick()
        assert session.shake == pytest.approx(9.0)

    def test_small_shake_snaps_to_zero(self, session):
        session.shake = 0.105
        session.tick()
        assert session.shake == 0.0


class TestHud:

    def test_hud_snapshot(self, session):
        p = session.player
        p.hull = 72.6
        p.shields = 33.4
        p.torpedoes = 7
        session.score = 1234
        hud = session.hud()
        assert (hud.hull, hud.shields, hud.score, hud.torpedoes) == (73, 33, 1234, 7)
        assert hud.phaser_ready
        assert hud.phaser_status == "READY"
        assert hud.log[-1] == "> Captain, the station is in sight."

    @pytest.mark.parametrize(
        "hull,shields,expected",
        [
            (72.5, 98.5, (73, 99)),
            (0.5, 1.5, (1, 2)),
            (72.49, 98.51, (72, 99)),
        ],
        ids=["halves_round_up", "small_halves", "near_half"],
    )
    def test_hud_rounds_halves_up(self, session, hull, shields, expected):
        session.player.hull = hull
        session.player.shields = shields
        hud = session.hud()
        assert (hud.hull, hud.shields) == expected

    def test_hull_reported_never_negative(self, session):
        session.player.hull = -12.0
        assert session.hud().hull == 0

    def test_recharging_status(self, session):
        session.player.phaser_cooldown = 4
        assert session.hud().phaser_status == "RECHARGING"


class TestMissionLog:

    def test_keeps_last_six_lines(self):
        log = MissionLog()
        for i in range(10):
            log.add(f"line {i}")
        assert len(log) == 6
        assert log.lines == [f"line {i}" for i in range(4, 10)]

    def test_lines_are_a_copy(self):
        log = MissionLog()
        log.lines.append("tampered")
        assert len(log) == 1
