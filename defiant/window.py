"""
Arcade front end: keyboard polling, one tick per frame, drawing and HUD
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import arcade

from .entities import Enemy, EnemyArchetype
from .session import GameSession, InputState
from .utils import clamp, world_to_screen

STAR_PARALLAX = 0.3
MINIMAP_SIZE = 180

# Keyboard layout (QWERTY and AZERTY both work)
LEFT_KEYS = {arcade.key.A, arcade.key.Q, arcade.key.LEFT}
RIGHT_KEYS = {arcade.key.D, arcade.key.RIGHT}
FORWARD_KEYS = {arcade.key.W, arcade.key.Z, arcade.key.UP}
REVERSE_KEYS = {arcade.key.S, arcade.key.DOWN}
TURBO_KEYS = {arcade.key.LSHIFT, arcade.key.RSHIFT}


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


@dataclass
class Star:
    x: float
    y: float
    brightness: float
    size: float
    twinkle_speed: float


@dataclass
class Nebula:
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int]
    alpha: float


def generate_scenery(world_size: float, star_count: int, nebula_count: int, rng: random.Random):
    stars = [
        Star(
            x=rng.uniform(-1, 1) * world_size,
            y=rng.uniform(-1, 1) * world_size,
            brightness=rng.uniform(0.3, 1.0),
            size=rng.uniform(0.5, 2.0),
            twinkle_speed=rng.uniform(0.005, 0.025),
        )
        for _ in range(star_count)
    ]
    palette = [(26, 0, 51), (0, 26, 51), (10, 26, 0), (51, 10, 0)]
    nebulae = [
        Nebula(
            x=rng.uniform(-0.75, 0.75) * world_size,
            y=rng.uniform(-0.75, 0.75) * world_size,
            radius=rng.uniform(150, 450),
            color=rng.choice(palette),
            alpha=rng.uniform(0.05, 0.2),
        )
        for _ in range(nebula_count)
    ]
    return stars, nebulae


def input_from_keys(pressed: set) -> InputState:
    return InputState(
        left=bool(pressed & LEFT_KEYS),
        right=bool(pressed & RIGHT_KEYS),
        forward=bool(pressed & FORWARD_KEYS),
        reverse=bool(pressed & REVERSE_KEYS),
        fire=arcade.key.SPACE in pressed,
        torpedo=arcade.key.F in pressed,
        shield=arcade.key.E in pressed,
        turbo=bool(pressed & TURBO_KEYS),
    )


class DefiantWindow(arcade.Window):
    """Arcade window that drives and draws a GameSession"""

    def __init__(
        self,
        session: GameSession,
        width: int = 1280,
        height: int = 720,
        title: str = "Star Trek: Deep Space Nine - USS Defiant",
        update_rate: float = 1 / 60,
        star_count: int = 600,
        nebula_count: int = 8,
        drive_session: bool = True,
    ):
        super().__init__(width, height, title, update_rate=update_rate)
        self.session = session
        self.drive_session = drive_session
        self.pressed: set = set()
        self._fx_rng = random.Random()
        self.stars, self.nebulae = generate_scenery(
            session.world_size, star_count, nebula_count, random.Random(0)
        )
        self._shake_x = 0.0
        self._shake_y = 0.0
        arcade.set_background_color((0, 0, 8))

    # ----------------------------
    # Input / update
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        self.pressed.add(symbol)
        if symbol == arcade.key.ENTER:
            self.session.start()

    def on_key_release(self, symbol: int, modifiers: int):
        self.pressed.discard(symbol)

    def on_update(self, delta_time: float):
        if not self.drive_session:
            return
        self.session.tick(input_from_keys(self.pressed))

    # ----------------------------
    # Drawing
    # ----------------------------

    def project(self, wx: float, wy: float) -> Tuple[float, float]:
        cam = self.session.camera
        sx, sy = world_to_screen(wx, wy, cam.x, cam.y, self.width, self.height)
        return sx + self._shake_x, self.height - (sy + self._shake_y)

    def _on_screen(self, sx: float, sy: float, margin: float = 50) -> bool:
        return -margin <= sx <= self.width + margin and -margin <= sy <= self.height + margin

    def on_draw(self):
        self.clear()
        s = self.session
        if s.shake > 0:
            self._shake_x = (self._fx_rng.random() - 0.5) * s.shake
            self._shake_y = (self._fx_rng.random() - 0.5) * s.shake
        else:
            self._shake_x = self._shake_y = 0.0

        self.draw_stars()
        self.draw_nebulae()
        self.draw_engine_trail()
        self.draw_wormhole()
        self.draw_asteroids()
        self.draw_station()
        for e in s.enemies:
            self.draw_enemy(e)
        if not s.player.destroyed:
            self.draw_player()
        self.draw_projectiles()
        self.draw_effects()

        self.draw_hud()
        self.draw_minimap()
        if not s.started:
            self.draw_title()

    def draw_stars(self):
        cam = self.session.camera
        t = self.session.game_time
        for star in self.stars:
            sx = (star.x - cam.x) * STAR_PARALLAX + self.width / 2
            sy = (star.y - cam.y) * STAR_PARALLAX + self.height / 2
            if not self._on_screen(sx, sy, 10):
                continue
            alpha = star.brightness * (math.sin(t * star.twinkle_speed) * 0.3 + 0.7)
            arcade.draw_circle_filled(sx, self.height - sy, star.size, (255, 255, 255, int(255 * alpha)))

    def draw_nebulae(self):
        for n in self.nebulae:
            sx, sy = self.project(n.x, n.y)
            if not self._on_screen(sx, sy, n.radius):
                continue
            arcade.draw_circle_filled(sx, sy, n.radius, (*n.color, int(255 * n.alpha)))

    def draw_engine_trail(self):
        for tp in self.session.player.engine_trail:
            frac = tp.life / tp.max_life
            sx, sy = self.project(tp.x, tp.y)
            arcade.draw_circle_filled(sx, sy, max(0.5, 3 * frac), (100, 150, 255, int(255 * 0.4 * frac)))

    def draw_wormhole(self):
        w = self.session.wormhole
        sx, sy = self.project(w.x, w.y)
        if not self._on_screen(sx, sy, w.radius * 2):
            return
        for ring in range(5):
            r = w.radius - ring * 8 + math.sin(w.pulse_phase + ring) * 5
            if r <= 0:
                continue
            tilt = math.degrees(math.sin(w.pulse_phase * 0.5) * 0.2)
            arcade.draw_ellipse_outline(sx, sy, r * 2, r, (80 + ring * 30, 140 + ring * 20, 255, 160), 2, tilt)
        arcade.draw_circle_filled(sx, sy, 10, (200, 220, 255, int(255 * (0.4 + math.sin(w.pulse_phase) * 0.2))))

    def draw_asteroids(self):
        for a in self.session.asteroids:
            sx, sy = self.project(a.x, a.y)
            if not self._on_screen(sx, sy, 30):
                continue
            points = []
            for ang, r in a.vertices:
                vx = math.cos(ang) * r
                vy = math.sin(ang) * r * 0.6  # iso squash
                rx = vx * math.cos(a.rotation) - vy * math.sin(a.rotation)
                ry = vx * math.sin(a.rotation) + vy * math.cos(a.rotation)
                points.append((sx + rx, sy - ry))
            arcade.draw_polygon_filled(points, (85, 68, 51))
            arcade.draw_polygon_outline(points, (119, 102, 85), 1)

    def draw_station(self):
        st = self.session.station
        sx, sy = self.project(st.x, st.y)
        if not self._on_screen(sx, sy, 150):
            return
        arcade.draw_ellipse_outline(sx, sy, 200, 100, (136, 102, 68), 4)
        arcade.draw_ellipse_outline(sx, sy, 120, 60, (153, 119, 85), 3)
        arcade.draw_ellipse_filled(sx, sy, 44, 22, (170, 136, 102))
        for port in st.docking_ports:
            ang = port + st.rotation
            px = sx + math.cos(ang) * 100
            py = sy - math.sin(ang) * 50
            arcade.draw_line(sx, sy, px, py, (119, 85, 51), 2)
            arcade.draw_circle_filled(px, py, 3, (255, 136, 0))

    def _ship_polygon(self, sx: float, sy: float, angle: float, size: float) -> List[Tuple[float, float]]:
        outline = [(size, 0.0), (-size * 0.8, -size * 0.6), (-size * 0.4, 0.0), (-size * 0.8, size * 0.6)]
        ca, sa = math.cos(angle), math.sin(angle)
        return [(sx + x * ca - y * sa, sy - (x * sa + y * ca)) for x, y in outline]

    def draw_enemy(self, e: Enemy):
        sx, sy = self.project(e.x, e.y)
        if not self._on_screen(sx, sy):
            return
        stats = e.stats
        color = hex_to_rgb(stats.color)
        if e.archetype is EnemyArchetype.BORG:
            half = stats.radius * 0.8
            arcade.draw_lrbt_rectangle_filled(sx - half, sx + half, sy - half, sy + half, (20, 40, 20))
            arcade.draw_lrbt_rectangle_outline(sx - half, sx + half, sy - half, sy + half, color, 2)
        else:
            arcade.draw_polygon_filled(self._ship_polygon(sx, sy, e.angle - math.pi / 4, stats.radius), color)
        if e.hull < stats.hull:
            w = stats.radius * 2
            frac = clamp(e.hull / stats.hull, 0, 1)
            top = sy + stats.radius + 8
            arcade.draw_lrbt_rectangle_filled(sx - w / 2, sx + w / 2, top - 3, top, (60, 0, 0))
            arcade.draw_lrbt_rectangle_filled(sx - w / 2, sx - w / 2 + w * frac, top - 3, top, (255, 60, 60))

    def draw_player(self):
        p = self.session.player
        sx, sy = self.project(p.x, p.y)
        if p.shields_active and p.shields > 0:
            alpha = 0.15 + math.sin(self.session.game_time * 0.1) * 0.05
            arcade.draw_circle_filled(sx, sy, 30, (100, 150, 255, int(255 * alpha)))
        arcade.draw_polygon_filled(self._ship_polygon(sx, sy, p.angle - math.pi / 4, 16), (150, 160, 175))
        arcade.draw_circle_filled(sx, sy, 3, (100, 180, 255))

    def draw_projectiles(self):
        s = self.session
        for b in s.phasers:
            x0, y0 = self.project(b.x, b.y)
            x1, y1 = self.project(b.x - math.cos(b.angle) * 20, b.y - math.sin(b.angle) * 20)
            glow, core = ((255, 200, 100, 76), (255, 150, 50, 230)) if b.friendly else ((255, 100, 100, 76), (255, 50, 50, 204))
            arcade.draw_line(x0, y0, x1, y1, glow, 5)
            arcade.draw_line(x0, y0, x1, y1, core, 2)
        for t in s.torpedoes:
            sx, sy = self.project(t.x, t.y)
            arcade.draw_circle_filled(sx, sy, 10, (50, 100, 255, 100))
            arcade.draw_circle_filled(sx, sy, 3, (170, 221, 255))

    def draw_effects(self):
        s = self.session
        for ex in s.explosions:
            sx, sy = self.project(ex.x, ex.y)
            progress = 1 - ex.life / ex.max_life
            radius = ex.size * (0.5 + progress)
            alpha = 1 - progress
            if progress < 0.3:
                arcade.draw_circle_filled(sx, sy, radius * 2, (255, 255, 200, int(127 * alpha)))
            arcade.draw_circle_filled(sx, sy, radius, (255, 140, 30, int(255 * alpha)))
        for pt in s.particles:
            sx, sy = self.project(pt.x, pt.y)
            frac = clamp(pt.life / pt.max_life, 0, 1)
            arcade.draw_circle_filled(sx, sy, max(0.5, pt.size * frac), (*pt.color, int(255 * frac)))

    def draw_hud(self):
        hud = self.session.hud()
        color = (255, 153, 0)
        lines = [
            f"HULL {hud.hull}%",
            f"SHIELDS {hud.shields}%" + (" [ON]" if self.session.player.shields_active else ""),
            f"PHASERS {hud.phaser_status}",
            f"TORPEDOES {hud.torpedoes}",
            f"SCORE {hud.score}",
        ]
        if hud.mission_name:
            lines.append(f"MISSION {hud.mission_name}")
        for i, text in enumerate(lines):
            arcade.draw_text(text, 16, self.height - 28 - i * 20, color, 13)
        for i, text in enumerate(reversed(hud.log)):
            arcade.draw_text(text, 16, 16 + i * 18, (200, 200, 255), 11)

    def draw_minimap(self):
        s = self.session
        size = MINIMAP_SIZE
        left = self.width - size - 12
        bottom = self.height - size - 12
        cx, cy = left + size / 2, bottom + size / 2
        scale = size / (s.world_size * 1.5)
        arcade.draw_lrbt_rectangle_filled(left, left + size, bottom, bottom + size, (0, 0, 0, 204))

        def dot(wx: float, wy: float) -> Tuple[float, float]:
            return cx + wx * scale, cy - wy * scale

        arcade.draw_circle_filled(*dot(s.station.x, s.station.y), 4, (255, 136, 0))
        arcade.draw_circle_filled(*dot(s.wormhole.x, s.wormhole.y), 3, (102, 153, 255))
        for e in s.enemies:
            ex, ey = dot(e.x, e.y)
            arcade.draw_lrbt_rectangle_filled(ex - 1, ex + 2, ey - 1, ey + 2, hex_to_rgb(e.stats.color))
        px, py = dot(s.player.x, s.player.y)
        arcade.draw_circle_filled(px, py, 3, (0, 255, 0))
        box_w = self.width / 3 * scale
        box_h = self.height / 3 * scale
        arcade.draw_lrbt_rectangle_outline(px - box_w / 2, px + box_w / 2, py - box_h / 2, py + box_h / 2, (255, 255, 255, 76), 1)
        arcade.draw_lrbt_rectangle_outline(left, left + size, bottom, bottom + size, (255, 102, 0), 1)

    def draw_title(self):
        arcade.draw_text(
            "USS DEFIANT", self.width / 2, self.height / 2 + 30, (255, 153, 0), 36, anchor_x="center"
        )
        arcade.draw_text(
            "Press ENTER to launch", self.width / 2, self.height / 2 - 20, (200, 200, 255), 16, anchor_x="center"
        )


def run_window(session: Optional[GameSession] = None, **window_kwargs):
    """Open the game window and block until it is closed"""
    window = DefiantWindow(session or GameSession(), **window_kwargs)
    arcade.run()
    return window
