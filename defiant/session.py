"""
GameSession - all mutable state of one play session and the per-tick driver
---------------------------------------------------------------------------
- One tick of game state per rendered frame, in a fixed order:
  player -> enemies -> projectiles/effects -> asteroid drift -> missions
- Followed by landmark animation, screen-shake decay and camera follow
- The respawn delay runs on a separate real-time scheduler that is polled at
  the start of every tick (and by the frame loop while ticks are not running)

The session is the render snapshot: a drawing layer reads its entity lists,
landmarks and camera after `tick()` returns.
"""

from __future__ import annotations

import logging
import math
import random
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, List, Optional, Tuple

from .clock import ScheduledTask, Scheduler
from .combat import update_projectiles
from .enemies import update_enemies
from .entities import (
    Asteroid,
    Camera,
    Enemy,
    Explosion,
    Particle,
    PlayerShip,
    Projectile,
    Station,
    Wormhole,
)
from .missions import MISSIONS, WAVE_INTERVAL, MissionDefinition, MissionDirector
from .player import update_player
from .utils import to_iso

LOGGER = logging.getLogger(__name__)

WORLD_SIZE = 6000
ASTEROID_COUNT = 30
RESPAWN_DELAY = 3.0  # seconds of real time
LOG_CAPACITY = 6

CAMERA_EASE = 0.08
SHAKE_DECAY = 0.9
SHAKE_FLOOR = 0.1
STATION_SPIN = 0.0005
WORMHOLE_PULSE = 0.02


@dataclass
class InputState:
    """Polled control intent for one tick; filled by whatever reads devices"""
    left: bool = False
    right: bool = False
    forward: bool = False
    reverse: bool = False
    fire: bool = False
    torpedo: bool = False
    shield: bool = False
    turbo: bool = False
    joystick_active: bool = False
    joystick_x: float = 0.0  # -1 to 1
    joystick_y: float = 0.0  # -1 to 1


class MissionLog:
    """Short rolling narration shown on screen; oldest lines fall off"""

    def __init__(self, capacity: int = LOG_CAPACITY, initial: Tuple[str, ...] = ("> Deep Space Nine in sight...",)):
        self._lines: Deque[str] = deque(initial, maxlen=capacity)

    def add(self, text: str):
        self._lines.append(text)
        LOGGER.info(text)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


@dataclass(frozen=True)
class HudState:
    hull: int
    shields: int
    score: int
    phaser_ready: bool
    torpedoes: int
    mission_name: str
    log: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def phaser_status(self) -> str:
        return "READY" if self.phaser_ready else "RECHARGING"


def generate_asteroids(rng: random.Random, count: int = ASTEROID_COUNT) -> List[Asteroid]:
    """Scatter a belt of drifting rocks 1500-3500 units from the station"""
    asteroids = []
    for _ in range(count):
        angle = rng.uniform(0.0, math.pi * 2)
        dist = 1500 + rng.uniform(0.0, 2000.0)
        size = rng.uniform(8.0, 28.0)
        n_verts = 6 + rng.randrange(4)
        vertices = [
            ((i / n_verts) * math.pi * 2, size * (0.7 + rng.uniform(0.0, 0.3)))
            for i in range(n_verts)
        ]
        asteroids.append(Asteroid(
            x=math.cos(angle) * dist,
            y=math.sin(angle) * dist,
            vx=rng.uniform(-0.15, 0.15),
            vy=rng.uniform(-0.15, 0.15),
            size=size,
            rotation=rng.uniform(0.0, math.pi * 2),
            rot_speed=rng.uniform(-0.005, 0.005),
            vertices=vertices,
        ))
    return asteroids


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def update_asteroids(session: "GameSession"):
    for a in session.asteroids:
        a.x += a.vx
        a.y += a.vy
        a.rotation += a.rot_speed


class GameSession:
    """Owns every entity store and counter of one game"""

    def __init__(
        self,
        seed: Optional[int] = None,
        world_size: float = WORLD_SIZE,
        asteroid_count: int = ASTEROID_COUNT,
        respawn_delay: float = RESPAWN_DELAY,
        wave_interval: int = WAVE_INTERVAL,
        missions: Tuple[MissionDefinition, ...] = MISSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        assert world_size > 0, "world_size must be positive"
        if respawn_delay < 0:
            raise ValueError(f"respawn_delay must be non-negative, got {respawn_delay}")

        self.world_size = world_size
        self.respawn_delay = respawn_delay
        self.rng = random.Random(seed)
        self.scheduler = Scheduler(clock=clock)
        self.respawn_task: Optional[ScheduledTask] = None

        self.started = False
        self.game_time = 0
        self.score = 0
        self.shake = 0.0
        self.log = MissionLog()
        self.director = MissionDirector(missions, wave_interval)
        self.camera = Camera()

        self.player = PlayerShip()
        self.enemies: List[Enemy] = []
        self.phasers: List[Projectile] = []
        self.torpedoes: List[Projectile] = []
        self.explosions: List[Explosion] = []
        self.particles: List[Particle] = []
        self.asteroids = generate_asteroids(self.rng, asteroid_count)
        self.station = Station(docking_ports=[(i / 6) * math.pi * 2 for i in range(6)])
        self.wormhole = Wormhole()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self):
        """Leave the title screen; ticks do nothing before this"""
        if self.started:
            return
        self.started = True
        self.log.add("> USS Defiant ready for launch.")
        self.log.add("> Captain, the station is in sight.")

    def tick(self, inp: Optional[InputState] = None):
        self.scheduler.run_due()
        if not self.started:
            return
        inp = inp or InputState()
        self.game_time += 1

        update_player(self, inp)
        update_enemies(self)
        update_projectiles(self)
        update_asteroids(self)
        self.director.update(self)

        self.station.rotation += STATION_SPIN
        self.wormhole.pulse_phase += WORMHOLE_PULSE

        self.shake *= SHAKE_DECAY
        if self.shake < SHAKE_FLOOR:
            self.shake = 0.0

        ix, iy = to_iso(self.player.x, self.player.y)
        self.camera.x += (ix - self.camera.x) * CAMERA_EASE
        self.camera.y += (iy - self.camera.y) * CAMERA_EASE

    # ----------------------------
    # Snapshots
    # ----------------------------

    @property
    def mission_name(self) -> str:
        current = self.director.current
        return current.name if current is not None else ""

    def hud(self) -> HudState:
        p = self.player
        return HudState(
            hull=max(0, _round_half_up(p.hull)),
            shields=_round_half_up(p.shields),
            score=self.score,
            phaser_ready=p.phaser_cooldown <= 0,
            torpedoes=p.torpedoes,
            mission_name=self.mission_name,
            log=tuple(self.log.lines),
        )
