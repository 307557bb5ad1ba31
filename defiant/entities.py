"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

PLAYER_START_X = -300.0
PLAYER_START_Y = -300.0
PLAYER_START_ANGLE = 0.7853981633974483  # pi / 4
MAX_HULL = 100.0
MAX_SHIELDS = 100.0
MAX_TORPEDOES = 20

Color = Tuple[int, int, int]


class EnemyArchetype(Enum):
    """Enemy ship classes"""
    JEMHADAR = "jemhadar"
    CARDASSIAN = "cardassian"
    BREEN = "breen"
    BORG = "borg"

    @property
    def stats(self) -> "ArchetypeStats":
        return ARCHETYPE_STATS[self]


@dataclass(frozen=True)
class ArchetypeStats:
    """Static profile shared by every enemy of one class"""
    name: str
    color: str
    hull: float
    speed: float
    fire_rate: int  # ticks between shots
    score: int
    radius: float


ARCHETYPE_STATS: Dict[EnemyArchetype, ArchetypeStats] = {
    EnemyArchetype.JEMHADAR: ArchetypeStats("Jem'Hadar", "#9933ff", 40, 2.5, 120, 100, 14),
    EnemyArchetype.CARDASSIAN: ArchetypeStats("Cardassian", "#ccaa00", 50, 2.0, 150, 80, 16),
    EnemyArchetype.BREEN: ArchetypeStats("Breen", "#00cccc", 60, 1.8, 100, 120, 15),
    EnemyArchetype.BORG: ArchetypeStats("Borg", "#00ff00", 150, 1.5, 80, 300, 22),
}


class ProjectileKind(Enum):
    PHASER = "phaser"
    TORPEDO = "torpedo"


@dataclass
class TrailPoint:
    """Engine exhaust sample left behind the player ship"""
    x: float
    y: float
    life: int = 30
    max_life: int = 30


@dataclass
class PlayerShip:
    """The USS Defiant"""
    x: float = PLAYER_START_X
    y: float = PLAYER_START_Y
    vx: float = 0.0
    vy: float = 0.0
    angle: float = PLAYER_START_ANGLE
    speed: float = 0.0
    max_speed: float = 4.0
    turbo_speed: float = 7.0
    hull: float = MAX_HULL
    shields: float = MAX_SHIELDS
    shields_active: bool = False
    shield_cooldown: int = 0
    torpedoes: int = MAX_TORPEDOES
    phaser_cooldown: int = 0
    torpedo_cooldown: int = 0
    radius: float = 12.0
    destroyed: bool = False
    engine_trail: List[TrailPoint] = field(default_factory=list)


@dataclass
class Enemy:
    """Hostile ship that pursues and fires on the player"""
    archetype: EnemyArchetype
    x: float
    y: float
    angle: float
    hull: float
    fire_cooldown: int
    alive: bool = True

    @property
    def stats(self) -> ArchetypeStats:
        return ARCHETYPE_STATS[self.archetype]

    @property
    def radius(self) -> float:
        return self.stats.radius


@dataclass
class Projectile:
    """Phaser bolt or photon torpedo"""
    kind: ProjectileKind
    x: float
    y: float
    angle: float
    speed: float
    life: int
    damage: float
    friendly: bool = True
    alive: bool = True


@dataclass
class Explosion:
    x: float
    y: float
    life: int
    max_life: int
    size: float


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    max_life: float
    size: float
    color: Color


@dataclass
class Asteroid:
    """Drifting, indestructible obstacle; collision uses `size` as radius"""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    rotation: float
    rot_speed: float
    vertices: List[Tuple[float, float]] = field(default_factory=list)  # (angle, radius)


@dataclass
class Station:
    """Deep Space Nine"""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    docking_ports: List[float] = field(default_factory=list)  # port angles


@dataclass
class Wormhole:
    x: float = 800.0
    y: float = 800.0
    radius: float = 60.0
    pulse_phase: float = 0.0


@dataclass
class Camera:
    """Isometric-space camera centre"""
    x: float = 0.0
    y: float = 0.0
