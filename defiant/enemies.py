"""
Enemy pursuit and fire control
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .entities import Enemy, EnemyArchetype, Projectile, ProjectileKind
from .utils import turn_toward

if TYPE_CHECKING:
    from .session import GameSession

ENEMY_TURN_SPEED = 0.03
CHASE_DISTANCE = 100.0  # close in beyond this
BACKOFF_DISTANCE = 60.0  # give ground inside this
ENGAGE_RANGE = 500.0

BOLT_SPEED = 8.0
BOLT_LIFE = 50
BOLT_DAMAGE = 5.0


def make_enemy(archetype: EnemyArchetype, x: float, y: float, angle: float) -> Enemy:
    stats = archetype.stats
    return Enemy(
        archetype=archetype,
        x=x,
        y=y,
        angle=angle,
        hull=stats.hull,
        fire_cooldown=stats.fire_rate,
    )


def update_enemies(session: "GameSession"):
    p = session.player
    for e in session.enemies:
        if not e.alive:
            continue
        stats = e.stats
        dx = p.x - e.x
        dy = p.y - e.y
        dist = math.hypot(dx, dy)

        target_angle = math.atan2(dy, dx)
        e.angle = turn_toward(e.angle, target_angle, ENEMY_TURN_SPEED)

        # Hold a stand-off band between BACKOFF_DISTANCE and CHASE_DISTANCE
        if dist > CHASE_DISTANCE:
            e.x += math.cos(e.angle) * stats.speed
            e.y += math.sin(e.angle) * stats.speed
        elif dist < BACKOFF_DISTANCE:
            e.x -= math.cos(e.angle) * stats.speed * 0.5
            e.y -= math.sin(e.angle) * stats.speed * 0.5

        e.fire_cooldown -= 1
        if e.fire_cooldown <= 0 and dist < ENGAGE_RANGE:
            e.fire_cooldown = stats.fire_rate
            session.phasers.append(Projectile(
                kind=ProjectileKind.PHASER,
                x=e.x + math.cos(e.angle) * stats.radius,
                y=e.y + math.sin(e.angle) * stats.radius,
                angle=target_angle,
                speed=BOLT_SPEED,
                life=BOLT_LIFE,
                damage=BOLT_DAMAGE,
                friendly=False,
            ))
