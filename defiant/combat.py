"""
Combat resolution: projectile flight, hit tests and enemy destruction.

Every pass rebuilds the surviving list instead of deleting in place, so no
item is skipped while a list is being scanned. An enemy destroyed by one
projectile leaves `session.enemies` immediately and cannot be hit again in
the same tick.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from .effects import ROCK, SPARK_ORANGE, SPARK_RED, spawn_explosion, spawn_particles, update_effects
from .entities import Enemy, Projectile
from .player import take_damage
from .utils import circle_collide

if TYPE_CHECKING:
    from .session import GameSession

PHASER_HIT_MARGIN = 5.0
TORPEDO_HIT_MARGIN = 8.0
ASTEROID_HIT_MARGIN = 5.0
PLAYER_HIT_RADIUS = 15.0
DEBRIS_PER_KILL = 15


def update_projectiles(session: "GameSession"):
    """Advance phasers, torpedoes and effects by one tick"""
    survivors = []
    for bolt in session.phasers:
        _advance(bolt)
        _resolve_phaser(session, bolt)
        if bolt.alive and bolt.life > 0:
            survivors.append(bolt)
    session.phasers = survivors

    survivors = []
    for torp in session.torpedoes:
        _advance(torp)
        _resolve_torpedo(session, torp)
        if torp.alive and torp.life > 0:
            survivors.append(torp)
    session.torpedoes = survivors

    update_effects(session)


def _advance(proj: Projectile):
    proj.x += math.cos(proj.angle) * proj.speed
    proj.y += math.sin(proj.angle) * proj.speed
    proj.life -= 1


def _first_enemy_within(session: "GameSession", proj: Projectile, margin: float) -> Optional[Enemy]:
    for e in session.enemies:
        if e.alive and circle_collide(proj.x, proj.y, margin, e.x, e.y, e.radius):
            return e
    return None


def _hits_player(session: "GameSession", proj: Projectile) -> bool:
    p = session.player
    return not p.destroyed and circle_collide(proj.x, proj.y, 0.0, p.x, p.y, PLAYER_HIT_RADIUS)


def _resolve_phaser(session: "GameSession", bolt: Projectile):
    if bolt.friendly:
        target = _first_enemy_within(session, bolt, PHASER_HIT_MARGIN)
        if target is None:
            return
        target.hull -= bolt.damage
        spawn_particles(session, bolt.x, bolt.y, 3, SPARK_ORANGE)
        if target.hull <= 0:
            destroy_enemy(session, target)
        bolt.alive = False
    elif _hits_player(session, bolt):
        take_damage(session, bolt.damage)
        spawn_particles(session, bolt.x, bolt.y, 3, SPARK_RED)
        bolt.alive = False


def _resolve_torpedo(session: "GameSession", torp: Projectile):
    if torp.friendly:
        target = _first_enemy_within(session, torp, TORPEDO_HIT_MARGIN)
        if target is not None:
            target.hull -= torp.damage
            spawn_explosion(session, torp.x, torp.y, life=30, size=25)
            if target.hull <= 0:
                destroy_enemy(session, target)
            torp.alive = False
            return
    elif _hits_player(session, torp):
        take_damage(session, torp.damage)
        spawn_explosion(session, torp.x, torp.y, life=30, size=25)
        torp.alive = False
        return

    for a in session.asteroids:
        if circle_collide(torp.x, torp.y, ASTEROID_HIT_MARGIN, a.x, a.y, a.size):
            spawn_explosion(session, torp.x, torp.y, life=20, size=15)
            spawn_particles(session, torp.x, torp.y, 8, ROCK)
            torp.alive = False
            return


def destroy_enemy(session: "GameSession", enemy: Enemy) -> bool:
    """Score, blow up and remove an enemy.

    Returns False without side effects if the enemy was already destroyed.
    """
    if not enemy.alive:
        return False
    enemy.alive = False
    stats = enemy.stats
    session.score += stats.score
    spawn_explosion(session, enemy.x, enemy.y, life=40, size=stats.radius * 2)
    spawn_particles(session, enemy.x, enemy.y, DEBRIS_PER_KILL, SPARK_ORANGE)
    session.log.add(f"> {stats.name} destroyed! +{stats.score} pts")
    session.enemies = [e for e in session.enemies if e is not enemy]
    return True
