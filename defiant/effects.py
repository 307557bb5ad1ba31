"""
Cosmetic effects: explosions and particle bursts
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .entities import Color, Explosion, Particle

if TYPE_CHECKING:
    from .session import GameSession

PARTICLE_MAX_LIFE = 50

# Particle palettes
SPARK_ORANGE: Color = (255, 150, 50)
SPARK_RED: Color = (255, 100, 100)
ROCK: Color = (150, 120, 80)


def spawn_explosion(session: "GameSession", x: float, y: float, life: int, size: float) -> Explosion:
    explosion = Explosion(x=x, y=y, life=life, max_life=life, size=size)
    session.explosions.append(explosion)
    return explosion


def spawn_particles(session: "GameSession", x: float, y: float, count: int, color: Color):
    """Scatter `count` particles from a point at random headings"""
    rng = session.rng
    for _ in range(count):
        angle = rng.uniform(0.0, math.pi * 2)
        speed = rng.uniform(0.5, 2.5)
        session.particles.append(Particle(
            x=x,
            y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            life=rng.uniform(30.0, 50.0),
            max_life=PARTICLE_MAX_LIFE,
            size=rng.uniform(1.0, 4.0),
            color=color,
        ))


def update_effects(session: "GameSession"):
    """Count explosions down and drift particles; drop whatever has expired"""
    for e in session.explosions:
        e.life -= 1
    session.explosions = [e for e in session.explosions if e.life > 0]

    for p in session.particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
    session.particles = [p for p in session.particles if p.life > 0]
