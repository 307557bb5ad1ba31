"""
Player ship controller

Runs once per tick against the current input snapshot: steering, thrust,
friction and speed limits, world bounds, shields, weapons, station support,
asteroid impacts and the engine trail. Also owns the damage path used by
hostile fire and the destruction/respawn cycle.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from .effects import ROCK, spawn_explosion, spawn_particles
from .entities import (
    MAX_HULL,
    MAX_SHIELDS,
    MAX_TORPEDOES,
    PLAYER_START_X,
    PLAYER_START_Y,
    PlayerShip,
    Projectile,
    ProjectileKind,
    TrailPoint,
)
from .utils import circle_collide, clamp, distance, normalize, turn_toward

if TYPE_CHECKING:
    from .session import GameSession, InputState

LOGGER = logging.getLogger(__name__)

# Handling
ACCEL = 0.12
FRICTION = 0.97
TURN_SPEED = 0.04
JOYSTICK_TURN_FACTOR = 1.5
JOYSTICK_DEADZONE = 0.15
REVERSE_FACTOR = 0.5

# Shields
SHIELD_TOGGLE_COOLDOWN = 20
SHIELD_DRAIN = 0.02
SHIELD_REGEN = 0.01
SHIELD_ABSORB = 0.8

# Weapons
PHASER_COOLDOWN = 10
PHASER_SPREAD = 0.05
PHASER_OFFSET = 18.0
PHASER_SPEED = 12.0
PHASER_LIFE = 40
PHASER_DAMAGE = 8.0
TORPEDO_COOLDOWN = 30
TORPEDO_OFFSET = 20.0
TORPEDO_SPEED = 6.0
TORPEDO_LIFE = 120
TORPEDO_DAMAGE = 35.0

# Damage feedback
SHAKE_PER_DAMAGE = 0.5
MAX_SHAKE = 15.0
DEATH_PENALTY = 200

# Station support
STATION_RANGE = 150.0
STATION_HULL_REPAIR = 0.05
STATION_SHIELD_RECHARGE = 0.03
STATION_RESUPPLY_INTERVAL = 60

# Asteroids
ASTEROID_DAMAGE = 5.0
ASTEROID_BOUNCE_SPEED = 3.0
ASTEROID_DEBRIS = 5

# Engine trail
TRAIL_MIN_SPEED = 0.5
TRAIL_OFFSET = 15.0
TRAIL_LIFE = 30
TRAIL_MAX_POINTS = 30


def update_player(session: "GameSession", inp: "InputState"):
    p = session.player
    _decay_trail(p)
    if p.destroyed:
        return

    _steer_and_thrust(p, inp)
    _integrate(p, inp.turbo, session.world_size)
    _update_shields(p, inp.shield)
    _update_weapons(session, inp)
    _emit_trail(p)
    _collide_asteroids(session)
    _station_support(session)


def _steer_and_thrust(p: PlayerShip, inp: "InputState"):
    if inp.left:
        p.angle -= TURN_SPEED
    if inp.right:
        p.angle += TURN_SPEED

    if inp.forward:
        p.vx += math.cos(p.angle) * ACCEL
        p.vy += math.sin(p.angle) * ACCEL
    if inp.reverse:
        p.vx -= math.cos(p.angle) * ACCEL * REVERSE_FACTOR
        p.vy -= math.sin(p.angle) * ACCEL * REVERSE_FACTOR

    if inp.joystick_active:
        mag = math.hypot(inp.joystick_x, inp.joystick_y)
        if mag > JOYSTICK_DEADZONE:
            target = math.atan2(inp.joystick_y, inp.joystick_x)
            p.angle = turn_toward(p.angle, target, TURN_SPEED * JOYSTICK_TURN_FACTOR)
            p.vx += math.cos(p.angle) * ACCEL * mag
            p.vy += math.sin(p.angle) * ACCEL * mag


def _integrate(p: PlayerShip, turbo: bool, world_size: float):
    max_spd = p.turbo_speed if turbo else p.max_speed

    p.vx *= FRICTION
    p.vy *= FRICTION

    p.speed = math.hypot(p.vx, p.vy)
    if p.speed > max_spd:
        p.vx = p.vx / p.speed * max_spd
        p.vy = p.vy / p.speed * max_spd
        p.speed = max_spd

    p.x += p.vx
    p.y += p.vy

    bound = world_size / 2
    p.x = clamp(p.x, -bound, bound)
    p.y = clamp(p.y, -bound, bound)


def _update_shields(p: PlayerShip, toggle_held: bool):
    # Holding the key re-toggles every SHIELD_TOGGLE_COOLDOWN ticks
    if toggle_held and p.shield_cooldown <= 0:
        p.shields_active = not p.shields_active
        p.shield_cooldown = SHIELD_TOGGLE_COOLDOWN
    if p.shield_cooldown > 0:
        p.shield_cooldown -= 1

    if p.shields_active:
        p.shields = max(0.0, p.shields - SHIELD_DRAIN)
        if p.shields <= 0:
            p.shields_active = False
    else:
        p.shields = min(MAX_SHIELDS, p.shields + SHIELD_REGEN)


def _update_weapons(session: "GameSession", inp: "InputState"):
    p = session.player

    if p.phaser_cooldown > 0:
        p.phaser_cooldown -= 1
    if inp.fire and p.phaser_cooldown <= 0:
        fire_phasers(session)
        p.phaser_cooldown = PHASER_COOLDOWN

    if p.torpedo_cooldown > 0:
        p.torpedo_cooldown -= 1
    if inp.torpedo and p.torpedo_cooldown <= 0 and p.torpedoes > 0:
        fire_torpedo(session)
        p.torpedo_cooldown = TORPEDO_COOLDOWN


def fire_phasers(session: "GameSession"):
    """Twin bolts from the forward emitters, splayed slightly apart"""
    p = session.player
    for side in (-1, 1):
        session.phasers.append(Projectile(
            kind=ProjectileKind.PHASER,
            x=p.x + math.cos(p.angle) * PHASER_OFFSET,
            y=p.y + math.sin(p.angle) * PHASER_OFFSET,
            angle=p.angle + side * PHASER_SPREAD,
            speed=PHASER_SPEED,
            life=PHASER_LIFE,
            damage=PHASER_DAMAGE,
            friendly=True,
        ))


def fire_torpedo(session: "GameSession"):
    p = session.player
    session.torpedoes.append(Projectile(
        kind=ProjectileKind.TORPEDO,
        x=p.x + math.cos(p.angle) * TORPEDO_OFFSET,
        y=p.y + math.sin(p.angle) * TORPEDO_OFFSET,
        angle=p.angle,
        speed=TORPEDO_SPEED,
        life=TORPEDO_LIFE,
        damage=TORPEDO_DAMAGE,
        friendly=True,
    ))
    p.torpedoes -= 1


def take_damage(session: "GameSession", amount: float):
    """Apply incoming damage, shields first when raised.

    Active shields soak 80% of the hit and let the rest bleed through to the
    hull. Every hit kicks the screen shake. Dropping the hull to zero destroys
    the ship; hits on an already destroyed ship are ignored.
    """
    p = session.player
    if p.destroyed:
        return

    if p.shields_active and p.shields > 0:
        p.shields = max(0.0, p.shields - amount * SHIELD_ABSORB)
        p.hull -= amount * (1.0 - SHIELD_ABSORB)
    else:
        p.hull -= amount

    session.shake = min(session.shake + amount * SHAKE_PER_DAMAGE, MAX_SHAKE)

    if p.hull <= 0:
        destroy_player(session)


def destroy_player(session: "GameSession"):
    p = session.player
    p.hull = 0.0
    p.destroyed = True
    spawn_explosion(session, p.x, p.y, life=60, size=50)
    session.log.add(f"> USS DEFIANT DESTROYED! Final score: {session.score}")
    session.respawn_task = session.scheduler.schedule(
        session.respawn_delay, lambda: respawn_player(session), name="respawn"
    )


def respawn_player(session: "GameSession"):
    """Rebuild the Defiant at the station and charge the loss to the score"""
    p = session.player
    p.hull = MAX_HULL
    p.shields = MAX_SHIELDS
    p.torpedoes = MAX_TORPEDOES
    p.x = PLAYER_START_X
    p.y = PLAYER_START_Y
    p.vx = 0.0
    p.vy = 0.0
    p.speed = 0.0
    p.destroyed = False
    session.score = max(0, session.score - DEATH_PENALTY)
    session.respawn_task = None
    session.log.add("> Defiant rebuilt at DS9...")


def _decay_trail(p: PlayerShip):
    for t in p.engine_trail:
        t.life -= 1
    p.engine_trail = [t for t in p.engine_trail if t.life > 0]


def _emit_trail(p: PlayerShip):
    if p.speed <= TRAIL_MIN_SPEED:
        return
    p.engine_trail.append(TrailPoint(
        x=p.x - math.cos(p.angle) * TRAIL_OFFSET,
        y=p.y - math.sin(p.angle) * TRAIL_OFFSET,
        life=TRAIL_LIFE,
        max_life=TRAIL_LIFE,
    ))
    if len(p.engine_trail) > TRAIL_MAX_POINTS:
        p.engine_trail = p.engine_trail[-TRAIL_MAX_POINTS:]


def _collide_asteroids(session: "GameSession"):
    p = session.player
    for a in session.asteroids:
        if p.destroyed:
            return
        if not circle_collide(p.x, p.y, p.radius, a.x, a.y, a.size):
            continue
        take_damage(session, ASTEROID_DAMAGE)
        nx, ny = normalize(p.x - a.x, p.y - a.y)
        # Dead centre has no push-out direction; keep the current velocity
        if nx or ny:
            p.vx = nx * ASTEROID_BOUNCE_SPEED
            p.vy = ny * ASTEROID_BOUNCE_SPEED
        spawn_particles(session, a.x, a.y, ASTEROID_DEBRIS, ROCK)


def _station_support(session: "GameSession"):
    p = session.player
    if p.destroyed:
        return
    st = session.station
    if distance(p.x, p.y, st.x, st.y) >= STATION_RANGE:
        return
    p.hull = min(MAX_HULL, p.hull + STATION_HULL_REPAIR)
    p.shields = min(MAX_SHIELDS, p.shields + STATION_SHIELD_RECHARGE)
    if p.torpedoes < MAX_TORPEDOES and session.game_time % STATION_RESUPPLY_INTERVAL == 0:
        p.torpedoes += 1
