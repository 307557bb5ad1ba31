#!/usr/bin/env python3
"""
Tests for projectile flight, hit resolution and enemy destruction
"""

import math

import pytest

from defiant.combat import destroy_enemy, update_projectiles
from defiant.enemies import make_enemy
from defiant.entities import Asteroid, EnemyArchetype, Projectile, ProjectileKind


def phaser(x, y, angle=0.0, speed=12.0, life=40, damage=8.0, friendly=True):
    return Projectile(ProjectileKind.PHASER, x, y, angle, speed, life, damage, friendly)


def torpedo(x, y, angle=0.0, speed=6.0, life=120, damage=35.0, friendly=True):
    return Projectile(ProjectileKind.TORPEDO, x, y, angle, speed, life, damage, friendly)


# =============================================================================
# LIFETIME
# =============================================================================

class TestLifetime:

    def test_bolt_expires_after_exactly_its_life(self, session):
        bolt = phaser(2000.0, 2000.0)
        session.phasers.append(bolt)
        for _ in range(39):
            update_projectiles(session)
        assert session.phasers == [bolt]
        update_projectiles(session)
        assert session.phasers == []

    def test_bolt_moves_along_its_heading(self, session):
        bolt = phaser(0.0, 0.0, angle=math.pi / 2)
        session.phasers.append(bolt)
        update_projectiles(session)
        assert (bolt.x, bolt.y) == pytest.approx((0.0, 12.0))
        assert bolt.life == 39

    def test_expiry_has_no_side_effects(self, session):
        session.phasers.append(phaser(2000.0, 2000.0, life=1))
        update_projectiles(session)
        assert session.phasers == []
        assert session.explosions == [] and session.particles == []


# =============================================================================
# PHASER HITS
# =============================================================================

class TestPhaserHits:

    def test_friendly_bolt_damages_enemy(self, session):
        enemy = make_enemy(EnemyArchetype.BREEN, 500.0, 500.0, 0.0)
        session.enemies.append(enemy)
        session.phasers.append(phaser(488.0, 500.0))
        update_projectiles(session)
        assert enemy.hull == 52
        assert session.phasers == []
        assert len(session.particles) == 3
        assert session.enemies == [enemy]

    def test_hit_margin_is_radius_plus_five(self, session):
        enemy = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        session.enemies.append(enemy)
        # Lands 19.5 from centre, just outside 14 + 5
        session.phasers.append(phaser(500.0 - 19.5 - 12.0, 500.0))
        update_projectiles(session)
        assert enemy.hull == 40
        assert len(session.phasers) == 1

    def test_bolt_hits_only_first_enemy(self, session):
        first = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        second = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        session.enemies.extend([first, second])
        session.phasers.append(phaser(488.0, 500.0))
        update_projectiles(session)
        assert first.hull == 32
        assert second.hull == 40

    def test_killing_blow_scores_once(self, session):
        enemy = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        enemy.hull = 5
        session.enemies.append(enemy)
        session.phasers.append(phaser(488.0, 500.0))
        update_projectiles(session)
        assert session.enemies == []
        assert session.score == 100
        assert len(session.explosions) == 1
        assert len(session.particles) >= 10
        assert session.log.lines[-1] == "> Jem'Hadar destroyed! +100 pts"

    def test_dead_enemy_cannot_absorb_second_bolt(self, session):
        enemy = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        enemy.hull = 5
        session.enemies.append(enemy)
        first = phaser(488.0, 500.0)
        second = phaser(488.0, 500.0)
        session.phasers.extend([first, second])
        update_projectiles(session)
        assert session.score == 100
        assert session.phasers == [second]

    def test_hostile_bolt_hits_player(self, session):
        p = session.player
        session.phasers.append(phaser(p.x - 8.0, p.y, speed=8.0, damage=5.0, friendly=False))
        update_projectiles(session)
        assert p.hull == pytest.approx(95.0)
        assert session.phasers == []
        assert len(session.particles) == 3

    def test_hostile_bolt_ignores_enemies(self, session):
        enemy = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        session.enemies.append(enemy)
        session.phasers.append(phaser(492.0, 500.0, speed=8.0, friendly=False))
        update_projectiles(session)
        assert enemy.hull == 40
        assert len(session.phasers) == 1

    def test_hostile_bolt_passes_through_destroyed_player(self, session):
        p = session.player
        p.destroyed = True
        session.phasers.append(phaser(p.x - 8.0, p.y, speed=8.0, friendly=False))
        update_projectiles(session)
        assert len(session.phasers) == 1


# =============================================================================
# TORPEDO HITS
# =============================================================================

class TestTorpedoHits:

    def test_torpedo_damages_enemy_with_wider_margin(self, session):
        enemy = make_enemy(EnemyArchetype.BORG, 500.0, 500.0, 0.0)
        session.enemies.append(enemy)
        # Ends 29 units away: inside 22 + 8
        session.torpedoes.append(torpedo(500.0 - 29.0 - 6.0, 500.0))
        update_projectiles(session)
        assert enemy.hull == 115
        assert session.torpedoes == []
        assert len(session.explosions) == 1
        assert session.explosions[0].size == 25

    def test_torpedo_kill(self, session):
        enemy = make_enemy(EnemyArchetype.CARDASSIAN, 500.0, 500.0, 0.0)
        session.enemies.append(enemy)
        session.torpedoes.append(torpedo(494.0, 500.0, damage=60.0))
        update_projectiles(session)
        assert session.enemies == []
        assert session.score == 80
        assert len(session.explosions) == 2

    def test_torpedo_detonates_on_asteroid(self, session):
        rock = Asteroid(x=800.0, y=800.0, vx=0.0, vy=0.0, size=20.0, rotation=0.0, rot_speed=0.0)
        session.asteroids.append(rock)
        session.torpedoes.append(torpedo(794.0, 800.0))
        update_projectiles(session)
        assert session.torpedoes == []
        assert len(session.explosions) == 1
        assert session.explosions[0].size == 15
        assert len(session.particles) == 8
        assert session.asteroids == [rock]

    def test_enemy_hit_takes_precedence_over_asteroid(self, session):
        enemy = make_enemy(EnemyArchetype.JEMHADAR, 800.0, 800.0, 0.0)
        session.enemies.append(enemy)
        session.asteroids.append(Asteroid(x=800.0, y=800.0, vx=0, vy=0, size=20.0, rotation=0, rot_speed=0))
        session.torpedoes.append(torpedo(794.0, 800.0))
        update_projectiles(session)
        assert enemy.hull == 5
        assert len(session.explosions) == 1
        assert session.particles == []

    def test_hostile_torpedo_hits_player(self, session):
        p = session.player
        session.torpedoes.append(torpedo(p.x - 10.0, p.y, friendly=False))
        update_projectiles(session)
        assert p.hull == pytest.approx(65.0)
        assert session.torpedoes == []
        assert len(session.explosions) == 1
        assert session.explosions[0].size == 25
        assert session.shake == pytest.approx(15.0)

    def test_hostile_torpedo_ignores_enemies(self, session):
        enemy = make_enemy(EnemyArchetype.JEMHADAR, 500.0, 500.0, 0.0)
        session.enemies.append(enemy)
        session.torpedoes.append(torpedo(494.0, 500.0, friendly=False))
        update_projectiles(session)
        assert enemy.hull == 40
        assert len(session.torpedoes) == 1
        assert session.explosions == []

    def test_hostile_torpedo_passes_through_destroyed_player(self, session):
        p = session.player
        p.destroyed = True
        session.torpedoes.append(torpedo(p.x - 10.0, p.y, friendly=False))
        update_projectiles(session)
        assert len(session.torpedoes) == 1

    def test_player_hit_radius_is_strict(self, session):
        p = session.player
        # Lands exactly 15 from the ship: a graze, not a hit
        session.torpedoes.append(torpedo(p.x - 21.0, p.y, friendly=False))
        update_projectiles(session)
        assert p.hull == 100.0
        assert len(session.torpedoes) == 1


# =============================================================================
# EFFECTS AND DESTRUCTION HELPER
# =============================================================================

class TestEffects:

    def test_particles_drift_and_expire(self, session):
        from defiant.entities import Particle
        pt = Particle(x=0.0, y=0.0, vx=1.0, vy=-2.0, life=2, max_life=50, size=2.0, color=(1, 2, 3))
        session.particles.append(pt)
        update_projectiles(session)
        assert (pt.x, pt.y) == (1.0, -2.0)
        assert session.particles == [pt]
        update_projectiles(session)
        assert session.particles == []

    def test_explosions_count_down(self, session):
        from defiant.effects import spawn_explosion
        spawn_explosion(session, 0.0, 0.0, life=2, size=10)
        update_projectiles(session)
        assert len(session.explosions) == 1
        update_projectiles(session)
        assert session.explosions == []

    def test_destroy_enemy_is_idempotent(self, session):
        enemy = make_enemy(EnemyArchetype.BORG, 0.0, 0.0, 0.0)
        session.enemies.append(enemy)
        assert destroy_enemy(session, enemy)
        assert not destroy_enemy(session, enemy)
        assert session.score == 300
        assert len(session.explosions) == 1
        assert session.explosions[0].size == 44
        assert len(session.particles) == 15
