"""
Mission progression: wave definitions and the director that runs them.

The director is idle while the enemy store is empty, counting ticks. The
first idle tick after a wave is cleared pays that wave's reward; once the
idle count passes WAVE_INTERVAL the next mission in the cycle spawns.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .enemies import make_enemy
from .entities import EnemyArchetype

if TYPE_CHECKING:
    from .session import GameSession

LOGGER = logging.getLogger(__name__)

WAVE_INTERVAL = 300  # idle ticks before the next wave
SPAWN_MIN_DISTANCE = 1200.0
SPAWN_DISTANCE_SPREAD = 500.0


@dataclass(frozen=True)
class MissionDefinition:
    name: str
    description: str
    waves: Tuple[Tuple[EnemyArchetype, int], ...]
    reward: int

    @property
    def enemy_count(self) -> int:
        return sum(count for _, count in self.waves)


MISSIONS: Tuple[MissionDefinition, ...] = (
    MissionDefinition(
        "DS9 Patrol",
        "Defend the station against the raiders",
        ((EnemyArchetype.JEMHADAR, 3),),
        200,
    ),
    MissionDefinition(
        "Cardassian Threat",
        "A Cardassian squadron is closing in!",
        ((EnemyArchetype.CARDASSIAN, 4),),
        300,
    ),
    MissionDefinition(
        "Breen Raid",
        "Breen ships have come through the wormhole!",
        ((EnemyArchetype.BREEN, 3), (EnemyArchetype.JEMHADAR, 2)),
        500,
    ),
    MissionDefinition(
        "Borg Incursion",
        "Borg cube detected! All hands to battle stations!",
        ((EnemyArchetype.BORG, 1), (EnemyArchetype.JEMHADAR, 3)),
        800,
    ),
    MissionDefinition(
        "Dominion Assault",
        "The Dominion is launching a massive attack!",
        ((EnemyArchetype.JEMHADAR, 5), (EnemyArchetype.CARDASSIAN, 3), (EnemyArchetype.BREEN, 2)),
        1000,
    ),
)


def spawn_wave(session: "GameSession", archetype: EnemyArchetype, count: int):
    """Place `count` enemies on a ring around the player's current position"""
    rng = session.rng
    p = session.player
    for _ in range(count):
        angle = rng.uniform(0.0, math.pi * 2)
        dist = SPAWN_MIN_DISTANCE + rng.uniform(0.0, SPAWN_DISTANCE_SPREAD)
        session.enemies.append(make_enemy(
            archetype,
            p.x + math.cos(angle) * dist,
            p.y + math.sin(angle) * dist,
            rng.uniform(0.0, math.pi * 2),
        ))


class MissionDirector:
    """Cyclic wave progression.

    Attributes:
        missions: Mission table, cycled in order
        phase: Number of missions started so far
        idle_timer: Ticks since the enemy store last became empty
        reward_pending: Set when a wave spawns, cleared when its reward is paid
    """

    def __init__(self, missions: Tuple[MissionDefinition, ...] = MISSIONS, wave_interval: int = WAVE_INTERVAL):
        if not missions:
            raise ValueError("at least one mission definition is required")
        self.missions = missions
        self.wave_interval = wave_interval
        self.phase = 0
        self.idle_timer = 0
        self.reward_pending = False
        self.current: Optional[MissionDefinition] = None

    def update(self, session: "GameSession"):
        if session.enemies:
            self.idle_timer = 0
            return

        self.idle_timer += 1

        if self.reward_pending and self.phase > 0:
            self._pay_reward(session)

        if self.idle_timer > self.wave_interval:
            self._start_next(session)

    def _pay_reward(self, session: "GameSession"):
        cleared = self.missions[(self.phase - 1) % len(self.missions)]
        self.reward_pending = False
        session.score += cleared.reward
        session.log.add(f"> Mission accomplished! +{cleared.reward} pts")

    def _start_next(self, session: "GameSession"):
        mission = self.missions[self.phase % len(self.missions)]
        session.log.add(f"> MISSION: {mission.name}")
        session.log.add(f"> {mission.description}")
        for archetype, count in mission.waves:
            spawn_wave(session, archetype, count)
        LOGGER.info("wave %d: %s (%d enemies)", self.phase + 1, mission.name, mission.enemy_count)
        self.current = mission
        self.idle_timer = 0
        self.phase += 1
        self.reward_pending = True
