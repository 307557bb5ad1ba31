"""Defiant - isometric arcade space combat around Deep Space Nine"""

from .session import GameSession, HudState, InputState, MissionLog
from .clock import ManualClock, Scheduler
from .defiant_env import DefiantEnv, run_random_episode

__all__ = [
    'GameSession',
    'HudState',
    'InputState',
    'MissionLog',
    'ManualClock',
    'Scheduler',
    'DefiantEnv',
    'run_random_episode',
]
