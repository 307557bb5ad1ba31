"""Shared fixtures: a seeded session on a manual clock, with no asteroids in the way"""

import pytest

from defiant.clock import ManualClock
from defiant.session import GameSession


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def session(clock):
    s = GameSession(seed=1234, asteroid_count=0, clock=clock)
    s.start()
    return s


@pytest.fixture
def idle_session(clock):
    """Session still on the title screen"""
    return GameSession(seed=1234, asteroid_count=0, clock=clock)
