"""
DefiantEnv - headless Gymnasium wrapper around one GameSession
--------------------------------------------------------------
- One env step = one game tick with the decoded action as input
- MultiDiscrete action space: [turn(3), thrust(3), phaser(2), torpedo(2), shield(2), turbo(2)]
- Vector observation: player state + top-K nearest enemies
- Reward: score gained minus hull lost, both per 100 points
- The respawn timer runs on a ManualClock advanced by `dt` per step, so an
  episode replays identically for a given seed

Render modes mirror the arcade window: "human" opens a DefiantWindow that is
drawn after every step.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .clock import ManualClock
from .configs.defiant_config import SESSION_CONFIG
from .entities import MAX_HULL, MAX_SHIELDS, MAX_TORPEDOES
from .player import PHASER_COOLDOWN, TORPEDO_COOLDOWN
from .session import GameSession, InputState
from .utils import clamp

ENEMY_SENSOR_RANGE = 2000.0


def decode_action(action) -> InputState:
    """Map a MultiDiscrete action onto an input snapshot.

    turn: 0 none, 1 left, 2 right
    thrust: 0 none, 1 forward, 2 reverse
    """
    turn, thrust, fire, torpedo, shield, turbo = (int(a) for a in action)
    return InputState(
        left=turn == 1,
        right=turn == 2,
        forward=thrust == 1,
        reverse=thrust == 2,
        fire=bool(fire),
        torpedo=bool(torpedo),
        shield=bool(shield),
        turbo=bool(turbo),
    )


class DefiantEnv(gym.Env):
    """Gymnasium environment driving the Defiant simulation"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 60,
        max_steps: int = 36000,
        k_enemies: int = 5,
        session_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode!r}"
        self.render_mode = render_mode
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.session_config = dict(SESSION_CONFIG if session_config is None else session_config)

        self.action_space = spaces.MultiDiscrete([3, 3, 2, 2, 2, 2])

        # Player: pos(2) vel(2) heading cos/sin(2) hull shields torpedoes(3)
        #         phaser/torpedo cooldown(2) shields active(1)
        # Each enemy: rel pos(2) hull fraction(1) present(1)
        obs_dim = 2 + 2 + 2 + 3 + 2 + 1 + self.k_enemies * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.clock: ManualClock = ManualClock()
        self.session: GameSession = None  # type: ignore
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self.clock = ManualClock()
        self.session = GameSession(seed=seed, clock=self.clock, **self.session_config)
        self.session.start()
        self._step_count = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        s = self.session
        score_before = s.score
        hull_before = s.player.hull

        self.clock.advance(self.dt)
        s.tick(decode_action(action))
        self._step_count += 1

        hull_lost = max(0.0, hull_before - s.player.hull)
        reward = (s.score - score_before) / 100.0 - hull_lost / 100.0

        terminated = s.player.destroyed
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        p = s.player
        half = s.world_size / 2

        obs_parts = [
            p.x / half, p.y / half,
            clamp(p.vx / p.turbo_speed, -1, 1), clamp(p.vy / p.turbo_speed, -1, 1),
            math.cos(p.angle), math.sin(p.angle),
            p.hull / MAX_HULL * 2 - 1,
            p.shields / MAX_SHIELDS * 2 - 1,
            p.torpedoes / MAX_TORPEDOES * 2 - 1,
            clamp(p.phaser_cooldown / PHASER_COOLDOWN, 0, 1),
            clamp(p.torpedo_cooldown / TORPEDO_COOLDOWN, 0, 1),
            1.0 if p.shields_active else -1.0,
        ]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            s.enemies,
            key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / ENEMY_SENSOR_RANGE, -1, 1),
                    clamp((e.y - p.y) / ENEMY_SENSOR_RANGE, -1, 1),
                    clamp(e.hull / e.stats.hull, 0, 1),
                    1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "hull": s.player.hull,
            "shields": s.player.shields,
            "torpedoes": s.player.torpedoes,
            "num_enemies": len(s.enemies),
            "mission_phase": s.director.phase,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None
        if self._window is None:
            from .window import DefiantWindow
            self._window = DefiantWindow(self.session, drive_session=False)
        self._window.session = self.session
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity run
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42, max_steps: Optional[int] = None) -> float:
    """Play one episode with random actions and return the total reward"""
    kwargs = {} if max_steps is None else {"max_steps": max_steps}
    env = DefiantEnv(render_mode="human" if render else None, **kwargs)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")
    env.close()
    return total
