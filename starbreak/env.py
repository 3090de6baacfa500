"""
StarbreakEnv - Gymnasium wrapper around the Starbreak simulation core
---------------------------------------------------------------------
- The core runs unchanged; the agent plays the role of the input host
- Discrete(6) action space: move(stay/left/right) x fire(off/on)
- Vector observation: player state + K nearest asteroids + M nearest power-ups
- Reward built from the world's per-frame event counters
- Simulated clock (step / fps), so buffs expire on game time, not wall time

Quick test:
    python -m starbreak.env
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import DEFAULT_CONFIG, GameConfig
from .entities import PowerUpType
from .game import Game
from .movement import InputState, Intent
from .state import GameState
from .utils import clamp

DEFAULT_REWARDS = {
    "R_HIT": 0.1,        # bullet connects
    "R_KILL": 1.0,       # asteroid destroyed
    "R_DAMAGE": 1.0,     # player struck
    "R_GROUND": 0.5,     # asteroid slipped past
    "R_PICKUP": 0.5,     # power-up collected
    "R_SHOT": 0.01,      # per bullet fired
    "R_ALIVE": 0.001,    # per step survived
    "R_DEATH": 5.0,      # game over
}

# move index -> held intents
MOVES = ((), (Intent.LEFT,), (Intent.RIGHT,))

MAX_SPEED = 5.0  # observation scale for asteroid velocity


def decode_action(action: int) -> InputState:
    """Flat Discrete(6) index -> held intents"""
    action = int(action)
    move, fire = divmod(action, 2)
    held = list(MOVES[move])
    if fire:
        held.append(Intent.FIRE)
    return InputState(held)


class StarbreakEnv(gym.Env):
    """Asteroid-defence environment driving the Starbreak core"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_asteroids: int = 5,
        m_powerups: int = 2,
        reward_config: Optional[Dict[str, float]] = None,
        config: Optional[GameConfig] = None,
        **game_overrides,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode

        self.config = replace(config or DEFAULT_CONFIG, **game_overrides)
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids
        self.m_powerups = m_powerups
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.action_space = spaces.Discrete(len(MOVES) * 2)

        # Player: x, tilt, invulnerable, double-shot, fire-ready, lives
        # Each asteroid: rel pos(2) vel(2) hp(1)
        # Each power-up: rel pos(2) type(1)
        obs_dim = 6 + self.k_asteroids * 5 + self.m_powerups * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.game: Game = None  # type: ignore
        self._step_count = 0
        self._totals: Dict[str, int] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.game = Game(self.config, rng=rng)
        self.game.start()

        self._step_count = 0
        self._totals = {"kills": 0, "damage": 0, "pickups": 0, "ground": 0}

        if self._window is not None:
            self._window.game = self.game

        return self._get_obs(), self._get_info()

    def step(self, action):
        now = (self._step_count + 1) / self.metadata["render_fps"]
        self.game.step(decode_action(action), now=now)
        self._step_count += 1

        events = self.game.world.events
        self._totals["kills"] += events["kill"]
        self._totals["damage"] += events["damage"]
        self._totals["pickups"] += events["pickup"]
        self._totals["ground"] += events["ground"]

        terminated = self.game.state is GameState.GAME_OVER
        truncated = not terminated and self._step_count >= self.max_steps
        reward = self._compute_reward(events, terminated)

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        world = self.game.world
        player = world.player

        parts = [
            player.x / cfg.width * 2 - 1,
            clamp(player.rotation / cfg.max_tilt, -1, 1),
            player.invulnerable / cfg.invulnerable_frames * 2 - 1,
            1.0 if player.has_double_shot(world.now) else -1.0,
            clamp(world.frames_since_last_shot / cfg.fire_rate, 0, 1) * 2 - 1,
            world.lives / cfg.initial_lives * 2 - 1,
        ]

        def dist2(e):
            return (e.x - player.x) ** 2 + (e.y - player.y) ** 2

        asteroids = sorted(world.asteroids, key=dist2)
        for i in range(self.k_asteroids):
            if i < len(asteroids):
                a = asteroids[i]
                parts += [
                    clamp((a.x - player.x) / cfg.width, -1, 1),
                    clamp((a.y - player.y) / cfg.height, -1, 1),
                    clamp(a.vx / MAX_SPEED, -1, 1),
                    clamp(a.vy / MAX_SPEED, -1, 1),
                    clamp(a.hp / 2, -1, 1),
                ]
            else:
                parts += [0.0] * 5

        powerups = sorted(world.powerups, key=dist2)
        for i in range(self.m_powerups):
            if i < len(powerups):
                p = powerups[i]
                parts += [
                    clamp((p.x - player.x) / cfg.width, -1, 1),
                    clamp((p.y - player.y) / cfg.height, -1, 1),
                    1.0 if p.type is PowerUpType.EXTRA_LIFE else -1.0,
                ]
            else:
                parts += [0.0] * 3

        return np.array(parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, int], terminated: bool) -> float:
        r = self.rewards
        reward = r["R_ALIVE"]
        reward += r["R_HIT"] * events["hit"]
        reward += r["R_KILL"] * events["kill"]
        reward += r["R_PICKUP"] * events["pickup"]
        reward -= r["R_DAMAGE"] * events["damage"]
        reward -= r["R_GROUND"] * events["ground"]
        reward -= r["R_SHOT"] * events["shot"]
        if terminated:
            reward -= r["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        world = self.game.world
        return {
            "score": world.score,
            "lives": world.lives,
            "difficulty": world.difficulty,
            "num_asteroids": len(world.asteroids),
            "num_bullets": len(world.bullets),
            "num_powerups": len(world.powerups),
            "asteroids_destroyed": self._totals["kills"],
            "damage_taken": self._totals["damage"],
            "powerups_collected": self._totals["pickups"],
            "asteroids_missed": self._totals["ground"],
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import StarbreakWindow
            self._window = StarbreakWindow(self.game, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True):
    """Run a random episode for testing"""
    env = StarbreakEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=42)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")
    env.close()


if __name__ == "__main__":
    run_random_episode(render=True)
