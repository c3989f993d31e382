"""
ShooterEnv - headless driver for the cheese shooter
---------------------------------------------------
- Gymnasium API around a GameSession
- Time runs on a ManualScheduler, advanced by one frame per step
- MultiDiscrete action space: [move(3), fire(2)]
- Vector observation: player state + nearest sprites + nearest enemy projectiles
- Reward: score gained minus a penalty per life lost

Quick test:
    python -m game.parm.shooter_env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .session import GameSession, SessionState
from .simulation import InputIntent
from .timers import ManualScheduler
from .utils import clamp, seed_everything


class ShooterEnv(gym.Env):
    """The arcade game as a reinforcement-learning environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: float = 1280.0,
        height: float = 800.0,
        frame_ms: float = 1000 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_sprites: int = 4,
        k_projectiles: int = 5,
        life_penalty: float = 1.0,
        player_name: str = "agent",
        **session_kwargs,
    ):
        super().__init__()
        self.render_mode = render_mode
        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_sprites = k_sprites
        self.k_projectiles = k_projectiles
        self.life_penalty = life_penalty
        self.player_name = player_name

        self.scheduler = ManualScheduler()
        self.session = GameSession(
            width=width, height=height, scheduler=self.scheduler, **session_kwargs
        )

        # move: 0 stay, 1 left, 2 right
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: x(1) lives(1) fire_ready(1) drop_interval(1)
        # Each sprite: rel pos(2) direction(1)
        # Each projectile: rel pos(2)
        obs_dim = 4 + (self.k_sprites * 3) + (self.k_projectiles * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self.session.rng.seed(seed)

        self._step_count = 0
        self.session.reset()
        self.session.start(self.player_name)

        # Skip the countdown: one tick per value plus the GO tick
        s = self.session
        self.scheduler.advance(s.countdown_tick * (s.countdown_from + 1))

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire = int(action[0]), int(action[1])
        s = self.session
        score_before, lives_before = s.score, s.lives

        if fire:
            s.fire()
        s.update(InputIntent(move_left=move == 1, move_right=move == 2))
        self.scheduler.advance(self.frame_ms)

        reward = float(s.score - score_before) - self.life_penalty * (lives_before - s.lives)

        terminated = s.state is not SessionState.RUNNING
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        p = s.player
        px, py = p.center

        obs_parts = [
            clamp(px / s.width * 2 - 1, -1, 1),
            s.lives / max(1, s.initial_lives) * 2 - 1,
            1.0 if s.fire_ready else -1.0,
            clamp(s.drop_interval / s.difficulty.initial_interval * 2 - 1, -1, 1),
        ]

        def nearest(items):
            return sorted(items, key=lambda e: (e.center[0] - px) ** 2 + (e.center[1] - py) ** 2)

        sprites = nearest(s.sprites)
        for i in range(self.k_sprites):
            if i < len(sprites):
                sx, sy = sprites[i].center
                obs_parts += [
                    clamp((sx - px) / s.width, -1, 1),
                    clamp((sy - py) / s.height, -1, 1),
                    float(sprites[i].direction),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        projectiles = nearest(s.projectiles)
        for i in range(self.k_projectiles):
            if i < len(projectiles):
                ex, ey = projectiles[i].center
                obs_parts += [clamp((ex - px) / s.width, -1, 1), clamp((ey - py) / s.height, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "lives": s.lives,
            "state": s.state.value,
            "drop_interval": s.drop_interval,
            "num_sprites": len(s.sprites),
            "num_bullets": len(s.bullets),
            "num_projectiles": len(s.projectiles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None

        if self._window is None:
            from .window import ShooterWindow
            self._window = ShooterWindow(self.session, interactive=False)

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

def run_random_episode(seed: Optional[int] = 42, render: bool = False) -> Dict[str, Any]:
    """Play one episode with random actions"""
    env = ShooterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    env.close()
    info["return"] = total
    return info


if __name__ == "__main__":
    result = run_random_episode()
    print(f"Random episode: score={result['score']} lives={result['lives']} "
          f"steps={result['step']} return={result['return']:.2f}")
