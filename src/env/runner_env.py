# src/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.runner.config import WIDTH, HEIGHT, FPS
from src.runner.game import RunnerGame
from src.runner.render import draw_frame
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

NOOP, JUMP, DUCK = 0, 1, 2


class RunnerEnv(gym.Env):
    """
    Jump & Duck Runner as a Gymnasium environment (vector observations).
    - One simulation tick per frame, the agent acts every `frame_skip` frames.
    - Actions hold a key for the whole decision: 0 = NOOP, 1 = JUMP, 2 = DUCK.
      Switching action releases the previous key, so holding JUMP over several
      decisions gives the long (half gravity) jump.
    - Observation: shape (16,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(3)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.game: Optional[RunnerGame] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy: an explicit seed drives the obstacle generator directly;
        # otherwise draw one from np_random so the episode stays reproducible.
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))

        if self.game is None:
            self.game = RunnerGame(level_seed)
        else:
            self.game.reset(seed=level_seed)

        self.timestep = 0
        self.current_seed = self.game.seed

        obs = self._get_obs()
        info = self._info()
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None, "Call reset() before step()"
        action = int(action)
        game = self.game

        # Key state for the whole decision
        if action == JUMP:
            game.on_duck_released()
            game.on_jump_pressed()
        elif action == DUCK:
            game.on_jump_released()
            game.on_duck_pressed()
        else:
            game.on_jump_released()
            game.on_duck_released()

        score_before = game.state.score
        for _ in range(self.frame_skip):
            if not game.tick():
                break

        terminated = game.game_over
        reward = -1.0 if terminated else 1.0

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = self._get_obs()
        info = self._info()
        info["score_delta"] = game.state.score - score_before

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game.state)

    def _info(self) -> Dict[str, Any]:
        st = self.game.state
        return {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": st.score,
            "high_score": st.high_score,
            "game_speed": st.game_speed,
            "frame_count": st.frame_count,
            "grounded": st.player.grounded,
            "phase": st.phase,
            "obstacles_cleared": st.obstacles_cleared,
            "power_ups_collected": st.power_ups_collected,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.game is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Jump & Duck Runner - Gym Env")
                self.clock = pygame.time.Clock()
                self.font = pygame.font.SysFont("arial", 20)
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))

        draw_frame(self.screen, self.game.view(), self.font)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
