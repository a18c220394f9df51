# src/env/platformer_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, DIFFICULTIES, LOADING_TICKS
from src.game.controls import InputState, NO_INPUT
from src.game.render import Renderer
from src.game.modes import (
    tick, start_game, advance_level, LOADING, LEVEL_COMPLETE, GAME_OVER, VICTORY,
)
from src.game.world import WorldState, Settings, new_world
from src.env.observations import build_observation, OBS_SIZE

# Discrete actions -> held logical keys
ACTIONS = (
    InputState(),                           # 0 NOOP
    InputState(left=True),                  # 1 LEFT
    InputState(right=True),                 # 2 RIGHT
    InputState(jump=True),                  # 3 JUMP
    InputState(left=True, jump=True),       # 4 LEFT+JUMP
    InputState(right=True, jump=True),      # 5 RIGHT+JUMP
)


class PlatformerEnv(gym.Env):
    """
    Flag Catcher Gymnasium environment (vector observations).
    - Simulation at 60 ticks/s, one tick per frame as in the game.
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Loading screens are skipped and cleared levels auto-advance.
    - Reward: score gained / 100, minus 1 per life lost.
    - Terminates on game over or victory.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 difficulty: str = "normal",
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert difficulty in DIFFICULTIES, f"difficulty must be one of {DIFFICULTIES}"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.difficulty = difficulty

        self.sim_fps = 60
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(len(ACTIONS))
        self.observation_space = gym.spaces.Box(
            low=-1.0, high=1.0, shape=(OBS_SIZE,), dtype=np.float32
        )

        self.state: Optional[WorldState] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)
        # seed=None -> particle spray seeded from the OS, like LevelGen(None)
        self.current_seed = int(seed) if seed is not None else None

        self.state = new_world(Settings(difficulty=self.difficulty, sound_enabled=False),
                               seed=self.current_seed)
        start_game(self.state)
        self._skip_loading()
        self.timestep = 0

        obs = build_observation(self.state)
        info = self._info()
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "Call reset() before step()"
        st = self.state
        inputs = ACTIONS[int(action)]

        score0, lives0 = st.score, st.lives
        levels_cleared = 0
        for _ in range(self.frame_skip):
            tick(st, inputs)
            if st.mode == LEVEL_COMPLETE:
                levels_cleared += 1
                advance_level(st)
                self._skip_loading()
            if st.mode in (GAME_OVER, VICTORY):
                break

        reward = (st.score - score0) / 100.0 - (lives0 - st.lives)

        self.timestep += 1
        terminated = st.mode in (GAME_OVER, VICTORY)
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = build_observation(st)
        info = self._info()
        info["levels_cleared"] = levels_cleared

        if self.render_mode == "human":
            self.render()
        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _skip_loading(self):
        st = self.state
        for _ in range(LOADING_TICKS):
            if st.mode != LOADING:
                break
            tick(st, NO_INPUT)

    def _info(self) -> Dict[str, Any]:
        st = self.state
        return {
            "seed": self.current_seed,
            "mode": st.mode,
            "score": st.score,
            "lives": st.lives,
            "level": st.level,
            "markers_collected": st.markers_collected,
            "timestep": self.timestep,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None
        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Flag Catcher - Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.renderer = Renderer(self.screen)

        self.renderer.draw(self.state)

        if self.render_mode == "human":
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
