from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_tiles.game import Action, FallingTilesGame, GameConfig, overlay_float
from falling_tiles.visualization.renderer import cell_colors


# Discrete action index -> engine action; the last index is a no-op
ACTIONS: Tuple[Optional[Action], ...] = (Action.LEFT, Action.RIGHT, Action.DROP, Action.ROTATE, None)

FLOAT_VALUE = 2


class FallingTilesEnv(gym.Env):
    """One env step = the chosen action followed by one full simulation step."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
    ) -> None:
        super().__init__()
        self.game = FallingTilesGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        width, height = self.game.config.width, self.game.config.height
        self.observation_space = spaces.Box(low=0, high=FLOAT_VALUE, shape=(width, height), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return overlay_float(self.game.board, self.game.float, value=FLOAT_VALUE).astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "rows_cleared": self.game.rows_cleared,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        chosen = ACTIONS[int(action)]
        if chosen is not None:
            self.game.queue_action(chosen)

        rows_before = self.game.rows_cleared
        self.game.advance()
        self._steps += 1

        reward = float(self.game.rows_cleared - rows_before)
        terminated = self.game.game_over
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        colors = cell_colors(self.game.snapshot())
        # (width, height, 3) -> image rows are board rows
        image = np.transpose(colors, (1, 0, 2))
        return np.repeat(np.repeat(image, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
