"""
Gymnasium environment for grid snake.
"""

import gymnasium as gym
from gymnasium import spaces
import numpy as np
from typing import Optional, Tuple, Dict, Any

from game.direction import Action
from game.engine import Game, CellType


class GridSnakeEnv(gym.Env):
    """
    Gymnasium wrapper around the Game engine.

    Observations:
        (height, width) int8 board: 0=empty, 1=snake, 2=food

    Actions:
        0: Move forward
        1: Turn left
        2: Turn right

    Rewards (cell_count = width * height):
        - Each step: -1
        - Food: +cell_count
        - Death (wall/body): -(score - cell_count)
        - Full board: +cell_count
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 16}

    def __init__(
        self,
        grid_size: Tuple[int, int] = (16, 16),
        max_steps: Optional[int] = None,
        render_mode: Optional[str] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            grid_size: field size (width, height)
            max_steps: max steps per episode (None = unlimited)
            render_mode: rendering mode
            seed: seed for the first reset() called without one
        """
        super().__init__()

        self.grid_size = tuple(grid_size)
        self.max_steps = max_steps
        self.render_mode = render_mode
        self._pending_seed = seed

        self.action_space = spaces.Discrete(len(Action))
        self.observation_space = spaces.Box(
            low=int(CellType.EMPTY), high=int(CellType.FOOD),
            shape=(self.grid_size[1], self.grid_size[0]),
            dtype=np.int8,
        )

        # One engine per env so max_score survives episode resets
        self.game = Game(grid_size=self.grid_size, rng=self.np_random)
        self.steps: int = 0

        # Renderer (initialized on first render)
        self.renderer = None

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Resets environment to initial state.

        Returns:
            observation: initial board
            info: additional information
        """
        if seed is None:
            seed = self._pending_seed
        self._pending_seed = None
        super().reset(seed=seed)

        self.game.rng = self.np_random
        self.steps = 0
        observation = self.game.reset()

        if self.render_mode == "human":
            self.render()

        return observation, self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Executes one step.

        Args:
            action: 0=forward, 1=left, 2=right

        Returns:
            observation: new board
            reward: reward
            terminated: whether game ended (death or full board)
            truncated: whether truncated (max_steps)
            info: additional information
        """
        self.steps += 1
        observation, reward, terminated = self.game.step(Action(int(action)))

        truncated = (
            not terminated
            and self.max_steps is not None
            and self.steps >= self.max_steps
        )

        if self.render_mode == "human":
            self.render()

        return observation, float(reward), terminated, truncated, self._get_info()

    def _get_info(self) -> Dict[str, Any]:
        """Returns additional information."""
        outcome = self.game.last_outcome
        return {
            "score": self.game.score,
            "max_score": self.game.max_score,
            "length": self.game.length,
            "steps": self.steps,
            "outcome": outcome.name if outcome is not None else None,
        }

    def render(self):
        """Renders current state."""
        if self.render_mode is None:
            return None

        if self.renderer is None:
            from .renderer import Renderer
            self.renderer = Renderer(
                grid_size=self.grid_size,
                render_mode=self.render_mode,
                speed=self.metadata["render_fps"],
                fps=self.metadata["render_fps"],
            )

        return self.renderer.render(self.game)

    def close(self):
        """Closes environment."""
        if self.renderer:
            self.renderer.close()
            self.renderer = None


def make_env(config: dict, render_mode: Optional[str] = None) -> GridSnakeEnv:
    """Creates environment from config."""
    return GridSnakeEnv(
        grid_size=tuple(config["game"]["grid_size"]),
        max_steps=config["env"].get("max_steps"),
        render_mode=render_mode,
        seed=config["game"].get("seed"),
    )
