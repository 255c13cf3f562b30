"""
Simulation engine: ties stage, snake and food into a step/reset state machine.
"""

import logging
from enum import Enum, IntEnum, auto
from typing import Optional, Tuple, Union

import numpy as np

from .direction import Action, Direction, Position, turn
from .food import place_food
from .snake import Snake
from .stage import Stage

logger = logging.getLogger(__name__)

MIN_GRID_SIDE = 4


class CellType(IntEnum):
    """Cell tags stored in the board view."""
    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Outcome(Enum):
    """Result of a single step."""
    MOVED = auto()
    ATE = auto()
    DIED = auto()
    WON = auto()


class Game:
    """
    Snake game on a fixed grid.

    Rewards:
        - Each move: -1
        - Food: +cell_count
        - Death (wall/body): -(score - cell_count)
        - Board filled: +cell_count

    The score starts at cell_count on every reset and follows the same
    arithmetic. max_score is a high-water mark kept for the lifetime of the
    engine; reset() does not touch it.

    The view is a (height, width) int8 array indexed view[y, x] holding
    CellType values. Every view handed out is a copy.
    """

    def __init__(
        self,
        grid_size: Tuple[int, int] = (16, 16),
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            grid_size: field size (width, height)
            rng: random generator (takes precedence over seed)
            seed: seed for a fresh generator
        """
        width, height = grid_size
        if width < MIN_GRID_SIDE or height < MIN_GRID_SIDE:
            raise ValueError(
                f"grid must be at least {MIN_GRID_SIDE}x{MIN_GRID_SIDE}, "
                f"got {width}x{height}"
            )

        self.stage = Stage(width, height)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self._max_score = self.stage.cell_count
        self._state = np.zeros((height, width), dtype=np.int8)

        self._new_episode()

    # ------------------------------------------------------------------
    # Read-only accessors

    @property
    def score(self) -> int:
        return self._score

    @property
    def max_score(self) -> int:
        return self._max_score

    @property
    def length(self) -> int:
        return self._snake.length

    @property
    def width(self) -> int:
        return self.stage.width

    @property
    def height(self) -> int:
        return self.stage.height

    @property
    def grid_size(self) -> Tuple[int, int]:
        return (self.stage.width, self.stage.height)

    @property
    def cell_count(self) -> int:
        return self.stage.cell_count

    @property
    def direction(self) -> Direction:
        return self._snake.direction

    @property
    def head(self) -> Position:
        return self._snake.head

    @property
    def body(self) -> Tuple[Position, ...]:
        """Snapshot of the snake body, head first."""
        return tuple(self._snake.body)

    @property
    def food(self) -> Optional[Position]:
        return self._food

    @property
    def last_outcome(self) -> Optional[Outcome]:
        """Outcome of the latest step (None right after a reset)."""
        return self._last_outcome

    @property
    def view(self) -> np.ndarray:
        return self._state.copy()

    # ------------------------------------------------------------------

    def step(self, action: Union[Action, int]) -> Tuple[np.ndarray, int, bool]:
        """
        Executes one step.

        Args:
            action: 0=forward, 1=turn left, 2=turn right

        Returns:
            view: board after the step
            reward: reward for the step
            terminal: whether the episode ended (death or full board)
        """
        cell_count = self.stage.cell_count

        self._snake.direction = turn(self._snake.direction, action)
        candidate = self._snake.next_head()

        terminal = False
        if self._snake.length >= cell_count:
            outcome = Outcome.WON
            reward = cell_count
            terminal = True
        elif self.stage.out_of_bounds(candidate) or self._snake.contains(candidate):
            outcome = Outcome.DIED
            reward = -(self._score - cell_count)
            terminal = True
        elif candidate == self._food:
            outcome = Outcome.ATE
            self._snake.grow(candidate)
            self._food = place_food(self._snake, self.stage, self.rng)
            self._score += cell_count
            reward = cell_count
        else:
            outcome = Outcome.MOVED
            self._snake.advance(candidate)
            self._score -= 1
            reward = -1

        self._last_outcome = outcome

        if self._score > self._max_score:
            self._max_score = self._score
            logger.info("new max score = %d", self._score)

        return self._update_state(), reward, terminal

    def reset(self) -> np.ndarray:
        """Starts a new episode with a fresh snake and food. Keeps max_score."""
        self._new_episode()
        logger.debug("reset: head=%s food=%s", self._snake.head, self._food)
        return self._state.copy()

    def _new_episode(self) -> None:
        self._snake = Snake.spawn(self.stage, self.rng)
        self._food = place_food(self._snake, self.stage, self.rng)
        self._score = self.stage.cell_count
        self._last_outcome: Optional[Outcome] = None
        self._update_state()

    def _update_state(self) -> np.ndarray:
        """Rebuilds the board view from snake and food."""
        self._state.fill(CellType.EMPTY)
        for x, y in self._snake.body:
            self._state[y, x] = CellType.SNAKE
        if self._food is not None:
            self._state[self._food.y, self._food.x] = CellType.FOOD
        return self._state.copy()

    def __repr__(self) -> str:
        return (f"Game({self.width}x{self.height}, length={self.length}, "
                f"score={self._score}, max_score={self._max_score})")
