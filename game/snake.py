"""
Module with the Snake class.
"""

from collections import deque
from typing import Iterator, Optional, Tuple

import numpy as np

from .direction import Direction, Position, step
from .stage import Stage


class Snake:
    """
    Snake body and heading.

    The body is a deque [head, ..., tail]. Nothing here validates bounds
    or self-overlap; the engine checks a candidate cell before calling
    grow() or advance().
    """

    def __init__(self, head: Tuple[int, int], direction: Direction = Direction.UP):
        """
        Args:
            head: initial head position (x, y)
            direction: initial heading
        """
        self.direction = direction
        self.body: deque = deque([Position(*head)])

    @classmethod
    def spawn(cls, stage: Stage, rng: np.random.Generator) -> "Snake":
        """
        Creates a length-2 snake inside the central half of the stage.

        The head is drawn at random, then the snake is grown once one
        cell forward so it starts with a neck behind the head.
        """
        x = int(rng.integers(stage.width // 2)) + stage.width // 4
        y = int(rng.integers(stage.height // 2)) + stage.height // 4

        snake = cls((x, y), Direction.UP)
        snake.grow(snake.next_head())
        return snake

    @property
    def head(self) -> Position:
        """Head position."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        """Tail position."""
        return self.body[-1]

    @property
    def length(self) -> int:
        """Snake length."""
        return len(self.body)

    def next_head(self, direction: Optional[Direction] = None) -> Position:
        """Cell the head would move into (current heading by default)."""
        return step(self.head, direction or self.direction)

    def contains(self, pos: Tuple[int, int]) -> bool:
        """True if any segment occupies pos."""
        for segment in self.body:
            if segment == pos:
                return True
        return False

    def grow(self, pos: Tuple[int, int]) -> None:
        """Pushes pos as the new head, keeping the tail."""
        self.body.appendleft(Position(*pos))

    def advance(self, pos: Tuple[int, int]) -> None:
        """Pushes pos as the new head and drops the tail."""
        self.body.pop()
        self.body.appendleft(Position(*pos))

    def __contains__(self, pos) -> bool:
        return self.contains(pos)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.body)

    def __len__(self) -> int:
        return len(self.body)
