"""
Grid coordinates, headings and relative turn commands.
"""

from enum import Enum
from typing import NamedTuple, Union


class Position(NamedTuple):
    """Grid cell (x, y). May hold out-of-range values before validation."""
    x: int
    y: int


class Direction(Enum):
    """Movement directions."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


class Action(Enum):
    """Agent actions (relative to current heading)."""
    FORWARD = 0     # Keep heading
    TURN_LEFT = 1   # Rotate 90 degrees counter-clockwise
    TURN_RIGHT = 2  # Rotate 90 degrees clockwise


# Turn mapping: current direction -> new direction on turn
TURN_LEFT_MAP = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
}

TURN_RIGHT_MAP = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}


def turn(current: Direction, action: Union[Action, int]) -> Direction:
    """
    Resolves the heading after applying a relative command.

    Args:
        current: current heading
        action: Action or its integer value

    Returns:
        New heading (FORWARD keeps the current one)
    """
    action = Action(action)
    if action == Action.TURN_LEFT:
        return TURN_LEFT_MAP[current]
    if action == Action.TURN_RIGHT:
        return TURN_RIGHT_MAP[current]
    return current


def step(pos: Position, direction: Direction) -> Position:
    """Offsets pos by one cell in direction."""
    dx, dy = direction.value
    return Position(pos[0] + dx, pos[1] + dy)
