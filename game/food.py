"""
Procedural food placement.

A random cell is drawn from the search region. When it lands on the snake,
the search narrows to the quadrant of the region holding the snake's tail,
where free cells are most likely to remain on a crowded board. Regions that
cannot be bisected any further fall back to a uniform choice over all free
cells, so placement always terminates.
"""

import logging
from typing import List, NamedTuple, Optional

import numpy as np

from .direction import Position
from .snake import Snake
from .stage import Stage

logger = logging.getLogger(__name__)


class Region(NamedTuple):
    """Axis-aligned search area (offset and size, in cells)."""
    x: int
    y: int
    width: int
    height: int

    def contains(self, pos) -> bool:
        return (self.x <= pos[0] < self.x + self.width
                and self.y <= pos[1] < self.y + self.height)

    def quadrants(self) -> List["Region"]:
        """Bisects both axes; order (0,0), (0,1), (1,0), (1,1) with i on x."""
        half_w = self.width // 2
        half_h = self.height // 2
        return [
            Region(self.x + i * half_w, self.y + j * half_h, half_w, half_h)
            for i in range(2)
            for j in range(2)
        ]


def place_food(
    snake: Snake,
    stage: Stage,
    rng: np.random.Generator,
    region: Optional[Region] = None,
) -> Optional[Position]:
    """
    Picks a cell for the food that is not occupied by the snake.

    Args:
        snake: current snake (its tail steers the search)
        stage: playing field
        rng: random generator
        region: search area (whole stage by default)

    Returns:
        Free position, or None if the snake covers the whole stage
    """
    if snake.length >= stage.cell_count:
        return None

    if region is None:
        region = Region(0, 0, stage.width, stage.height)

    while True:
        pos = Position(
            region.x + int(rng.integers(region.width)),
            region.y + int(rng.integers(region.height)),
        )
        if not snake.contains(pos):
            return pos

        next_region = None
        if region.width >= 2 and region.height >= 2:
            for quadrant in region.quadrants():
                if quadrant.contains(snake.tail):
                    next_region = quadrant
                    break

        if next_region is None:
            logger.debug("food search exhausted at %s, scanning free cells", region)
            return _random_free_cell(snake, stage, rng)

        region = next_region


def _random_free_cell(
    snake: Snake, stage: Stage, rng: np.random.Generator
) -> Optional[Position]:
    """Uniform choice among all free cells of the stage."""
    occupied = set(snake.body)
    free = [pos for pos in stage.cells() if pos not in occupied]
    if not free:
        return None
    return free[int(rng.integers(len(free)))]
