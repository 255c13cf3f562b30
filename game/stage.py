"""
Stage: the fixed-size playing field.
"""

from typing import Iterator

from .direction import Position


class Stage:
    """Grid bounds of the playing field."""

    def __init__(self, width: int, height: int):
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def cell_count(self) -> int:
        """Number of cells on the field."""
        return self._width * self._height

    def out_of_bounds(self, pos: Position) -> bool:
        """True if pos lies outside the field."""
        x, y = pos
        return x < 0 or x >= self._width or y < 0 or y >= self._height

    def cells(self) -> Iterator[Position]:
        """Iterates all cells row by row."""
        for y in range(self._height):
            for x in range(self._width):
                yield Position(x, y)

    def __repr__(self) -> str:
        return f"Stage({self._width}x{self._height})"
