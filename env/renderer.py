"""
Pygame renderer for game visualization.
"""

import pygame
import numpy as np
from typing import Tuple, Optional

from game.direction import Direction
from game.engine import Game


class Renderer:
    """Game visualization using Pygame."""

    # Colors
    COLORS = {
        "background": (0, 0, 0),
        "border": (105, 105, 105),
        "snake_head": (0, 160, 60),
        "snake_body": (0, 117, 44),
        "food": (230, 41, 55),
        "text": (255, 255, 255),
    }

    PANEL_WIDTH = 180

    def __init__(
        self,
        grid_size: Tuple[int, int],
        cell_size: int = 24,
        render_mode: str = "human",
        speed: Optional[int] = None,
        fps: Optional[int] = None,
    ):
        """
        Args:
            grid_size: field size (width, height)
            cell_size: cell size in pixels
            render_mode: "human" or "rgb_array"
            speed: simulation ticks per second, shown in the info panel
            fps: frame rate cap in human mode (None = uncapped)
        """
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.render_mode = render_mode
        self.speed = speed
        self.fps = fps

        # Info panel on the left, board on the right
        self.grid_x = self.PANEL_WIDTH
        self.grid_y = cell_size
        self.window_width = self.PANEL_WIDTH + (grid_size[0] + 1) * cell_size
        self.window_height = (grid_size[1] + 2) * cell_size

        pygame.init()
        pygame.display.set_caption("Snake game")

        if render_mode == "human":
            self.screen = pygame.display.set_mode(
                (self.window_width, self.window_height)
            )
        else:
            self.screen = pygame.Surface(
                (self.window_width, self.window_height)
            )

        self.font = pygame.font.Font(None, 24)
        self.clock = pygame.time.Clock()

    def render(self, game: Game) -> Optional[np.ndarray]:
        """
        Renders current game state.

        Returns:
            RGB array if render_mode == "rgb_array", otherwise None
        """
        self.screen.fill(self.COLORS["background"])

        self._draw_border()

        if game.food is not None:
            self._draw_food(*game.food)

        self._draw_snake(game)
        self._draw_info(game)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.fps:
                self.clock.tick(self.fps)
            return None
        else:
            return np.transpose(
                pygame.surfarray.array3d(self.screen),
                (1, 0, 2)
            )

    def _draw_border(self):
        """Draws the stage outline."""
        rect = pygame.Rect(
            self.grid_x - 1,
            self.grid_y - 1,
            self.grid_size[0] * self.cell_size + 2,
            self.grid_size[1] * self.cell_size + 2,
        )
        pygame.draw.rect(self.screen, self.COLORS["border"], rect, width=1)

    def _cell_rect(self, x: int, y: int, margin: int = 1) -> pygame.Rect:
        return pygame.Rect(
            self.grid_x + x * self.cell_size + margin,
            self.grid_y + y * self.cell_size + margin,
            self.cell_size - 2 * margin,
            self.cell_size - 2 * margin
        )

    def _draw_snake(self, game: Game):
        """Draws snake."""
        body = game.body
        for i, (x, y) in enumerate(body):
            if i == 0:
                self.screen.fill(self.COLORS["snake_head"], self._cell_rect(x, y))
                self._draw_eyes(x, y, game.direction)
            else:
                ratio = i / len(body)
                color = self._interpolate_color(
                    self.COLORS["snake_body"],
                    (0, 70, 30),
                    ratio
                )
                self.screen.fill(color, self._cell_rect(x, y))

    def _draw_eyes(self, x: int, y: int, direction: Direction):
        """Draws snake eyes facing the heading."""
        cx = self.grid_x + x * self.cell_size + self.cell_size // 2
        cy = self.grid_y + y * self.cell_size + self.cell_size // 2
        dx, dy = direction.value
        offset = self.cell_size // 4

        # Two eyes placed either side of the heading axis
        for side in (-1, 1):
            ex = cx + dx * offset + side * dy * offset
            ey = cy + dy * offset + side * dx * offset
            pygame.draw.circle(self.screen, (255, 255, 255), (ex, ey), 2)

    def _draw_food(self, x: int, y: int):
        """Draws the food item."""
        self.screen.fill(self.COLORS["food"], self._cell_rect(x, y))

    def _draw_info(self, game: Game):
        """Draws info panel."""
        texts = [
            f"size {game.width}x{game.height}",
            f"speed {self.speed if self.speed is not None else '-'}",
            f"snake {game.length}",
            f"score {game.score}",
            f"max score {game.max_score}",
        ]

        for i, text in enumerate(texts):
            surface = self.font.render(text, True, self.COLORS["text"])
            self.screen.blit(surface, (18, 18 + i * 22))

    def _interpolate_color(
        self,
        color1: Tuple[int, int, int],
        color2: Tuple[int, int, int],
        ratio: float
    ) -> Tuple[int, int, int]:
        """Interpolates between two colors."""
        return tuple(
            int(c1 + (c2 - c1) * ratio)
            for c1, c2 in zip(color1, color2)
        )

    def close(self):
        """Closes pygame."""
        pygame.quit()
