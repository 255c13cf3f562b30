"""
Unit tests for the Game engine (step/reset state machine).
"""

import logging
import pytest
import numpy as np
from collections import deque

from game.direction import Position, Direction, Action
from game.engine import Game, CellType, Outcome
from game.snake import Snake


def serpentine(width, height):
    """All cells of a grid as one continuous path, row by row."""
    cells = []
    for y in range(height):
        xs = range(width) if y % 2 == 0 else range(width - 1, -1, -1)
        cells.extend(Position(x, y) for x in xs)
    return cells


def set_state(game, body, direction=Direction.UP, food=(0, 0)):
    """Puts the game into an explicit state."""
    snake = Snake(body[0], direction)
    snake.body = deque(Position(*p) for p in body)
    game._snake = snake
    game._food = Position(*food) if food is not None else None
    game._update_state()
    return game


class TestGameInit:
    def setup_method(self):
        self.game = Game(seed=0)

    def test_defaults(self):
        assert self.game.grid_size == (16, 16)
        assert self.game.width == 16
        assert self.game.height == 16
        assert self.game.cell_count == 256

    def test_initial_score(self):
        assert self.game.score == 256
        assert self.game.max_score == 256

    def test_initial_snake(self):
        assert self.game.length == 2
        assert self.game.direction == Direction.UP
        assert self.game.last_outcome is None

    def test_food_not_on_snake(self):
        assert self.game.food is not None
        assert self.game.food not in self.game.body

    def test_view(self):
        view = self.game.view
        assert view.shape == (16, 16)
        assert view.dtype == np.int8
        assert (view == CellType.SNAKE).sum() == 2
        assert (view == CellType.FOOD).sum() == 1
        fx, fy = self.game.food
        assert view[fy, fx] == CellType.FOOD
        for x, y in self.game.body:
            assert view[y, x] == CellType.SNAKE

    def test_non_square_grid(self):
        game = Game(grid_size=(10, 6), seed=1)
        assert game.view.shape == (6, 10)
        assert game.cell_count == 60
        assert game.score == 60

    @pytest.mark.parametrize("grid_size", [(3, 16), (16, 2), (0, 0)])
    def test_grid_too_small(self, grid_size):
        with pytest.raises(ValueError):
            Game(grid_size=grid_size)

    def test_invalid_action(self):
        with pytest.raises(ValueError):
            self.game.step(5)


class TestGameStep:
    def setup_method(self):
        self.game = set_state(Game(seed=0), [(8, 8), (8, 9)], food=(0, 0))

    def test_moved(self):
        view, reward, terminal = self.game.step(Action.FORWARD)
        assert reward == -1
        assert terminal is False
        assert self.game.score == 255
        assert self.game.length == 2
        assert self.game.last_outcome == Outcome.MOVED
        assert self.game.body == ((8, 7), (8, 8))
        assert view[7, 8] == CellType.SNAKE
        assert view[9, 8] == CellType.EMPTY
        assert view[0, 0] == CellType.FOOD

    def test_turns(self):
        self.game.step(Action.TURN_LEFT)
        assert self.game.direction == Direction.LEFT
        assert self.game.head == (7, 8)
        self.game.step(Action.TURN_RIGHT)
        assert self.game.direction == Direction.UP
        assert self.game.head == (7, 7)

    def test_int_actions(self):
        self.game.step(2)
        assert self.game.direction == Direction.RIGHT
        assert self.game.head == (9, 8)

    def test_ate(self):
        set_state(self.game, [(8, 8), (8, 9)], food=(8, 6))
        self.game.step(Action.FORWARD)
        view, reward, terminal = self.game.step(Action.FORWARD)
        assert reward == 256
        assert terminal is False
        assert self.game.score == 511
        assert self.game.length == 3
        assert self.game.last_outcome == Outcome.ATE
        assert self.game.body == ((8, 6), (8, 7), (8, 8))

        food = self.game.food
        assert food is not None
        assert food not in self.game.body
        assert view[food.y, food.x] == CellType.FOOD
        assert (view == CellType.FOOD).sum() == 1
        assert (view == CellType.SNAKE).sum() == 3

    def test_max_score_tracks_eating(self):
        set_state(self.game, [(8, 8), (8, 9)], food=(8, 7))
        self.game.step(Action.FORWARD)
        assert self.game.max_score == 512

    def test_new_max_score_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="game.engine")
        set_state(self.game, [(8, 8), (8, 9)], food=(8, 7))
        self.game.step(Action.FORWARD)
        assert "new max score = 512" in caplog.text

    def test_died_on_wall(self):
        set_state(self.game, [(8, 2), (8, 3)], food=(0, 15))
        self.game.step(Action.FORWARD)
        self.game.step(Action.FORWARD)
        assert self.game.head == (8, 0)
        assert self.game.score == 254

        view, reward, terminal = self.game.step(Action.FORWARD)
        assert terminal is True
        assert reward == -(254 - 256)
        assert self.game.last_outcome == Outcome.DIED
        # Board is left as it was before the fatal move
        assert self.game.body == ((8, 0), (8, 1))
        assert self.game.score == 254
        assert view[0, 8] == CellType.SNAKE

    @pytest.mark.parametrize("body,direction,action", [
        ([(0, 5), (1, 5)], Direction.LEFT, Action.FORWARD),
        ([(15, 5), (14, 5)], Direction.RIGHT, Action.FORWARD),
        ([(5, 15), (5, 14)], Direction.DOWN, Action.FORWARD),
        ([(5, 0), (5, 1)], Direction.UP, Action.FORWARD),
        ([(0, 5), (0, 6)], Direction.UP, Action.TURN_LEFT),
    ])
    def test_died_on_each_wall(self, body, direction, action):
        set_state(self.game, body, direction, food=(8, 8))
        _, reward, terminal = self.game.step(action)
        assert terminal is True
        assert reward == 0
        assert self.game.last_outcome == Outcome.DIED

    def test_died_reward_after_eating(self):
        set_state(self.game, [(8, 1), (8, 2)], food=(8, 0))
        self.game.step(Action.FORWARD)
        assert self.game.score == 512
        _, reward, terminal = self.game.step(Action.FORWARD)
        assert terminal is True
        assert reward == -256

    def test_died_on_self(self):
        body = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        set_state(self.game, body, Direction.LEFT, food=(0, 0))
        # LEFT turned left is DOWN, into (5, 6)
        view, reward, terminal = self.game.step(Action.TURN_LEFT)
        assert terminal is True
        assert self.game.last_outcome == Outcome.DIED
        assert reward == 0
        assert self.game.body == tuple(body)
        assert self.game.length == 5

    def test_moving_into_tail_cell_dies(self):
        body = [(5, 5), (6, 5), (6, 6), (5, 6)]
        set_state(self.game, body, Direction.LEFT, food=(0, 0))
        _, _, terminal = self.game.step(Action.TURN_LEFT)
        assert terminal is True

    def test_won(self):
        game = set_state(Game(grid_size=(4, 4), seed=0), serpentine(4, 4), food=None)
        body = game.body
        view, reward, terminal = game.step(Action.FORWARD)
        assert terminal is True
        assert reward == 16
        assert game.last_outcome == Outcome.WON
        assert game.body == body
        assert game.score == 16

    @pytest.mark.parametrize("action", list(Action))
    def test_won_full_default_grid(self, action):
        game = set_state(Game(seed=0), serpentine(16, 16), food=None)
        assert game.length == 256
        _, reward, terminal = game.step(action)
        assert terminal is True
        assert reward == 256

    def test_eating_last_cell(self):
        # 4x4 board: serpentine ends at (0, 3); snake holds all but that cell
        cells = serpentine(4, 4)
        body = list(reversed(cells[:-1]))
        game = set_state(Game(grid_size=(4, 4), seed=0), body, Direction.LEFT, food=cells[-1])
        assert game.head == (1, 3)

        view, reward, terminal = game.step(Action.FORWARD)
        assert reward == 16
        assert terminal is False
        assert game.length == 16
        assert game.food is None
        assert (view == CellType.SNAKE).all()

        _, reward, terminal = game.step(Action.FORWARD)
        assert terminal is True
        assert reward == 16
        assert game.last_outcome == Outcome.WON

    def test_score_can_drop_below_baseline(self):
        game = set_state(Game(grid_size=(8, 8), seed=0), [(0, 0)], Direction.UP, food=(7, 7))
        # Circle the top-left 2x2 block without eating
        moves = [Action.TURN_RIGHT] * 80
        for action in moves:
            _, _, terminal = game.step(action)
            assert terminal is False
        assert game.score == 64 - len(moves)
        assert game.score < 0

        set_state(game, [(0, 0)], Direction.UP, food=(7, 7))
        _, reward, terminal = game.step(Action.FORWARD)
        assert terminal is True
        assert reward == len(moves)


class TestGameReset:
    def test_reset(self):
        game = set_state(Game(seed=3), [(8, 8), (8, 9)], food=(8, 7))
        game.step(Action.FORWARD)
        max_score = game.max_score
        assert max_score == 512

        view = game.reset()
        assert game.score == 256
        assert game.length == 2
        assert game.max_score == max_score
        assert game.last_outcome is None
        assert game.food not in game.body
        assert (view == CellType.SNAKE).sum() == 2
        assert (view == CellType.FOOD).sum() == 1

    def test_reset_clears_stale_cells(self):
        game = Game(seed=4)
        for _ in range(3):
            game.step(Action.FORWARD)
        view = game.reset()
        assert (view == CellType.SNAKE).sum() == game.length


class TestGameProperties:
    def test_view_is_snapshot(self):
        game = set_state(Game(seed=0), [(8, 8), (8, 9)], food=(0, 0))
        view, _, _ = game.step(Action.FORWARD)
        view[:] = 9
        assert game.view.max() <= CellType.FOOD
        assert (game.view == CellType.SNAKE).sum() == 2

    def test_body_is_snapshot(self):
        game = Game(seed=0)
        body = game.body
        assert isinstance(body, tuple)
        assert game.length == len(body)

    def test_deterministic_given_seed(self):
        rng = np.random.default_rng(99)
        actions = [int(a) for a in rng.integers(0, 3, size=300)]

        results = []
        for _ in range(2):
            game = Game(seed=42)
            trace = []
            for action in actions:
                view, reward, terminal = game.step(action)
                trace.append((view.tobytes(), reward, terminal, game.food))
                if terminal:
                    game.reset()
            results.append(trace)

        assert results[0] == results[1]

    def test_random_play_invariants(self):
        game = Game(grid_size=(8, 8), seed=5)
        rng = np.random.default_rng(5)
        max_score = game.max_score

        for _ in range(3000):
            score = game.score
            length = game.length
            _, reward, terminal = game.step(int(rng.integers(0, 3)))

            assert game.max_score >= max_score
            max_score = game.max_score

            if terminal:
                if game.last_outcome == Outcome.DIED:
                    assert reward == -(score - 64)
                game.reset()
                assert game.max_score == max_score
                continue

            body = game.body
            assert len(set(body)) == len(body)
            assert all(0 <= x < 8 and 0 <= y < 8 for x, y in body)
            assert game.food is None or game.food not in body
            if game.last_outcome == Outcome.ATE:
                assert reward == 64
                assert game.length == length + 1
                assert game.score == score + 64
            else:
                assert reward == -1
                assert game.length == length
                assert game.score == score - 1
