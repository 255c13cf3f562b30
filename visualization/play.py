"""
Interactive Pygame loop for playing grid snake by hand.

Arrow keys LEFT/RIGHT turn the snake relative to its heading; ESC quits.
The simulation advances at a fixed tick rate independent of the display
frame rate.

Usage:
    python -m visualization.play
    python -m visualization.play --config configs/game.yaml
"""

import argparse
from collections import deque

import pygame

from game.config import load_config, make_game
from game.direction import Action
from env.renderer import Renderer


KEY_ACTIONS = {
    pygame.K_LEFT: Action.TURN_LEFT,
    pygame.K_RIGHT: Action.TURN_RIGHT,
}


class Controller:
    """
    Turns key presses into the action for the next simulation tick.

    At most one action is pending per tick: a later press before the tick
    replaces an earlier one. FORWARD when nothing is pending.
    """

    def __init__(self):
        self.actions: deque = deque(maxlen=1)

    def track_key(self, key: int) -> None:
        """Makes the action bound to key pending, if any."""
        action = KEY_ACTIONS.get(key)
        if action is not None:
            self.actions.append(action)

    def next_action(self) -> Action:
        """Pops the pending action."""
        if self.actions:
            return self.actions.popleft()
        return Action.FORWARD

    def clear(self) -> None:
        self.actions.clear()


class Ticker:
    """Signals a simulation tick every fps // speed frames."""

    def __init__(self, fps: int, speed: int):
        if fps <= 0 or speed <= 0:
            raise ValueError("fps and speed must be positive")
        self.frames_per_tick = max(1, fps // speed)
        self.frame = 0

    def tick(self) -> bool:
        """Advances one frame; True when the simulation should step."""
        self.frame += 1
        if self.frame >= self.frames_per_tick:
            self.frame = 0
            return True
        return False


def run(config: dict) -> None:
    """Main play loop."""
    play_config = config["play"]

    game = make_game(config)
    renderer = Renderer(
        grid_size=game.grid_size,
        cell_size=play_config["cell_size"],
        render_mode="human",
        speed=play_config["speed"],
        fps=play_config["fps"],
    )
    controller = Controller()
    ticker = Ticker(play_config["fps"], play_config["speed"])

    episodes = 0
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    controller.track_key(event.key)

        if running and ticker.tick():
            _, _, terminal = game.step(controller.next_action())
            if terminal:
                episodes += 1
                print(f"Episode {episodes}: {game.last_outcome.name.lower()}, "
                      f"length {game.length}, score {game.score}")
                game.reset()
                controller.clear()

        renderer.render(game)

    renderer.close()
    print(f"Max score: {game.max_score}")


def main():
    parser = argparse.ArgumentParser(description="Play grid snake")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to game config YAML (default: built-in defaults)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Override game seed")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config["game"]["seed"] = args.seed

    run(config)


if __name__ == "__main__":
    main()
