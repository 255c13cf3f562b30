import gymnasium

from .snake_env import GridSnakeEnv, make_env

gymnasium.register(
    id="GridSnake-v0",
    entry_point="env.snake_env:GridSnakeEnv",
)
