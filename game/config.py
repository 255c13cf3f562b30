"""
Configuration loading.

Configs are plain dicts read from YAML and merged over DEFAULT_CONFIG, so a
file only needs the keys it changes.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .engine import MIN_GRID_SIDE, Game

DEFAULT_CONFIG: Dict[str, Any] = {
    "game": {
        "grid_size": [16, 16],
        "seed": None,
    },
    "env": {
        "max_steps": None,
    },
    "play": {
        "fps": 120,
        "speed": 16,
        "cell_size": 24,
    },
    "rollout": {
        "episodes": 100,
        "seed": 0,
    },
}


def _merge(base: dict, override: dict) -> dict:
    """Recursively merges override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(config: dict) -> dict:
    """Raises ValueError on settings the game cannot run with."""
    grid_size = config["game"]["grid_size"]
    if len(grid_size) != 2:
        raise ValueError(f"grid_size must be [width, height], got {grid_size}")
    if min(grid_size) < MIN_GRID_SIDE:
        raise ValueError(
            f"grid_size sides must be >= {MIN_GRID_SIDE}, got {grid_size}"
        )

    play = config["play"]
    if play["fps"] <= 0 or play["speed"] <= 0:
        raise ValueError("play.fps and play.speed must be positive")
    if play["speed"] > play["fps"]:
        raise ValueError("play.speed cannot exceed play.fps")

    max_steps = config["env"].get("max_steps")
    if max_steps is not None and max_steps <= 0:
        raise ValueError("env.max_steps must be positive or null")

    if config["rollout"]["episodes"] < 1:
        raise ValueError("rollout.episodes must be >= 1")

    return config


def load_config(path: Optional[Union[str, Path]] = None) -> dict:
    """
    Loads a YAML config and fills in defaults.

    Args:
        path: config file (None = defaults only)

    Returns:
        Validated config dict
    """
    overrides = {}
    if path is not None:
        with open(path) as f:
            overrides = yaml.safe_load(f) or {}
    return validate_config(_merge(DEFAULT_CONFIG, overrides))


def make_game(config: dict) -> Game:
    """Builds a Game from the "game" section of a config."""
    return Game(
        grid_size=tuple(config["game"]["grid_size"]),
        seed=config["game"].get("seed"),
    )
