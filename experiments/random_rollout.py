"""
Random-policy rollout.

Plays episodes with uniformly random actions through the gymnasium
environment and summarizes scores, lengths and episode outcomes. Useful as
a smoke test of the environment and as a baseline for learned policies.

Usage:
    python -m experiments.random_rollout
    python -m experiments.random_rollout --config configs/game.yaml --episodes 500
    python -m experiments.random_rollout --output-dir results/rollouts/baseline
"""

import argparse
import yaml
import numpy as np
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Optional
from tqdm import tqdm

from game.config import load_config
from env.snake_env import make_env


def run_rollout(
    config: dict,
    n_episodes: int,
    seed: Optional[int] = None,
    progress: bool = True,
) -> Dict[str, Any]:
    """
    Plays n_episodes with a random policy.

    Args:
        config: game config
        n_episodes: number of episodes
        seed: seed for the environment and the action sampler
        progress: show a tqdm progress bar

    Returns:
        Dictionary with summary statistics
    """
    if n_episodes < 1:
        raise ValueError(f"n_episodes must be >= 1, got {n_episodes}")

    env = make_env(config)
    env.action_space.seed(seed)

    scores = []
    lengths = []
    steps = []
    rewards = []
    outcomes: Counter = Counter()

    info: Dict[str, Any] = {}
    for episode in tqdm(range(n_episodes), desc="Rollout", disable=not progress):
        env.reset(seed=seed + episode if seed is not None else None)
        episode_reward = 0.0

        done = False
        while not done:
            action = env.action_space.sample()
            _, reward, terminated, truncated, info = env.step(action)
            episode_reward += reward
            done = terminated or truncated

        scores.append(info["score"])
        lengths.append(info["length"])
        steps.append(info["steps"])
        rewards.append(episode_reward)
        outcomes[info["outcome"] if terminated else "TRUNCATED"] += 1

    env.close()

    return {
        "episodes": n_episodes,
        "mean_score": float(np.mean(scores)),
        "mean_length": float(np.mean(lengths)),
        "max_length": int(np.max(lengths)),
        "mean_steps": float(np.mean(steps)),
        "mean_reward": float(np.mean(rewards)),
        "max_score": int(info["max_score"]),
        "outcomes": dict(outcomes),
    }


def main():
    parser = argparse.ArgumentParser(description="Random-policy rollout for grid snake")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to game config YAML (default: built-in defaults)")
    parser.add_argument("--episodes", type=int, default=None,
                        help="Number of episodes (default: from config)")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Directory to save summary.yaml (default: don't save)")
    args = parser.parse_args()

    config = load_config(args.config)
    n_episodes = args.episodes
    if n_episodes is None:
        n_episodes = config["rollout"]["episodes"]

    summary = run_rollout(config, n_episodes, seed=config["rollout"].get("seed"))

    print(f"\nEpisodes:    {summary['episodes']}")
    print(f"  Mean Score:  {summary['mean_score']:.2f}")
    print(f"  Mean Length: {summary['mean_length']:.2f} (max {summary['max_length']})")
    print(f"  Mean Steps:  {summary['mean_steps']:.1f}")
    print(f"  Mean Reward: {summary['mean_reward']:.2f}")
    print(f"  Max Score:   {summary['max_score']}")
    for outcome, count in sorted(summary["outcomes"].items()):
        print(f"  {outcome:<10} {count / summary['episodes']:.2%}")

    if args.output_dir:
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(output_dir / "summary.yaml", "w") as f:
            yaml.dump(summary, f, default_flow_style=False)
        print(f"\nSummary saved to {output_dir}")


if __name__ == "__main__":
    main()
