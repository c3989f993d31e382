"""
Headless random-policy episodes for the cheese shooter
"""

import argparse
import logging
from typing import Optional

import numpy as np

from game.parm import ShooterEnv
from play.configs.shooter_config import SESSION_CONFIG, SIMULATION_CONFIG, EXPERIMENT_CONFIG


def run_random_policy(n_episodes: int = 10, seed: Optional[int] = None, verbose: bool = True):
    """
    Play episodes with uniformly random actions and summarize them

    Args:
        n_episodes: Number of episodes to play
        seed: Base seed; episode i uses seed + i
        verbose: Print one line per episode
    """
    env = ShooterEnv(render_mode=None, **SIMULATION_CONFIG, **SESSION_CONFIG)

    episode_scores = []
    episode_lengths = []
    episode_returns = []

    for episode in range(n_episodes):
        ep_seed = seed + episode if seed is not None else None
        obs, info = env.reset(seed=ep_seed)
        env.action_space.seed(ep_seed)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_scores.append(info["score"])
        episode_lengths.append(steps)
        episode_returns.append(total_reward)

        if verbose:
            print(f"Episode {episode + 1}/{n_episodes}: "
                  f"Score = {info['score']}, Lives = {info['lives']}, Length = {steps}")

    env.close()

    results = {
        "mean_score": float(np.mean(episode_scores)),
        "std_score": float(np.std(episode_scores)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_return": float(np.mean(episode_returns)),
        "episode_scores": episode_scores,
        "episode_lengths": episode_lengths,
    }

    print("\n" + "=" * 50)
    print(f"Random Policy Results ({n_episodes} episodes):")
    print(f"Mean Score: {results['mean_score']:.2f} ± {results['std_score']:.2f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Min Score: {np.min(episode_scores)}")
    print(f"Max Score: {np.max(episode_scores)}")
    print("=" * 50)

    return results


def main():
    parser = argparse.ArgumentParser(description="Run headless random-policy episodes")
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EXPERIMENT_CONFIG["n_episodes"],
        help=f"Number of episodes (default: {EXPERIMENT_CONFIG['n_episodes']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EXPERIMENT_CONFIG["seeds"][0],
        help=f"Random seed (default: {EXPERIMENT_CONFIG['seeds'][0]})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the summary",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)

    run_random_policy(n_episodes=args.n_episodes, seed=args.seed, verbose=not args.quiet)


if __name__ == "__main__":
    main()
