"""
Evaluation script for trained Starbreak agents
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN

from starbreak import StarbreakEnv
from rl.configs.starbreak_config import ENV_CONFIG

MODELS = {"ppo": PPO, "dqn": DQN}


def run_episodes(env: StarbreakEnv, policy, n_episodes: int, seed: Optional[int] = None,
                 render: bool = False):
    """Play n episodes with policy(obs) -> action; returns per-episode stats."""
    rewards, lengths, scores = [], [], []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        terminated = truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(policy(obs))
            total_reward += reward
            steps += 1
            if render:
                time.sleep(1 / env.metadata["render_fps"])

        rewards.append(total_reward)
        lengths.append(steps)
        scores.append(info["score"])
        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {info['score']}, Length = {steps}")

    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "episode_rewards": rewards,
        "episode_scores": scores,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to open the game window
        seed: Base seed for evaluation episodes
    """
    if algo not in MODELS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = MODELS[algo].load(model_path)

    env = StarbreakEnv(render_mode="human" if render else None, **ENV_CONFIG)

    def policy(obs):
        action, _ = model.predict(obs, deterministic=True)
        return int(action)

    results = run_episodes(env, policy, n_episodes, seed=seed, render=render)
    env.close()

    print("\n" + "="*50)
    print(f"Evaluation Results ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print("="*50)

    return results


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """Evaluate a random policy baseline"""
    print("Evaluating random policy baseline...")

    env = StarbreakEnv(render_mode=None, **ENV_CONFIG)
    results = run_episodes(env, lambda obs: env.action_space.sample(), n_episodes, seed=seed)
    env.close()

    print(f"\nRandom Policy Results ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained Starbreak agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(MODELS),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
