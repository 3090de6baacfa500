"""
Training script for the Starbreak environment using Stable-Baselines3
Supports PPO and DQN (the Discrete(6) action space suits both directly).
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from starbreak import StarbreakEnv
from rl.configs.starbreak_config import (
    ENV_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback

ALGORITHMS = {"ppo": (PPO, PPO_CONFIG), "dqn": (DQN, DQN_CONFIG)}


def make_env(seed: Optional[int] = None, reward_name: str = "baseline"):
    """Factory function to create the environment"""
    def _init():
        env = StarbreakEnv(reward_config=REWARD_CONFIGS[reward_name], **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train(
    algo: str = "ppo",
    total_timesteps: Optional[int] = None,
    n_envs: int = 4,
    reward_name: str = "baseline",
):
    """Train one agent and return (model, metrics_callback)"""
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    if reward_name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_name}")

    model_cls, hyperparams = ALGORITHMS[algo]
    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    # DQN learns from a single environment
    if algo == "dqn":
        n_envs = 1

    name = f"{algo}_{reward_name}"
    save_dir = os.path.join(TRAINING_CONFIG["model_dir"], name)
    log_dir = os.path.join(TRAINING_CONFIG["log_dir"], name)
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training {algo.upper()} ({reward_name}) for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} environment(s)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i, reward_name=reward_name) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(seed=100, reward_name=reward_name)])
    if algo == "ppo":
        env = VecNormalize(env, norm_obs=False, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=False, norm_reward=False, training=False)

    callbacks = [
        CheckpointCallback(
            save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
            save_path=save_dir,
            name_prefix=f"{algo}_starbreak",
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=save_dir,
            log_path=log_dir,
            eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
            deterministic=True,
            render=False,
        ),
    ]
    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)
    callbacks += [metrics_callback, TensorboardMetricsCallback(verbose=0)]

    model = model_cls(
        env=env,
        tensorboard_log=os.path.join(TRAINING_CONFIG["tensorboard_log"], name),
        **hyperparams
    )
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, f"{algo}_starbreak_final")
    model.save(final_path)
    if isinstance(env, VecNormalize):
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"{algo.upper()} training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on Starbreak")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping preset (default: baseline)",
    )

    args = parser.parse_args()

    algos = ["dqn", "ppo"] if args.algo == "all" else [args.algo]
    for algo in algos:
        train(algo, total_timesteps=args.timesteps, n_envs=args.n_envs, reward_name=args.reward)


if __name__ == "__main__":
    main()
