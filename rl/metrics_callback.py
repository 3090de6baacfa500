"""
Custom callback for tracking Starbreak-specific metrics during training.
Records: score, asteroids destroyed / missed, damage taken, power-ups.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Logs one CSV row per finished episode.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_missed: List[int] = []
        self.episode_damage: List[int] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "destroyed", "missed", "damage", "powerups", "survived"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds "episode" on the final step
            if not (done and "episode" in info):
                continue

            ep_info = info["episode"]
            self.episode_rewards.append(ep_info["r"])
            self.episode_lengths.append(ep_info["l"])
            self.episode_scores.append(info.get("score", 0))
            self.episode_missed.append(info.get("asteroids_missed", 0))
            self.episode_damage.append(info.get("damage_taken", 0))

            if self.csv_writer:
                self.csv_writer.writerow([
                    self.num_timesteps,
                    len(self.episode_rewards),
                    ep_info["r"],
                    ep_info["l"],
                    info.get("score", 0),
                    info.get("asteroids_destroyed", 0),
                    info.get("asteroids_missed", 0),
                    info.get("damage_taken", 0),
                    info.get("powerups_collected", 0),
                    1.0 if info.get("lives", 0) > 0 else 0.0,
                ])
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                avg_reward = sum(self.episode_rewards[-10:]) / 10
                avg_score = sum(self.episode_scores[-10:]) / 10
                print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Reward (10 ep): {avg_reward:.2f}, Avg Score: {avg_score:.1f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "mean_score": np.mean(self.episode_scores),
            "mean_missed": np.mean(self.episode_missed),
            "mean_damage": np.mean(self.episode_damage),
            "total_episodes": len(self.episode_rewards),
        }


class TensorboardMetricsCallback(BaseCallback):
    """Mirrors per-episode game metrics into the SB3 logger (TensorBoard)."""

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info:
                self.logger.record("starbreak/score", info.get("score", 0))
                self.logger.record("starbreak/difficulty", info.get("difficulty", 1.0))
                self.logger.record("starbreak/asteroids_missed", info.get("asteroids_missed", 0))
                self.logger.record("starbreak/damage_taken", info.get("damage_taken", 0))

        return True
