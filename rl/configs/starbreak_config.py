"""
Training configuration for the Starbreak environment
"""

# Environment parameters (forwarded to StarbreakEnv; unknown keys override GameConfig)
ENV_CONFIG = {
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_asteroids": 5,
    "m_powerups": 2,
    "width": 800,
    "height": 600,
    "fire_rate": 30,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Destroy asteroids, avoid letting them through",
    "R_HIT": 0.1,        # Bullet connects
    "R_KILL": 1.0,       # Asteroid destroyed
    "R_DAMAGE": 1.0,     # Player struck
    "R_GROUND": 0.5,     # Asteroid reached the bottom
    "R_PICKUP": 0.5,     # Power-up collected
    "R_SHOT": 0.01,      # Per bullet fired
    "R_ALIVE": 0.001,    # Per step survived
    "R_DEATH": 5.0,      # Game over
}

REWARD_CONFIG_DEFENSIVE = {
    "name": "defensive",
    "description": "Every asteroid that slips past costs as much as a collision",
    "R_HIT": 0.05,
    "R_KILL": 0.5,
    "R_DAMAGE": 2.0,
    "R_GROUND": 2.0,
    "R_PICKUP": 1.0,
    "R_SHOT": 0.005,
    "R_ALIVE": 0.002,
    "R_DEATH": 10.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "defensive": REWARD_CONFIG_DEFENSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.995,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 5000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.995,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 2000,
    "exploration_fraction": 0.2,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 50_000,
    "eval_freq": 20_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
