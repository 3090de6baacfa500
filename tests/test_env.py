import numpy as np
import pytest

from starbreak.env import StarbreakEnv, decode_action
from starbreak.movement import Intent


@pytest.fixture
def env():
    e = StarbreakEnv(max_steps=200)
    yield e
    e.close()


@pytest.mark.parametrize("action, left, right, fire", [
    (0, False, False, False),
    (1, False, False, True),
    (2, True, False, False),
    (3, True, False, True),
    (4, False, True, False),
    (5, False, True, True),
])
def test_decode_action(action, left, right, fire):
    inputs = decode_action(action)
    assert (inputs.left, inputs.right, inputs.fire) == (left, right, fire)
    assert Intent.PAUSE not in inputs


def test_reset_starts_a_session(env):
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs.shape == (6 + 5 * 5 + 2 * 3,)
    assert info["score"] == 0
    assert info["lives"] == 3
    assert info["step"] == 0


def test_step_returns_valid_transition(env):
    env.reset(seed=0)
    for action in range(env.action_space.n):
        obs, reward, terminated, truncated, info = env.step(action)
        assert env.observation_space.contains(obs)
        assert np.isfinite(reward)
        assert not terminated


def test_firing_costs_shot_penalty(env):
    env.reset(seed=0)
    _, reward, _, _, _ = env.step(1)
    assert reward == pytest.approx(env.rewards["R_ALIVE"] - env.rewards["R_SHOT"])


def test_episode_truncates_at_max_steps(env):
    env.reset(seed=3)
    truncated = terminated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        steps += 1
    assert truncated and not terminated
    assert steps == 200


def test_game_over_terminates(env):
    env.reset(seed=0)
    env.game.world.lives = 0
    _, reward, terminated, truncated, _ = env.step(0)
    assert terminated and not truncated
    assert reward < -env.rewards["R_DEATH"] + 1


def test_reward_config_overrides_defaults():
    env = StarbreakEnv(reward_config={"name": "custom", "R_KILL": 3.0})
    assert env.rewards["R_KILL"] == 3.0
    assert "name" not in env.rewards


def test_game_overrides_reach_config():
    env = StarbreakEnv(fire_rate=5, width=640, height=480)
    assert env.config.fire_rate == 5
    assert (env.config.width, env.config.height) == (640, 480)


def test_unknown_render_mode_rejected():
    with pytest.raises(ValueError):
        StarbreakEnv(render_mode="rgb_array")
