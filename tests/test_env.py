from __future__ import annotations

import numpy as np
import pytest

from sky_climber import config
from sky_climber.entities import Item, ItemKind
from sky_climber.env import GameEnv
from sky_climber.policy import policy


def test_validate_implementation() -> None:
    env = GameEnv()
    env.validate_implementation()
    env.close()


def test_reset_applies_mode_option() -> None:
    env = GameEnv()
    _, info = env.reset(seed=3, options={"mode": config.MODE_CHALLENGE})
    assert info["mode"] == config.MODE_CHALLENGE
    assert info["state"] == "PLAYING"
    assert info["distance"] == 0
    assert info["lives"] == config.MAX_LIVES
    env.close()


def test_reset_abandons_a_running_game_without_recording_it() -> None:
    env = GameEnv()
    env.reset(seed=0)
    for _ in range(10):
        env.step([0, 0, 0])
    env.reset(seed=0)
    assert env.session.distance == 0
    assert env.leaderboard.get_ranking(config.MODE_MISSION) == []
    env.close()


def test_score_item_reward() -> None:
    env = GameEnv(mode=config.MODE_CHALLENGE)
    env.reset(seed=0)
    p = env.session.player
    env.session.items.append(Item(x=p.x, y=p.y, width=30, height=30, kind=ItemKind.SCORE))
    _, reward, terminated, truncated, info = env.step([0, 0, 0])
    assert info["score"] == 100
    assert reward == pytest.approx(env.REWARD_SURVIVE + 3 / 60 + 10.0)
    assert terminated is False
    assert truncated is False
    env.close()


def test_steps_after_termination_are_inert() -> None:
    env = GameEnv()
    env.reset(seed=0)
    env.session.distance = config.GOAL_DISTANCE - 0.01
    _, reward, terminated, _, info = env.step([0, 0, 0])
    assert terminated is True
    assert info["state"] == "GAMECLEAR"
    assert reward > env.REWARD_CLEAR
    _, reward, terminated, _, _ = env.step([1, 0, 0])
    assert reward == 0.0
    assert terminated is True
    env.close()


def test_invalid_constructor_arguments() -> None:
    with pytest.raises(ValueError):
        GameEnv(mode="ENDLESS")
    with pytest.raises(ValueError):
        GameEnv(theme="NEON")


def test_policy_drives_the_env() -> None:
    env = GameEnv(mode=config.MODE_CHALLENGE, theme=config.THEME_DARK)
    env.reset(seed=11)
    for _ in range(600):
        action = policy(env)
        assert env.action_space.contains(np.array(action))
        _, _, terminated, truncated, info = env.step(action)
        assert 0 <= info["lives"] <= config.MAX_LIVES
        if terminated or truncated:
            break
    env.close()


def test_bad_reset_options_leave_env_untouched() -> None:
    env = GameEnv(mode=config.MODE_CHALLENGE)
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.reset(options={"mode": "ENDLESS"})
    with pytest.raises(ValueError):
        env.reset(options={"theme": "NEON"})
    assert env.mode == config.MODE_CHALLENGE
    assert env.theme == config.THEME_LIGHT
    _, info = env.reset()
    assert info["mode"] == config.MODE_CHALLENGE
    env.close()
