from __future__ import annotations

import numpy as np

from sky_climber import config
from sky_climber.entities import ItemKind, ObstacleKind
from sky_climber.spawner import Spawner


class ScriptedRng:
    """Feeds fixed values to `random()`; everything else returns its lower bound."""

    def __init__(self, rolls):
        self.rolls = list(rolls)

    def random(self):
        return self.rolls.pop(0)

    def uniform(self, low, high):
        return low

    def integers(self, low, high):
        return low


def test_obstacle_attributes_stay_in_range() -> None:
    spawner = Spawner(480, rng=np.random.default_rng(0))
    kinds = set()
    for _ in range(300):
        obs = spawner.spawn_obstacle(config.THEME_LIGHT)
        kinds.add(obs.kind)
        assert 30 <= obs.width < 60
        assert obs.width == obs.height
        assert obs.y == -obs.height
        assert 0 <= obs.x <= 480 - obs.width
        assert 2 <= obs.speed_offset < 5
        assert -0.05 <= obs.rot_speed < 0.05
        assert obs.theme_color in config.LIGHT_OBSTACLE_COLORS
        assert not obs.processed
    assert kinds == {ObstacleKind.DEBRIS, ObstacleKind.GLASS, ObstacleKind.POT}


def test_dark_theme_leaves_color_to_renderer() -> None:
    spawner = Spawner(480, rng=np.random.default_rng(0))
    assert spawner.spawn_obstacle(config.THEME_DARK).theme_color is None


def test_items_are_fixed_size() -> None:
    spawner = Spawner(480, rng=np.random.default_rng(0))
    item = spawner.spawn_item("warp")
    assert item.kind is ItemKind.WARP
    assert (item.width, item.height, item.y) == (30, 30, -30)
    assert 0 <= item.x <= 450


def test_challenge_rolls_are_sequential() -> None:
    cases = [
        ([0.01], ItemKind.SCORE),
        ([0.9, 0.01], ItemKind.SPEED),
        ([0.9, 0.9, 0.049], ItemKind.WARP),
        ([0.9, 0.9, 0.9, 0.019], ItemKind.HEART),
    ]
    for rolls, expected in cases:
        item = Spawner(480, rng=ScriptedRng(rolls)).roll_item(config.MODE_CHALLENGE)
        assert item.kind is expected

    # Heart needs a 2% roll, not 5%.
    assert Spawner(480, rng=ScriptedRng([0.9, 0.9, 0.9, 0.03])).roll_item(config.MODE_CHALLENGE) is None


def test_mission_only_rolls_hearts() -> None:
    assert Spawner(480, rng=ScriptedRng([0.04])).roll_item(config.MODE_MISSION).kind is ItemKind.HEART
    rng = ScriptedRng([0.06, 0.0])
    assert Spawner(480, rng=rng).roll_item(config.MODE_MISSION) is None
    assert rng.rolls == [0.0]


def test_challenge_item_rate_is_roughly_sixteen_percent() -> None:
    spawner = Spawner(480, rng=np.random.default_rng(42))
    hits = sum(spawner.roll_item(config.MODE_CHALLENGE) is not None for _ in range(20000))
    # 1 - 0.95**3 * 0.98 ~= 0.1598
    assert 0.14 < hits / 20000 < 0.18
