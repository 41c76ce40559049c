from __future__ import annotations

import math

import numpy as np

from sky_climber import config
from sky_climber.entities import Item, ItemKind, Obstacle, ObstacleKind


class Spawner:
    """Creates obstacles and items with randomized attributes."""

    OBSTACLE_KINDS = (ObstacleKind.DEBRIS, ObstacleKind.GLASS, ObstacleKind.POT)

    def __init__(self, width, rng=None):
        self.width = width
        self.np_random = rng if rng is not None else np.random.default_rng()

    def spawn_obstacle(self, theme):
        kind = self.OBSTACLE_KINDS[self.np_random.integers(0, len(self.OBSTACLE_KINDS))]
        size = self.np_random.uniform(config.OBSTACLE_SIZE_MIN, config.OBSTACLE_SIZE_MAX)

        theme_color = None
        if theme == config.THEME_LIGHT:
            colors = config.LIGHT_OBSTACLE_COLORS
            theme_color = colors[self.np_random.integers(0, len(colors))]

        return Obstacle(
            x=self.np_random.uniform(0, max(0.0, self.width - size)),
            y=-size,
            width=size,
            height=size,
            kind=kind,
            speed_offset=self.np_random.uniform(config.OBSTACLE_OFFSET_MIN, config.OBSTACLE_OFFSET_MAX),
            rotation=self.np_random.uniform(0, math.pi),
            rot_speed=self.np_random.uniform(-config.OBSTACLE_ROT_SPEED, config.OBSTACLE_ROT_SPEED),
            theme_color=theme_color,
        )

    def spawn_item(self, kind):
        size = config.ITEM_SIZE
        return Item(
            x=self.np_random.uniform(0, max(0.0, self.width - size)),
            y=-size,
            width=size,
            height=size,
            kind=ItemKind(kind),
        )

    def roll_item(self, mode):
        """
        Roll for an item after an obstacle spawn.

        Each entry of the odds table is an independent check made in order;
        the first that succeeds decides the kind. Returns None when every roll
        misses.
        """

        odds = config.CHALLENGE_ITEM_ODDS if mode == config.MODE_CHALLENGE else config.MISSION_ITEM_ODDS
        for kind, chance in odds:
            if self.np_random.random() < chance:
                return self.spawn_item(kind)
        return None
