from __future__ import annotations

import enum
from dataclasses import dataclass

from sky_climber import config


class ObstacleKind(enum.Enum):
    DEBRIS = "debris"
    GLASS = "glass"
    POT = "pot"


class ItemKind(enum.Enum):
    HEART = "heart"
    SCORE = "score"
    SPEED = "speed"
    WARP = "warp"


@dataclass
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: Box, inset: float = 0.0) -> bool:
        """Strict overlap test after shrinking both boxes by `inset` on every side."""
        return (
            self.x + inset < other.right - inset
            and self.right - inset > other.x + inset
            and self.y + inset < other.bottom - inset
            and self.bottom - inset > other.y + inset
        )


@dataclass
class Player(Box):
    lives: int = config.MAX_LIVES
    max_lives: int = config.MAX_LIVES
    speed: float = config.PLAYER_SPEED
    invulnerable_until: float = 0.0
    anim_frame: float = 0.0
    anim_speed: float = config.ANIM_SPEED_IDLE

    def is_invulnerable(self, now: float) -> bool:
        return now < self.invulnerable_until

    def heal(self) -> None:
        self.lives = min(self.max_lives, self.lives + 1)

    def hurt(self) -> None:
        self.lives = max(0, self.lives - 1)


@dataclass
class Obstacle(Box):
    kind: ObstacleKind = ObstacleKind.DEBRIS
    speed_offset: float = 2.0
    rotation: float = 0.0
    rot_speed: float = 0.0
    processed: bool = False
    # Only set for the light palette; the dark palette is resolved at draw time.
    theme_color: str | None = None


@dataclass
class Item(Box):
    kind: ItemKind = ItemKind.HEART


@dataclass
class BackgroundTile:
    y: float

    def scroll(self, dy: float, height: float) -> None:
        self.y += dy
        if self.y > height:
            self.y = -config.ROW_HEIGHT
