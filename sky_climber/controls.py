from __future__ import annotations

from dataclasses import dataclass

import pygame


@dataclass
class InputState:
    """Held-key flags. Arrows and WASD are interchangeable."""

    arrow_up: bool = False
    arrow_down: bool = False
    arrow_left: bool = False
    arrow_right: bool = False
    w: bool = False
    s: bool = False
    a: bool = False
    d: bool = False

    @property
    def up(self) -> bool:
        return self.arrow_up or self.w

    @property
    def down(self) -> bool:
        return self.arrow_down or self.s

    @property
    def left(self) -> bool:
        return self.arrow_left or self.a

    @property
    def right(self) -> bool:
        return self.arrow_right or self.d

    @classmethod
    def from_action(cls, action) -> InputState:
        """Map a `MultiDiscrete([5, 2, 2])` action: 1=up 2=down 3=left 4=right."""
        movement = int(action[0])
        return cls(
            arrow_up=movement == 1,
            arrow_down=movement == 2,
            arrow_left=movement == 3,
            arrow_right=movement == 4,
        )

    @classmethod
    def from_pygame_keys(cls, keys) -> InputState:
        return cls(
            arrow_up=bool(keys[pygame.K_UP]),
            arrow_down=bool(keys[pygame.K_DOWN]),
            arrow_left=bool(keys[pygame.K_LEFT]),
            arrow_right=bool(keys[pygame.K_RIGHT]),
            w=bool(keys[pygame.K_w]),
            s=bool(keys[pygame.K_s]),
            a=bool(keys[pygame.K_a]),
            d=bool(keys[pygame.K_d]),
        )
