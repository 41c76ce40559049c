from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


# --- Modes / themes ---
MODE_MISSION = "MISSION"
MODE_CHALLENGE = "CHALLENGE"
MODES = (MODE_MISSION, MODE_CHALLENGE)

THEME_LIGHT = "LIGHT"
THEME_DARK = "DARK"
THEMES = (THEME_LIGHT, THEME_DARK)

# --- Player ---
PLAYER_WIDTH = 30
PLAYER_HEIGHT = 50
PLAYER_SPEED = 5
PLAYER_START_MARGIN = 50
MAX_LIVES = 2
INVULNERABLE_MS = 2000
DAMAGE_FLASH_MS = 500
ANIM_SPEED_UP = 0.4
ANIM_SPEED_DOWN = 0.1
ANIM_SPEED_IDLE = 0.2

# --- Difficulty ---
BASE_SPEED = 3.0
SPEED_EASE = 0.005
SPEED_STEP = 0.2
MISSION_SPEED_INTERVAL = 10
MISSION_SPEED_CAP = 15.0
CHALLENGE_SPEED_INTERVAL = 30
GOAL_DISTANCE = 1000
TICKS_PER_SECOND = 60

# --- Spawning ---
SPAWN_FACTOR = 500
SPAWN_SPEED_MULT = 1.2
OBSTACLE_SIZE_MIN, OBSTACLE_SIZE_MAX = 30, 60
OBSTACLE_OFFSET_MIN, OBSTACLE_OFFSET_MAX = 2, 5
OBSTACLE_ROT_SPEED = 0.05
ITEM_SIZE = 30
HITBOX_INSET = 8

# Challenge rolls are checked in this order; the first hit wins.
CHALLENGE_ITEM_ODDS = (("score", 0.05), ("speed", 0.05), ("warp", 0.05), ("heart", 0.02))
MISSION_ITEM_ODDS = (("heart", 0.05),)

# --- Scoring ---
AVOID_POINTS = 10
SCORE_ITEM_POINTS = 100
SPEED_ITEM_BONUS = 1.0

# --- Background ---
ROW_HEIGHT = 150
WINDOW_COLUMNS = 4
WINDOW_WIDTH = 40
WINDOW_HEIGHT = 60
SILL_HEIGHT = 5

# --- Leaderboard ---
RANKING_SIZE = 10

LIGHT_OBSTACLE_COLORS = ("#ff3366", "#ff9933", "#ffd700", "#ff66cc", "#9933ff", "#33cc33")


@dataclass(frozen=True)
class GameConfig:
    width: int = 480
    height: int = 720
    fps: int = 60


def state_dir() -> Path:
    """
    Directory for the leaderboard / player name file.

    Override for tests/dev via `SKY_CLIMBER_STATE_DIR`.
    """

    override = os.environ.get("SKY_CLIMBER_STATE_DIR")
    if override:
        return Path(override)
    return Path.home() / ".sky_climber"
