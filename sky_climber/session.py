from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from sky_climber import config
from sky_climber.entities import BackgroundTile, Item, Obstacle, Player
from sky_climber.leaderboard import Leaderboard
from sky_climber.spawner import Spawner


class GameState(enum.Enum):
    START = "START"
    PLAYING = "PLAYING"
    GAMEOVER = "GAMEOVER"
    GAMECLEAR = "GAMECLEAR"
    RANKING = "RANKING"


def make_player(cfg: config.GameConfig) -> Player:
    player = Player(x=0, y=0, width=config.PLAYER_WIDTH, height=config.PLAYER_HEIGHT)
    place_player_at_start(player, cfg)
    return player


def place_player_at_start(player: Player, cfg: config.GameConfig) -> None:
    player.x = cfg.width / 2 - player.width / 2
    player.y = cfg.height - player.height - config.PLAYER_START_MARGIN


def make_background(cfg: config.GameConfig) -> list[BackgroundTile]:
    rows = math.ceil(cfg.height / config.ROW_HEIGHT) + 1
    return [BackgroundTile(y=i * config.ROW_HEIGHT) for i in range(rows)]


@dataclass
class Session:
    """Everything one game instance owns. Passed to step/render explicitly."""

    cfg: config.GameConfig
    spawner: Spawner
    leaderboard: Leaderboard
    mode: str = config.MODE_MISSION
    theme: str = config.THEME_LIGHT
    state: GameState = GameState.START
    ranking_tab: str = config.MODE_CHALLENGE

    player: Player = None
    obstacles: list[Obstacle] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    windows: list[BackgroundTile] = field(default_factory=list)

    distance: float = 0.0
    challenge_score: int = 0
    best_challenge_score: int = 0
    game_speed: float = config.BASE_SPEED
    base_speed: float = config.BASE_SPEED
    speed_bonus: float = 0.0
    frame_count: int = 0
    flash_until: float = 0.0

    def __post_init__(self):
        if self.player is None:
            self.player = make_player(self.cfg)
        if not self.windows:
            self.windows = make_background(self.cfg)
        self.best_challenge_score = self.leaderboard.best_challenge_score()

    @classmethod
    def create(cls, cfg=None, rng=None, leaderboard=None, mode=config.MODE_MISSION, theme=config.THEME_LIGHT):
        cfg = cfg or config.GameConfig()
        if leaderboard is None:
            # Own stream, so drawing a default name never shifts the spawn sequence.
            leaderboard = Leaderboard(rng=rng.spawn(1)[0] if rng is not None else None)
        return cls(
            cfg=cfg,
            spawner=Spawner(cfg.width, rng=rng),
            leaderboard=leaderboard,
            mode=mode,
            theme=theme,
        )

    @property
    def display_distance(self) -> int:
        return int(math.floor(self.distance))

    @property
    def display_speed(self) -> int:
        return int(math.floor(self.game_speed * 10))

    def reset_run(self) -> None:
        self.distance = 0.0
        self.challenge_score = 0
        self.base_speed = config.BASE_SPEED
        self.game_speed = self.base_speed
        self.speed_bonus = 0.0
        self.frame_count = 0
        self.flash_until = 0.0
        self.obstacles = []
        self.items = []

        p = self.player
        p.lives = p.max_lives
        p.invulnerable_until = 0.0
        p.anim_frame = 0.0
        p.anim_speed = config.ANIM_SPEED_IDLE
        place_player_at_start(p, self.cfg)

    def stats(self) -> dict:
        return {
            "state": self.state.value,
            "mode": self.mode,
            "distance": self.display_distance,
            "score": self.challenge_score,
            "best_score": self.best_challenge_score,
            "lives": self.player.lives,
            "speed": self.display_speed,
        }
