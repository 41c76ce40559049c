import os

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import MultiDiscrete

from sky_climber import config
from sky_climber.controls import InputState
from sky_climber.leaderboard import Leaderboard, MemoryStore
from sky_climber.renderer import Renderer
from sky_climber.session import GameState, Session
from sky_climber.simulation import step as simulation_step
from sky_climber.spawner import Spawner
from sky_climber.state_machine import abandon_run, return_to_start, set_theme, start_game

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: Arrow keys (or WASD) to climb around the facade and dodge falling debris."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "Climb a scrolling skyscraper while dodging debris, glass and flower pots. "
        "Mission: reach 1000m. Challenge: survive as long as you can for points."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    # --- Constants ---
    MAX_STEPS = 20000
    REWARD_SURVIVE = 0.1
    REWARD_HIT = -5.0
    REWARD_CLEAR = 100.0
    REWARD_GAME_OVER = -10.0

    def __init__(self, render_mode="rgb_array", mode=config.MODE_MISSION, theme=config.THEME_LIGHT, leaderboard=None, cfg=None):
        super().__init__()
        if mode not in config.MODES:
            raise ValueError(f"unknown mode: {mode!r}")
        if theme not in config.THEMES:
            raise ValueError(f"unknown theme: {theme!r}")

        self.render_mode = render_mode
        self.cfg = cfg or config.GameConfig()
        self.SCREEN_WIDTH, self.SCREEN_HEIGHT = self.cfg.width, self.cfg.height
        self.FPS = self.cfg.fps

        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        self.renderer = Renderer(self.cfg)
        self.clock = pygame.time.Clock()

        self.mode = mode
        self.theme = theme
        self.leaderboard = leaderboard if leaderboard is not None else Leaderboard(MemoryStore())

        # Valid state before the first reset().
        super().reset(seed=None)
        self.session = Session(
            cfg=self.cfg,
            spawner=Spawner(self.cfg.width, rng=self.np_random),
            leaderboard=self.leaderboard,
            mode=self.mode,
            theme=self.theme,
        )
        self.steps = 0
        self.now = 0.0

    @property
    def frame_ms(self):
        return 1000.0 / self.FPS

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        options = options or {}
        mode = options.get("mode", self.mode)
        theme = options.get("theme", self.theme)
        if mode not in config.MODES:
            raise ValueError(f"unknown mode: {mode!r}")
        if theme not in config.THEMES:
            raise ValueError(f"unknown theme: {theme!r}")
        self.mode, self.theme = mode, theme

        session = self.session
        session.spawner = Spawner(self.cfg.width, rng=self.np_random)
        set_theme(session, self.theme)
        abandon_run(session)
        return_to_start(session)
        start_game(session, self.mode)

        self.steps = 0
        self.now = 0.0
        return self._get_observation(), self._get_info()

    def step(self, action):
        session = self.session
        if session.state is not GameState.PLAYING:
            return self._get_observation(), 0.0, True, False, self._get_info()

        prev_distance = session.distance
        prev_score = session.challenge_score
        prev_lives = session.player.lives

        self.now += self.frame_ms
        simulation_step(session, InputState.from_action(action), self.now)
        self.steps += 1

        reward = self.REWARD_SURVIVE
        reward += session.distance - prev_distance
        reward += (session.challenge_score - prev_score) / 10.0
        if session.player.lives < prev_lives:
            reward += self.REWARD_HIT

        terminated = session.state is not GameState.PLAYING
        if session.state is GameState.GAMECLEAR:
            reward += self.REWARD_CLEAR
        elif session.state is GameState.GAMEOVER:
            reward += self.REWARD_GAME_OVER

        truncated = not terminated and self.steps >= self.MAX_STEPS

        return self._get_observation(), float(reward), terminated, truncated, self._get_info()

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        self.renderer.draw(self.session, self.now)
        return self.renderer.to_array()

    def _get_info(self):
        info = self.session.stats()
        info["steps"] = self.steps
        return info

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)
        assert info["distance"] == 0

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(reward, float)
        assert isinstance(term, bool)
        assert isinstance(trunc, bool)
        assert isinstance(info, dict)

        print("✓ Implementation validated successfully")
