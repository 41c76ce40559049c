from __future__ import annotations

import argparse
import logging
import os

import numpy as np
import pygame

from sky_climber import config
from sky_climber.controls import InputState
from sky_climber.env import GameEnv
from sky_climber.leaderboard import JsonFileStore, Leaderboard
from sky_climber.policy import policy
from sky_climber.session import GameState
from sky_climber.simulation import step as simulation_step
from sky_climber.spawner import Spawner
from sky_climber.state_machine import (
    return_to_start,
    set_theme,
    show_ranking,
    start_game,
    switch_ranking_tab,
)


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="sky_climber", description="Climb the tower, dodge the debris.")
    parser.add_argument("--mode", choices=config.MODES, default=None, help="skip the start screen and play this mode")
    parser.add_argument("--theme", choices=config.THEMES, default=config.THEME_LIGHT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--name", default=None, help="display name for the leaderboard")
    parser.add_argument("--autoplay", action="store_true", help="let the baseline policy steer")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _handle_key(session, key):
    state = session.state
    if state is GameState.START:
        if key == pygame.K_m:
            start_game(session, config.MODE_MISSION)
        elif key == pygame.K_c:
            start_game(session, config.MODE_CHALLENGE)
        elif key == pygame.K_r:
            show_ranking(session)
        elif key == pygame.K_t:
            set_theme(session, config.THEME_DARK if session.theme == config.THEME_LIGHT else config.THEME_LIGHT)
    elif state in (GameState.GAMEOVER, GameState.GAMECLEAR):
        if key == pygame.K_SPACE:
            return_to_start(session)
    elif state is GameState.RANKING:
        if key == pygame.K_TAB:
            other = config.MODE_MISSION if session.ranking_tab == config.MODE_CHALLENGE else config.MODE_CHALLENGE
            switch_ranking_tab(session, other)
        elif key == pygame.K_ESCAPE:
            return_to_start(session)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rng = np.random.default_rng(args.seed)
    leaderboard = Leaderboard(JsonFileStore(), rng=rng.spawn(1)[0])
    if args.name is not None and not leaderboard.set_player_name(args.name):
        print(f"Ignoring blank name, keeping {leaderboard.player_name}")

    # This block allows you to play the game directly; the env supplies the
    # session, renderer and clock.
    env = GameEnv(mode=args.mode or config.MODE_MISSION, theme=args.theme, leaderboard=leaderboard)
    session = env.session
    session.spawner = Spawner(env.SCREEN_WIDTH, rng=rng)
    set_theme(session, args.theme)
    if args.mode is not None:
        start_game(session, args.mode)

    # The env initialised pygame headless; drop the dummy driver and restart the
    # display module to get a real window.
    if os.environ.get("SDL_VIDEODRIVER") == "dummy":
        del os.environ["SDL_VIDEODRIVER"]
        pygame.display.quit()
        pygame.display.init()

    pygame.display.set_caption("Sky Climber")
    screen = pygame.display.set_mode((env.SCREEN_WIDTH, env.SCREEN_HEIGHT))

    running = True
    last_state = session.state
    while running:
        # --- Pygame Event Handling ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                else:
                    _handle_key(session, event.key)

        # --- Simulation ---
        now = pygame.time.get_ticks()
        if args.autoplay:
            controls = InputState.from_action(policy(env))
        else:
            controls = InputState.from_pygame_keys(pygame.key.get_pressed())
        simulation_step(session, controls, now)

        if session.state is not last_state:
            if session.state is GameState.GAMEOVER:
                stats = session.stats()
                print(f"Game Over! Mode: {stats['mode']}, Distance: {stats['distance']}m, Score: {stats['score']}")
            elif session.state is GameState.GAMECLEAR:
                print(f"Mission clear! {config.GOAL_DISTANCE}m reached")
            last_state = session.state

        # --- Rendering ---
        screen.blit(env.renderer.draw(session, now), (0, 0))
        pygame.display.flip()

        # Control the frame rate
        env.clock.tick(env.FPS)

    env.close()


if __name__ == "__main__":
    main()
