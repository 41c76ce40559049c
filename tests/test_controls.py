from __future__ import annotations

import pygame

from conftest import playing_session
from sky_climber import config
from sky_climber.__main__ import _handle_key, _parse_args
from sky_climber.controls import InputState
from sky_climber.session import GameState
from sky_climber.state_machine import game_over


def test_arrows_and_wasd_are_interchangeable() -> None:
    assert InputState(w=True).up and InputState(arrow_up=True).up
    assert InputState(s=True).down and InputState(arrow_down=True).down
    assert InputState(a=True).left and InputState(arrow_left=True).left
    assert InputState(d=True).right and InputState(arrow_right=True).right
    assert not any((InputState().up, InputState().down, InputState().left, InputState().right))


def test_action_mapping() -> None:
    assert InputState.from_action([0, 1, 1]) == InputState()
    assert InputState.from_action([1, 0, 0]).up
    assert InputState.from_action([2, 0, 0]).down
    assert InputState.from_action([3, 0, 0]).left
    assert InputState.from_action([4, 0, 0]).right


def test_pygame_key_mapping() -> None:
    pressed = {pygame.K_UP, pygame.K_d}

    class Keys:
        def __getitem__(self, key):
            return key in pressed

    controls = InputState.from_pygame_keys(Keys())
    assert controls.up and controls.right
    assert not controls.left and not controls.down


def test_cli_defaults() -> None:
    args = _parse_args([])
    assert args.mode is None
    assert args.theme == config.THEME_LIGHT
    assert not args.autoplay
    args = _parse_args(["--mode", "CHALLENGE", "--theme", "DARK", "--seed", "4", "--autoplay"])
    assert (args.mode, args.theme, args.seed, args.autoplay) == ("CHALLENGE", "DARK", 4, True)


def test_menu_keys_drive_the_state_machine() -> None:
    session = playing_session()
    game_over(session)
    _handle_key(session, pygame.K_m)
    assert session.state is GameState.GAMEOVER
    _handle_key(session, pygame.K_SPACE)
    assert session.state is GameState.START

    _handle_key(session, pygame.K_t)
    assert session.theme == config.THEME_DARK
    _handle_key(session, pygame.K_r)
    assert session.state is GameState.RANKING
    _handle_key(session, pygame.K_TAB)
    assert session.ranking_tab == config.MODE_MISSION
    _handle_key(session, pygame.K_ESCAPE)
    _handle_key(session, pygame.K_c)
    assert session.state is GameState.PLAYING
    assert session.mode == config.MODE_CHALLENGE
