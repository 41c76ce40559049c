from __future__ import annotations

import logging

from sky_climber import config
from sky_climber.session import GameState, Session, place_player_at_start

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    GameState.START: {GameState.PLAYING, GameState.RANKING},
    GameState.PLAYING: {GameState.GAMEOVER, GameState.GAMECLEAR},
    GameState.GAMEOVER: {GameState.START},
    GameState.GAMECLEAR: {GameState.START},
    GameState.RANKING: {GameState.START},
}


def _enter(session: Session, target: GameState) -> bool:
    """Move to `target`. Re-entering the current state or an illegal edge changes nothing."""
    if session.state is target:
        return False
    if target not in ALLOWED_TRANSITIONS[session.state]:
        logger.debug("state: rejected %s -> %s", session.state.value, target.value)
        return False
    logger.debug("state: %s -> %s", session.state.value, target.value)
    session.state = target
    return True


def start_game(session: Session, mode: str | None = None) -> bool:
    if session.state is GameState.PLAYING:
        return False
    if mode is not None:
        if mode not in config.MODES:
            raise ValueError(f"unknown mode: {mode!r}")
        if session.state is GameState.START:
            session.mode = mode
    if not _enter(session, GameState.PLAYING):
        return False
    session.reset_run()
    return True


def game_over(session: Session) -> bool:
    if not _enter(session, GameState.GAMEOVER):
        return False
    board = session.leaderboard
    if session.mode == config.MODE_MISSION:
        board.save_score(config.MODE_MISSION, session.display_distance)
    else:
        session.best_challenge_score = board.submit_challenge_best(session.challenge_score)
        board.save_score(config.MODE_CHALLENGE, session.challenge_score)
    return True


def game_clear(session: Session) -> bool:
    if session.mode != config.MODE_MISSION:
        return False
    if not _enter(session, GameState.GAMECLEAR):
        return False
    session.leaderboard.save_score(config.MODE_MISSION, config.GOAL_DISTANCE)
    return True


def return_to_start(session: Session) -> bool:
    if not _enter(session, GameState.START):
        return False
    place_player_at_start(session.player, session.cfg)
    return True


def abandon_run(session: Session) -> bool:
    """Drop a run in progress back to START without recording a score."""
    if session.state is not GameState.PLAYING:
        return False
    logger.debug("state: abandoned %s run at %.1f", session.mode, session.distance)
    session.state = GameState.START
    place_player_at_start(session.player, session.cfg)
    return True


def show_ranking(session: Session, tab: str = config.MODE_CHALLENGE) -> bool:
    if not _enter(session, GameState.RANKING):
        return False
    session.ranking_tab = tab
    return True


def switch_ranking_tab(session: Session, tab: str) -> bool:
    if session.state is not GameState.RANKING or tab not in config.MODES:
        return False
    session.ranking_tab = tab
    return True


def set_theme(session: Session, theme: str) -> None:
    if theme not in config.THEMES:
        raise ValueError(f"unknown theme: {theme!r}")
    session.theme = theme
