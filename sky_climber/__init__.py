"""Sky Climber: a falling-debris dodging game on a scrolling skyscraper."""

from sky_climber.session import GameState, Session

__all__ = ["GameEnv", "GameState", "Session"]


def __getattr__(name):
    # The env pulls in gymnasium and pygame; only load it on demand.
    if name == "GameEnv":
        from sky_climber.env import GameEnv

        return GameEnv
    raise AttributeError(f"module 'sky_climber' has no attribute {name!r}")
