from __future__ import annotations

import os

import numpy as np
import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from sky_climber import config  # noqa: E402
from sky_climber.session import Session  # noqa: E402
from sky_climber.state_machine import start_game  # noqa: E402


def playing_session(mode: str = config.MODE_MISSION, seed: int = 0, theme: str = config.THEME_LIGHT) -> Session:
    session = Session.create(rng=np.random.default_rng(seed), mode=mode, theme=theme)
    assert start_game(session, mode)
    return session


@pytest.fixture
def mission() -> Session:
    return playing_session(config.MODE_MISSION)


@pytest.fixture
def challenge() -> Session:
    return playing_session(config.MODE_CHALLENGE)


@pytest.fixture(autouse=True)
def _isolated_state_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SKY_CLIMBER_STATE_DIR", str(tmp_path / "state"))
