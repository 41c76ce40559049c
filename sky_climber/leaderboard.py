from __future__ import annotations

import json
import logging
import math
import os
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from sky_climber import config

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "skyClimberChallengeBest"
PLAYER_NAME_KEY = "skyClimberPlayerName"


def ranking_key(mode: str) -> str:
    return f"ranking_{mode}"


class MemoryStore:
    """Key-value string store kept in a dict."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = str(value)


class JsonFileStore:
    """
    Key-value string store backed by a single JSON object on disk.

    The file is read once per instance; every `set` rewrites the whole file
    through a tmp file + replace.
    An unreadable or malformed file reads as empty.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else config.state_dir() / "store.json"
        self._values: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._values is None:
            self._values = self._read()
        return self._values

    def _read(self) -> dict[str, str]:
        p = self.path
        if not p.exists():
            return {}
        try:
            payload = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("store: failed to read %s: %s; using defaults", p, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("store: %s - expected JSON object, got %s; using defaults", p, type(payload).__name__)
            return {}
        return {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = str(value)
        p = self.path
        p.parent.mkdir(parents=True, exist_ok=True)
        # Unique tmp name so two running games never clobber each other's write.
        tmp = p.with_name(f"{p.name}.{os.getpid()}.{secrets.token_hex(6)}.tmp")
        tmp.write_text(json.dumps(values, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        tmp.replace(p)


@dataclass(frozen=True)
class RankingEntry:
    name: str
    score: int
    timestamp: str

    def to_json(self) -> dict:
        return {"name": self.name, "score": self.score, "timestamp": self.timestamp}


def _parse_entry(raw) -> RankingEntry | None:
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    score = raw.get("score")
    # Older saves used "date".
    stamp = raw.get("timestamp", raw.get("date", ""))
    if not isinstance(name, str) or isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    # json.loads accepts NaN and Infinity.
    if not math.isfinite(score):
        return None
    return RankingEntry(name=name, score=int(score), timestamp=str(stamp))


class Leaderboard:
    """Top-N ranking per mode plus the best Challenge score and player name."""

    def __init__(self, store=None, size: int = config.RANKING_SIZE, rng=None) -> None:
        self.store = store if store is not None else MemoryStore()
        self.size = size
        self._rng = rng if rng is not None else np.random.default_rng()
        self._player_name: str | None = None

    # --- Rankings ---

    def get_ranking(self, mode: str) -> list[RankingEntry]:
        raw = self.store.get(ranking_key(mode))
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("leaderboard: corrupt ranking for %s: %s; treating as empty", mode, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("leaderboard: ranking for %s is %s, not a list; treating as empty", mode, type(payload).__name__)
            return []
        entries = []
        for item in payload:
            entry = _parse_entry(item)
            if entry is not None:
                entries.append(entry)
        return entries

    def save_score(self, mode: str, score: int, now: datetime | None = None) -> list[RankingEntry]:
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        ranking = self.get_ranking(mode)
        ranking.append(RankingEntry(name=self.player_name, score=int(score), timestamp=stamp))
        ranking.sort(key=lambda e: e.score, reverse=True)
        ranking = ranking[: self.size]
        self.store.set(ranking_key(mode), json.dumps([e.to_json() for e in ranking]))
        return ranking

    # --- Best challenge score ---

    def best_challenge_score(self) -> int:
        raw = self.store.get(BEST_SCORE_KEY)
        if raw is None:
            return 0
        try:
            return max(0, int(float(raw)))
        except (ValueError, OverflowError):
            logger.warning("leaderboard: bad best score %r; using 0", raw)
            return 0

    def submit_challenge_best(self, score: int) -> int:
        best = self.best_challenge_score()
        if score > best:
            best = int(score)
            self.store.set(BEST_SCORE_KEY, str(best))
        return best

    # --- Player name ---

    @property
    def player_name(self) -> str:
        if self._player_name is None:
            stored = self.store.get(PLAYER_NAME_KEY)
            if stored and stored.strip():
                self._player_name = stored.strip()
            else:
                self._player_name = f"Player{int(self._rng.integers(0, 1000))}"
        return self._player_name

    def set_player_name(self, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            return False
        self._player_name = name
        self.store.set(PLAYER_NAME_KEY, name)
        return True
