"""Save files: the daily play quota and the high score."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from .config import HIGHSCORE_FILE, MAX_PLAYS_PER_DAY, PLAY_WINDOW_SECONDS, QUOTA_FILE

log = logging.getLogger(__name__)


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        log.warning("Ignoring unreadable save file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring malformed save file %s", path)
        return {}
    return data


def _write_json(path: Path, data: dict) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))
    except OSError as e:
        log.warning("Could not write %s: %s", path, e)


class HighScoreStore:
    def __init__(self, path: Path = HIGHSCORE_FILE):
        self.path = Path(path)

    def load(self) -> float:
        try:
            return round(float(_read_json(self.path).get("highscore", 0)), 1)
        except (TypeError, ValueError):
            return 0.0

    def save(self, value: float) -> None:
        _write_json(self.path, {"highscore": round(float(value), 1)})


class PlayQuota:
    """Plays allowed per rolling day, tracked as (last_play, plays) on disk.

    A day starts when the quota is first checked after the window ran out;
    plays are counted against that start time.
    """

    def __init__(self, path: Path = QUOTA_FILE, max_plays: int = MAX_PLAYS_PER_DAY,
                 window: float = PLAY_WINDOW_SECONDS,
                 clock: Optional[Callable[[], float]] = None):
        self.path = Path(path)
        self.max_plays = max_plays
        self.window = window
        self.clock = clock or time.time
        self.last_play = 0.0
        self.plays = 0
        self.refresh()

    def refresh(self) -> int:
        """Re-read the counters, starting a new day if the window expired."""
        data = _read_json(self.path)
        try:
            last = float(data.get("last_play", 0))
            plays = int(data.get("plays", 0))
        except (TypeError, ValueError):
            last, plays = 0.0, 0

        now = self.clock()
        new_day = not last or now - last > self.window
        if new_day:
            log.info("New play day, quota reset to %d", self.max_plays)
            last, plays = now, 0
        self.last_play, self.plays = last, plays
        if new_day:
            self._save()
        return self.plays_left

    @property
    def plays_left(self) -> int:
        return max(0, self.max_plays - self.plays)

    def can_start(self) -> bool:
        # re-read first so a day that ended since the last check counts
        return self.refresh() > 0

    def record_play(self) -> bool:
        if not self.can_start():
            return False
        self.plays += 1
        self._save()
        return True

    def _save(self) -> None:
        _write_json(self.path, {"last_play": self.last_play, "plays": self.plays})
