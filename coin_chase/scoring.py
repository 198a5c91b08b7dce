"""Capped score and the high score it feeds."""

from __future__ import annotations

import logging

from .config import MAX_POINTS
from .events import EventBus, EventType

log = logging.getLogger(__name__)


def clamp_add(score: float, points: float, cap: float = MAX_POINTS) -> float:
    """Saturating add, rounded to one decimal so 0.2 steps stay exact."""
    return round(min(cap, score + points), 1)


class ScoreBoard:
    def __init__(self, events: EventBus, high_score: float = 0.0, cap: float = MAX_POINTS):
        self.events = events
        self.cap = cap
        self.score = 0.0
        self.high_score = round(float(high_score), 1)

    def reset(self) -> None:
        if self.score != 0:
            self.score = 0.0
            self.events.emit(EventType.SCORE_CHANGED, self.score)

    def award(self, points: float) -> float:
        """Add points (never past the cap). Returns the amount actually added."""
        new_score = clamp_add(self.score, points, self.cap)
        gained = round(new_score - self.score, 1)
        if gained <= 0:
            return 0.0
        self.score = new_score
        self.events.emit(EventType.SCORE_CHANGED, self.score)
        if self.score > self.high_score:
            self.high_score = self.score
            log.debug("New high score %.1f", self.high_score)
            self.events.emit(EventType.HIGH_SCORE_CHANGED, self.high_score)
        return gained
