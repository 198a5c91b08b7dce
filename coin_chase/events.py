"""Events the engine emits for the UI, audio and storage collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, List

log = logging.getLogger(__name__)


class EventType(Enum):
    SCORE_CHANGED = auto()
    HIGH_SCORE_CHANGED = auto()
    SPECIAL_PICKUP = auto()
    POWER_UP = auto()
    GHOST_EATEN = auto()
    STATE_CHANGED = auto()


@dataclass(frozen=True)
class GameEvent:
    type: EventType
    value: Any = None


Listener = Callable[[GameEvent], None]


class EventBus:
    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def emit(self, event_type: EventType, value: Any = None) -> GameEvent:
        event = GameEvent(event_type, value)
        log.debug("emit %s %r", event_type.name, value)
        for listener in list(self._listeners):
            listener(event)
        return event
