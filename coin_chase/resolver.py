"""What happens on the player's cell each tick: pickups, power ups and ghost contact."""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import (
    FRIGHTEN_COOLDOWN_MS,
    GHOST_FRIGHTENED_DURATION_MS,
    GHOST_POINTS,
    NORMAL_COIN_POINTS,
    SPECIAL_COIN_POINTS,
)
from .entities import Ghost, Player
from .events import EventBus, EventType
from .maze import CellKind, Maze
from .scoring import ScoreBoard
from .timers import Scheduler, Timer

log = logging.getLogger(__name__)


class Resolver:
    """Resolves pickups and collisions, and owns the frighten-expiry timer."""

    def __init__(self, board: ScoreBoard, scheduler: Scheduler, events: EventBus,
                 frightened_ms: int = GHOST_FRIGHTENED_DURATION_MS,
                 cooldown_ms: int = FRIGHTEN_COOLDOWN_MS):
        self.board = board
        self.scheduler = scheduler
        self.events = events
        self.frightened_ms = frightened_ms
        self.cooldown_ms = cooldown_ms
        self.last_frighten: Optional[int] = None
        self.frighten_timer: Optional[Timer] = None

    def reset(self) -> None:
        self.cancel()
        self.last_frighten = None

    def cancel(self) -> None:
        if self.frighten_timer:
            self.frighten_timer.cancel()
            self.frighten_timer = None

    # --- per tick ---

    def resolve(self, maze: Maze, player: Player, ghosts: List[Ghost]) -> bool:
        """Apply this tick's interactions. Returns True on a lethal collision.

        Contact is judged on the ghosts as they were before this tick's
        pickup, and a lethal tick leaves the cell and the score untouched.
        """
        if self.lethal_contact(player, ghosts):
            return True
        self.collect(maze, player.pos, ghosts)
        self.check_ghosts(player, ghosts)
        return False

    def lethal_contact(self, player: Player, ghosts: List[Ghost]) -> bool:
        for ghost in ghosts:
            if ghost.pos == player.pos and not ghost.eaten and not ghost.frightened:
                log.info("Caught by ghost %s at %s", ghost.id, player.pos)
                return True
        return False

    def collect(self, maze: Maze, pos, ghosts: List[Ghost]) -> CellKind:
        kind = maze.kind_at(pos)
        if kind is CellKind.COIN:
            maze.consume(pos)
            self.board.award(NORMAL_COIN_POINTS)
        elif kind is CellKind.SPECIAL_COIN:
            maze.consume(pos)
            self.board.award(SPECIAL_COIN_POINTS)
            log.info("Special coin picked up at %s", pos)
            self.events.emit(EventType.SPECIAL_PICKUP, SPECIAL_COIN_POINTS)
        elif kind is CellKind.POWER_PELLET:
            maze.consume(pos)
            self.power_up(ghosts)
        return kind

    def power_up(self, ghosts: List[Ghost]) -> bool:
        """Frighten every ghost unless a pellet did so within the cooldown."""
        now = self.scheduler.now()
        if self.last_frighten is not None and now - self.last_frighten <= self.cooldown_ms:
            log.debug("Power pellet inside cooldown, frighten skipped")
            return False
        self.last_frighten = now

        for ghost in ghosts:
            ghost.frightened = True
            ghost.eaten = False

        # Re-arming replaces the pending expiry instead of stacking.
        self.cancel()
        self.frighten_timer = self.scheduler.call_later(
            self.frightened_ms, lambda: self._calm(ghosts))
        log.info("Ghosts frightened for %dms", self.frightened_ms)
        self.events.emit(EventType.POWER_UP, self.frightened_ms)
        return True

    def _calm(self, ghosts: List[Ghost]) -> None:
        self.frighten_timer = None
        for ghost in ghosts:
            ghost.frightened = False
        log.info("Frightened mode over")

    def check_ghosts(self, player: Player, ghosts: List[Ghost]) -> int:
        """Eat every frightened ghost on the player's cell. Returns how many."""
        eaten = 0
        for ghost in ghosts:
            if ghost.pos == player.pos and ghost.frightened and not ghost.eaten:
                ghost.eaten = True
                self.board.award(GHOST_POINTS)
                log.info("Ghost %s eaten", ghost.id)
                self.events.emit(EventType.GHOST_EATEN, ghost.id)
                eaten += 1
        return eaten
