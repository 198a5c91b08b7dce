"""Game session state machine.

PRE_GAME -> RUNNING -> WIN | LOSE -> PRE_GAME

The engine owns the maze, the actors, the score and both timers (the
fixed-period tick and the frighten expiry). It never draws or reads the
keyboard; the front end feeds it directions and listens to its events.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from . import config
from .config import Coord
from .entities import Direction, Ghost, Player, new_ghost, new_player
from .events import EventBus, EventType
from .maze import Maze, build_maze
from .movement import move_ghosts, move_player
from .resolver import Resolver
from .scoring import ScoreBoard
from .timers import Clock, Scheduler, Timer

log = logging.getLogger(__name__)


class GameState(Enum):
    PRE_GAME = "pre-game"
    RUNNING = "running"
    PAUSED = "paused"       # reserved, nothing enters it yet
    WIN = "win"
    LOSE = "lose"

    @property
    def terminal(self) -> bool:
        return self in (GameState.WIN, GameState.LOSE)


class GameEngine:
    def __init__(self,
                 high_score: float = 0.0,
                 can_start: Optional[Callable[[], bool]] = None,
                 clock: Optional[Clock] = None,
                 rng: Optional[random.Random] = None,
                 layout: Sequence[str] = config.MAZE_LAYOUT,
                 player_start: Coord = config.PLAYER_START,
                 ghost_starts: Sequence[Coord] = config.GHOST_STARTS,
                 special_slots: Sequence[Coord] = config.SPECIAL_COIN_SLOTS,
                 coin_variants: Sequence[str] = config.COIN_VARIANTS,
                 tick_ms: int = config.TICK_MS):
        self.events = EventBus()
        self.scheduler = Scheduler(clock)
        self.rng = rng or random.Random()
        self.can_start = can_start or (lambda: True)
        self.board = ScoreBoard(self.events, high_score)
        self.resolver = Resolver(self.board, self.scheduler, self.events)

        self.layout = list(layout)
        self.player_start = player_start
        self.ghost_starts = list(ghost_starts)
        self.special_slots = list(special_slots)
        self.coin_variants = list(coin_variants)
        self.tick_ms = tick_ms

        self._state = GameState.PRE_GAME
        self._maze = build_maze(self.layout, self.coin_variants, self.special_slots, self.rng)
        self._player = new_player(player_start)
        self._ghosts: List[Ghost] = []
        self._desired = Direction.STOP
        self._tick_timer: Optional[Timer] = None
        self.tick_count = 0

    # --- observers ---

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def maze(self) -> Maze:
        return self._maze

    @property
    def player(self) -> Player:
        return self._player

    @property
    def ghosts(self) -> Tuple[Ghost, ...]:
        return tuple(self._ghosts)

    @property
    def score(self) -> float:
        return self.board.score

    @property
    def high_score(self) -> float:
        return self.board.high_score

    @property
    def remaining(self) -> int:
        return self._maze.remaining

    @property
    def desired_direction(self) -> Direction:
        return self._desired

    # --- commands ---

    def start(self) -> bool:
        """Begin a fresh session. Returns False when the start is refused."""
        if self._state is GameState.RUNNING:
            log.debug("start() ignored, already running")
            return False
        if not self.can_start():
            log.info("start() refused, no plays left")
            return False

        self._stop_timers()
        self.resolver.reset()
        self._maze = build_maze(self.layout, self.coin_variants, self.special_slots, self.rng)
        self._player = new_player(self.player_start)
        self._ghosts = [new_ghost(i, pos) for i, pos in enumerate(self.ghost_starts)]
        self._desired = Direction.STOP
        self.tick_count = 0
        self.board.reset()

        self._set_state(GameState.RUNNING)
        self._tick_timer = self.scheduler.call_every(self.tick_ms, self.tick)
        return True

    def close(self) -> bool:
        """Dismiss a finished game and return to the pre-game screen."""
        if not self._state.terminal:
            return False
        self._set_state(GameState.PRE_GAME)
        return True

    def set_desired_direction(self, direction: Direction) -> None:
        if not isinstance(direction, Direction):
            raise TypeError(f"expected a Direction, got {direction!r}")
        if self._state is GameState.RUNNING:
            self._desired = direction

    def update(self, now: Optional[int] = None) -> int:
        """Run whatever timers are due. Call once per frame."""
        return self.scheduler.run_due(now)

    def tick(self) -> None:
        if self._state is not GameState.RUNNING:
            return
        self.tick_count += 1

        if self.tick_count % config.PLAYER_SPEED_DIVISOR == 0:
            move_player(self._player, self._desired, self._maze)
        if self.tick_count % config.GHOST_SPEED_DIVISOR == 0:
            move_ghosts(self._ghosts, self._maze, self._player.pos, self.rng)

        if self.resolver.resolve(self._maze, self._player, self._ghosts):
            self._finish(GameState.LOSE)
        elif self._maze.remaining == 0:
            self._finish(GameState.WIN)

    # --- internals ---

    def _finish(self, state: GameState) -> None:
        self._stop_timers()
        log.info("Game over: %s with %.1f points after %d ticks",
                 state.value, self.score, self.tick_count)
        self._set_state(state)

    def _stop_timers(self) -> None:
        if self._tick_timer:
            self._tick_timer.cancel()
            self._tick_timer = None
        self.resolver.cancel()

    def _set_state(self, state: GameState) -> None:
        if state is self._state:
            return
        log.info("State %s -> %s", self._state.value, state.value)
        self._state = state
        self.events.emit(EventType.STATE_CHANGED, state)
