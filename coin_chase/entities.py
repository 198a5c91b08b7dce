"""Player and ghost state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .config import Coord


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    STOP = "stop"

    @property
    def delta(self) -> Coord:
        return DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return REVERSE[self]


# (drow, dcol)
DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
    Direction.STOP: (0, 0),
}

REVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.STOP: Direction.STOP,
}

# Ghosts break ties in this order.
CARDINALS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class GhostMode(Enum):
    CHASE = auto()
    FRIGHTENED = auto()
    EATEN = auto()


@dataclass
class Actor:
    row: int
    col: int
    direction: Direction = Direction.STOP

    @property
    def pos(self) -> Coord:
        return (self.row, self.col)

    def place(self, pos: Coord, direction: Direction) -> None:
        self.row, self.col = pos
        self.direction = direction


@dataclass
class Player(Actor):
    pass


@dataclass
class Ghost(Actor):
    id: str = ""
    spawn: Coord = (0, 0)
    frightened: bool = False
    eaten: bool = False

    @property
    def mode(self) -> GhostMode:
        # eaten wins over frightened
        if self.eaten:
            return GhostMode.EATEN
        if self.frightened:
            return GhostMode.FRIGHTENED
        return GhostMode.CHASE

    @property
    def at_spawn(self) -> bool:
        return self.pos == self.spawn

    def respawn(self) -> None:
        self.eaten = False
        self.frightened = False


def new_player(start: Coord) -> Player:
    return Player(start[0], start[1], Direction.STOP)


def new_ghost(index: int, spawn: Coord) -> Ghost:
    return Ghost(spawn[0], spawn[1], Direction.UP, id=str(index), spawn=spawn)
