"""Coin Chase: a grid arcade game engine with a pygame front end."""

from .engine import GameEngine, GameState
from .entities import Direction, Ghost, GhostMode, Player
from .events import EventType, GameEvent
from .maze import CellKind, Maze, build_maze

__version__ = "1.0.0"

__all__ = [
    "GameEngine", "GameState", "Direction", "Ghost", "GhostMode", "Player",
    "EventType", "GameEvent", "CellKind", "Maze", "build_maze",
]
