"""Per-tick movement for the player and the ghosts."""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional

from .config import Coord
from .entities import CARDINALS, Direction, Ghost, GhostMode, Player
from .maze import Maze

log = logging.getLogger(__name__)


def step(pos: Coord, direction: Direction) -> Coord:
    dr, dc = direction.delta
    return (pos[0] + dr, pos[1] + dc)


def wrap_column(pos: Coord, width: int) -> Coord:
    """Tunnel wrap: leaving one side enters from the other. Rows never wrap."""
    r, c = pos
    if c < 0:
        c = width - 1
    elif c >= width:
        c = 0
    return (r, c)


def distance(a: Coord, b: Coord) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


# ---------------------------------------------------------------------------
# PLAYER
# ---------------------------------------------------------------------------

def move_player(player: Player, desired: Direction, maze: Maze) -> bool:
    """Advance the player one cell. Returns True if the player moved.

    The desired direction is tried first; failing that the player keeps
    going straight, and stops when that is blocked too.
    """
    if desired is not Direction.STOP:
        target = wrap_column(step(player.pos, desired), maze.cols)
        if not maze.is_wall(target):
            player.place(target, desired)
            return True

    if player.direction is Direction.STOP:
        return False

    target = wrap_column(step(player.pos, player.direction), maze.cols)
    if maze.is_wall(target):
        player.direction = Direction.STOP
        return False
    player.place(target, player.direction)
    return True


# ---------------------------------------------------------------------------
# GHOSTS
# ---------------------------------------------------------------------------

def open_directions(maze: Maze, pos: Coord) -> List[Direction]:
    # No wrap for ghosts: an off-grid cell is a wall to them.
    return [d for d in CARDINALS if not maze.is_wall(step(pos, d))]


def closest_direction(pos: Coord, options: List[Direction], target: Coord) -> Optional[Direction]:
    """Direction whose next cell is nearest to target; first one wins ties."""
    best = None
    best_dist = float("inf")
    for d in options:
        dist = distance(step(pos, d), target)
        if dist < best_dist:
            best_dist = dist
            best = d
    return best


def choose_direction(ghost: Ghost, maze: Maze, player_pos: Coord,
                     rng: random.Random) -> Optional[Direction]:
    """Pick the next move for a live ghost, or None when it is boxed in."""
    open_dirs = open_directions(maze, ghost.pos)
    reverse = ghost.direction.opposite
    valid = [d for d in open_dirs if d is not reverse]
    if not valid:
        # Dead end - must reverse
        valid = open_dirs
    if not valid:
        return None

    if ghost.mode is GhostMode.FRIGHTENED:
        return rng.choice(valid)
    return closest_direction(ghost.pos, valid, player_pos)


def move_eaten_ghost(ghost: Ghost, maze: Maze) -> None:
    if ghost.at_spawn:
        ghost.respawn()
        log.debug("Ghost %s respawned at %s", ghost.id, ghost.spawn)
        return
    best = closest_direction(ghost.pos, open_directions(maze, ghost.pos), ghost.spawn)
    if best is None:
        ghost.direction = Direction.STOP
        return
    ghost.place(step(ghost.pos, best), best)


def move_ghost(ghost: Ghost, maze: Maze, player_pos: Coord, rng: random.Random) -> None:
    if ghost.mode is GhostMode.EATEN:
        move_eaten_ghost(ghost, maze)
        return
    new_dir = choose_direction(ghost, maze, player_pos, rng)
    if new_dir is None:
        return
    ghost.place(step(ghost.pos, new_dir), new_dir)


def move_ghosts(ghosts: List[Ghost], maze: Maze, player_pos: Coord, rng: random.Random) -> None:
    for ghost in ghosts:
        move_ghost(ghost, maze, player_pos, rng)
