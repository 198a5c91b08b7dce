"""Maze grid: static walls plus the consumable state of every cell."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .config import Coord

log = logging.getLogger(__name__)


class CellKind(Enum):
    WALL = "#"
    EMPTY = " "
    COIN = "."
    POWER_PELLET = "o"
    SPECIAL_COIN = "$"
    GHOST_SPAWN = "G"
    PLAYER_SPAWN = "P"

    @property
    def collectible(self) -> bool:
        return self in COLLECTIBLES


COLLECTIBLES = frozenset({CellKind.COIN, CellKind.POWER_PELLET, CellKind.SPECIAL_COIN})

# Spawn markers only matter while the layout is parsed.
_SPAWN_MARKERS = frozenset({CellKind.GHOST_SPAWN, CellKind.PLAYER_SPAWN})


@dataclass
class Cell:
    kind: CellKind
    variant: Optional[str] = None   # cosmetic coin flavour


class Maze:
    """A grid of cells addressed by (row, col)."""

    def __init__(self, cells: List[List[Cell]]):
        if not cells or any(len(row) != len(cells[0]) for row in cells):
            raise ValueError("maze rows must be non-empty and of equal width")
        self.cells = cells
        self.remaining = self.count_collectibles()

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, pos: Coord) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell(self, pos: Coord) -> Optional[Cell]:
        if not self.in_bounds(pos):
            return None
        r, c = pos
        return self.cells[r][c]

    def kind_at(self, pos: Coord) -> Optional[CellKind]:
        cell = self.cell(pos)
        return cell.kind if cell else None

    def is_wall(self, pos: Coord) -> bool:
        """Missing cells count as walls; callers wrap columns beforehand."""
        cell = self.cell(pos)
        return cell is None or cell.kind is CellKind.WALL

    def consume(self, pos: Coord) -> CellKind:
        """Empty the cell at pos and return what was there."""
        cell = self.cell(pos)
        if cell is None:
            return CellKind.WALL
        prior = cell.kind
        if prior is CellKind.WALL:
            return prior
        cell.kind = CellKind.EMPTY
        cell.variant = None
        if prior.collectible:
            self.remaining -= 1
        return prior

    def count_collectibles(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.kind.collectible)

    def snapshot(self) -> Tuple[Tuple[CellKind, ...], ...]:
        return tuple(tuple(cell.kind for cell in row) for row in self.cells)


def build_maze(layout: Sequence[str], variants: Sequence[str],
               special_slots: Sequence[Coord],
               rng: Optional[random.Random] = None) -> Maze:
    """Parse a layout template into a fresh maze.

    Every coin gets a random cosmetic variant and exactly one of
    ``special_slots`` is forced to a special coin, whatever the template
    held there. Spawn markers become empty floor.
    """
    if not special_slots:
        raise ValueError("at least one special coin slot is required")
    rng = rng or random.Random()

    cells: List[List[Cell]] = []
    for line in layout:
        row = []
        for ch in line:
            kind = CellKind(ch)
            if kind in _SPAWN_MARKERS:
                kind = CellKind.EMPTY
            variant = rng.choice(variants) if kind is CellKind.COIN and variants else None
            row.append(Cell(kind, variant))
        cells.append(row)

    sr, sc = rng.choice(list(special_slots))
    if not (0 <= sr < len(cells) and 0 <= sc < len(cells[sr])):
        raise ValueError(f"special coin slot {(sr, sc)} is outside the maze")
    cells[sr][sc] = Cell(CellKind.SPECIAL_COIN)

    maze = Maze(cells)
    log.debug("Built %dx%d maze, special coin at %s, %d collectibles",
              maze.rows, maze.cols, (sr, sc), maze.remaining)
    return maze
