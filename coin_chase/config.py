"""Fixed game constants and the Coin Chase maze."""

from pathlib import Path
from typing import List, Tuple

Coord = Tuple[int, int]

# ---------------------------------------------------------------------------
# TIMING
# ---------------------------------------------------------------------------

TICK_MS = 120                         # one simulation step
PLAYER_SPEED_DIVISOR = 1              # player moves every tick
GHOST_SPEED_DIVISOR = 2               # ghosts move every 2nd tick
GHOST_FRIGHTENED_DURATION_MS = 7000
FRIGHTEN_COOLDOWN_MS = 500            # debounce between pellet activations

# ---------------------------------------------------------------------------
# SCORING
# ---------------------------------------------------------------------------

MAX_POINTS = 100                      # hard cap per play-through
NORMAL_COIN_POINTS = 0.2
SPECIAL_COIN_POINTS = 5
GHOST_POINTS = 0.5

# ---------------------------------------------------------------------------
# MAZE LAYOUT (21 columns x 22 rows)
# '#' wall, ' ' empty, '.' coin, 'o' power pellet, 'G' ghost pen, 'P' player
# Row 10 is open at both ends (tunnel).
# ---------------------------------------------------------------------------

MAZE_LAYOUT: List[str] = [
    "#####################",
    "#o........#........o#",
    "#.##.####.#.####.##.#",
    "#.##.####.#.####.##.#",
    "#...................#",
    "#.##.#.#######.#.##.#",
    "#....#....#....#....#",
    "####.#### # ####.####",
    "#  #.#         #.#  #",
    "#  #.# #GGGGG# #.#  #",
    "    .  #     #  .    ",
    "#  #.# ####### #.#  #",
    "#  #.#         #.#  #",
    "####.#### # ####.####",
    "#.........#.........#",
    "#.##.#.#######.#.##.#",
    "#....#.  P  ...#....#",
    "###..#.#.###.#.#..###",
    "#o.....#.....#.....o#",
    "#.#################.#",
    "#...................#",
    "#####################",
]

PLAYER_START: Coord = (16, 9)
GHOST_STARTS: List[Coord] = [(9, 9), (9, 10), (9, 11), (9, 12)]

# One of these becomes the special coin at the start of every game.
SPECIAL_COIN_SLOTS: List[Coord] = [(1, 10), (10, 1), (17, 10)]

COIN_VARIANTS: List[str] = ["btc", "eth", "sol"]

# ---------------------------------------------------------------------------
# DAILY PLAY QUOTA & SAVE FILES
# ---------------------------------------------------------------------------

MAX_PLAYS_PER_DAY = 34
PLAY_WINDOW_SECONDS = 24 * 60 * 60
SAVE_DIR = Path.home() / ".coin_chase"
QUOTA_FILE = SAVE_DIR / "plays.json"
HIGHSCORE_FILE = SAVE_DIR / "highscore.json"

# ---------------------------------------------------------------------------
# DISPLAY
# ---------------------------------------------------------------------------

TILE_SIZE = 28
FPS = 60
HUD_HEIGHT = 72
SCREEN_WIDTH = len(MAZE_LAYOUT[0]) * TILE_SIZE
SCREEN_HEIGHT = len(MAZE_LAYOUT) * TILE_SIZE + HUD_HEIGHT
TOAST_MS = 1600

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
WALL_BLUE = (33, 33, 222)
YELLOW = (255, 255, 0)
PELLET_COLOR = (255, 184, 174)
RED = (255, 0, 0)
PINK = (255, 184, 255)
CYAN = (0, 255, 255)
ORANGE = (255, 184, 82)
BLUE_FRIGHTENED = (33, 33, 255)
GREY = (150, 150, 150)

GHOST_COLORS = [RED, PINK, CYAN, ORANGE]
COIN_COLORS = {
    "btc": (247, 147, 26),
    "eth": (140, 140, 255),
    "sol": (20, 241, 149),
}
SPECIAL_COIN_COLOR = (255, 215, 0)
