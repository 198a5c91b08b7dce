#!/usr/bin/env python3
"""
COIN CHASE
==========
pygame front end for the simulation engine:
- draws the maze, coins, player and ghosts
- turns arrow keys / WASD into direction intents
- enforces the daily play quota and keeps the high score on disk
- shows toasts for special coins, power ups and eaten ghosts
"""

from __future__ import annotations

import logging
import math
import sys
import time
from typing import List, Optional, Tuple

import pygame

from . import config
from .audio import AudioEngine
from .config import (
    BLACK, BLUE_FRIGHTENED, COIN_COLORS, CYAN, FPS, GHOST_COLORS, GREY, HUD_HEIGHT,
    PELLET_COLOR, RED, SCREEN_HEIGHT, SCREEN_WIDTH, SPECIAL_COIN_COLOR, TILE_SIZE,
    TOAST_MS, WALL_BLUE, WHITE, YELLOW,
)
from .engine import GameEngine, GameState
from .entities import Direction, Ghost, GhostMode
from .events import EventType, GameEvent
from .maze import CellKind
from .storage import HighScoreStore, PlayQuota

log = logging.getLogger(__name__)

DIR_KEYS = {
    pygame.K_a: Direction.LEFT, pygame.K_LEFT: Direction.LEFT,
    pygame.K_d: Direction.RIGHT, pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP, pygame.K_UP: Direction.UP,
    pygame.K_s: Direction.DOWN, pygame.K_DOWN: Direction.DOWN,
}

# Screen angle of the player's mouth for each facing
MOUTH_ANGLES = {
    Direction.RIGHT: 0, Direction.UP: 90, Direction.LEFT: 180,
    Direction.DOWN: 270, Direction.STOP: 0,
}

RESULT_TEXT = {
    GameState.WIN: ("YOU WIN!", "You collected all the coins."),
    GameState.LOSE: ("GAME OVER", "The ghosts got you. Better luck next time!"),
}


def fmt(value: float) -> str:
    return f"{value:.1f}".rstrip("0").rstrip(".")


class Toasts:
    """Short-lived messages fed by engine events."""

    def __init__(self, lifetime_ms: int = TOAST_MS):
        self.lifetime_ms = lifetime_ms
        self.items: List[Tuple[int, str]] = []

    def push(self, text: str) -> None:
        self.items.append((pygame.time.get_ticks() + self.lifetime_ms, text))

    def live(self) -> List[str]:
        now = pygame.time.get_ticks()
        self.items = [(until, text) for until, text in self.items if until > now]
        return [text for _, text in self.items]

    def on_event(self, event: GameEvent) -> None:
        if event.type is EventType.SPECIAL_PICKUP:
            self.push(f"+{fmt(event.value)} POINTS! SPECIAL COIN!")
        elif event.type is EventType.POWER_UP:
            self.push("POWER UP! GHOSTS ARE VULNERABLE!")
        elif event.type is EventType.GHOST_EATEN:
            self.push(f"+{fmt(config.GHOST_POINTS)} POINTS!")


class Renderer:
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = pygame.font.SysFont("monospace", 18, bold=True)
        self.big_font = pygame.font.SysFont("monospace", 36, bold=True)

    def cell_center(self, row: int, col: int) -> Tuple[int, int]:
        return (col * TILE_SIZE + TILE_SIZE // 2, row * TILE_SIZE + HUD_HEIGHT + TILE_SIZE // 2)

    def draw_text_centered(self, text: str, y: int, color=WHITE, font=None):
        font = font or self.font
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(SCREEN_WIDTH // 2, y)))

    def draw_maze(self, engine: GameEngine):
        blink = (pygame.time.get_ticks() // 150) % 2 == 0
        for r, row in enumerate(engine.maze.cells):
            for c, cell in enumerate(row):
                x, y = self.cell_center(r, c)
                if cell.kind is CellKind.WALL:
                    rect = (c * TILE_SIZE + 1, r * TILE_SIZE + HUD_HEIGHT + 1, TILE_SIZE - 2, TILE_SIZE - 2)
                    pygame.draw.rect(self.screen, WALL_BLUE, rect, 2)
                elif cell.kind is CellKind.COIN:
                    pygame.draw.circle(self.screen, COIN_COLORS.get(cell.variant, PELLET_COLOR), (x, y), 3)
                elif cell.kind is CellKind.POWER_PELLET and blink:
                    pygame.draw.circle(self.screen, PELLET_COLOR, (x, y), 7)
                elif cell.kind is CellKind.SPECIAL_COIN:
                    pygame.draw.circle(self.screen, SPECIAL_COIN_COLOR, (x, y), 9)
                    pygame.draw.circle(self.screen, BLACK, (x, y), 5, 2)

    def draw_player(self, engine: GameEngine):
        player = engine.player
        x, y = self.cell_center(player.row, player.col)
        radius = int(TILE_SIZE * 0.45)
        pygame.draw.circle(self.screen, YELLOW, (x, y), radius)

        # Mouth opens and closes over time, pointing where the player faces
        mouth = 45 * abs(math.sin(time.time() * 8))
        if mouth > 2:
            base = MOUTH_ANGLES[player.direction]
            pts = [(x, y)]
            for a in (base + mouth, base - mouth):
                rad = math.radians(a)
                pts.append((x + math.cos(rad) * (radius + 2), y - math.sin(rad) * (radius + 2)))
            pygame.draw.polygon(self.screen, BLACK, pts)

    def draw_ghost(self, ghost: Ghost, index: int):
        x, y = self.cell_center(ghost.row, ghost.col)
        r = int(TILE_SIZE * 0.45)
        if ghost.mode is GhostMode.EATEN:
            self._draw_ghost_eyes(x, y, r, ghost)
            return
        color = BLUE_FRIGHTENED if ghost.mode is GhostMode.FRIGHTENED else GHOST_COLORS[index % len(GHOST_COLORS)]

        # Dome and a wavy skirt
        pygame.draw.circle(self.screen, color, (x, y - 2), r)
        pygame.draw.rect(self.screen, color, (x - r, y - 2, r * 2, r))
        skirt = [(x - r + i * (r * 2) // 4, y + r - 4 + (4 if i % 2 else 0)) for i in range(5)]
        skirt += [(x + r, y + r - 4), (x + r, y), (x - r, y)]
        pygame.draw.polygon(self.screen, color, skirt)
        self._draw_ghost_eyes(x, y, r, ghost)

    def _draw_ghost_eyes(self, x: int, y: int, r: int, ghost: Ghost):
        eye_r = max(2, r // 3)
        off_x = r // 2
        dr, dc = ghost.direction.delta
        for ex in (x - off_x, x + off_x):
            pygame.draw.circle(self.screen, WHITE, (ex, y - 3), eye_r)
            pygame.draw.circle(self.screen, WALL_BLUE, (ex + dc * 2, y - 3 + dr * 2), max(1, eye_r // 2))

    def draw_hud(self, engine: GameEngine, plays_left: int):
        self.screen.blit(self.font.render(f"ROUND: {fmt(engine.score)}", True, WHITE), (10, 10))
        hi = self.font.render(f"TOTAL: {fmt(engine.high_score)}", True, WHITE)
        self.screen.blit(hi, (SCREEN_WIDTH - hi.get_width() - 10, 10))
        self.draw_text_centered(f"DAILY PLAYS LEFT: {plays_left}", 50, CYAN)

    def draw_toasts(self, toasts: List[str]):
        for i, text in enumerate(toasts[-3:]):
            self.draw_text_centered(text, SCREEN_HEIGHT - 30 - i * 24, YELLOW)

    def draw_overlay(self, alpha: int = 140):
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
        overlay.set_alpha(alpha)
        overlay.fill(BLACK)
        self.screen.blit(overlay, (0, 0))

    def draw_pre_game(self, plays_left: int):
        self.draw_overlay()
        self.draw_text_centered("COIN CHASE", SCREEN_HEIGHT // 2 - 60, YELLOW, self.big_font)
        if plays_left <= 0:
            self.draw_text_centered("DAILY LIMIT REACHED", SCREEN_HEIGHT // 2, RED)
        elif int(time.time() * 2) % 2:
            self.draw_text_centered("PRESS SPACE TO START", SCREEN_HEIGHT // 2, WHITE)

    def draw_result(self, engine: GameEngine, plays_left: int):
        self.draw_overlay(170)
        title, description = RESULT_TEXT[engine.state]
        mid = SCREEN_HEIGHT // 2
        self.draw_text_centered(title, mid - 80, YELLOW, self.big_font)
        self.draw_text_centered(description, mid - 30, WHITE)
        if engine.score > 0 and engine.score == engine.high_score:
            self.draw_text_centered("NEW HIGH SCORE!", mid + 5, YELLOW)
        self.draw_text_centered(f"FINAL SCORE: {fmt(engine.score)}", mid + 40, WHITE)
        if plays_left <= 0:
            self.draw_text_centered("DAILY LIMIT REACHED - TRY AGAIN TOMORROW", mid + 90, RED)
            self.draw_text_centered("ESC: CLOSE", mid + 120, GREY)
        else:
            self.draw_text_centered("SPACE: PLAY AGAIN   ESC: CLOSE", mid + 90, GREY)


class App:
    def __init__(self, quota: Optional[PlayQuota] = None, scores: Optional[HighScoreStore] = None):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("COIN CHASE")
        self.clock = pygame.time.Clock()

        self.quota = quota or PlayQuota()
        self.scores = scores or HighScoreStore()
        self.engine = GameEngine(high_score=self.scores.load(),
                                 can_start=self.quota.can_start,
                                 clock=pygame.time.get_ticks)
        self.renderer = Renderer(self.screen)
        self.toasts = Toasts()
        self.audio = AudioEngine()

        self.engine.events.subscribe(self.toasts.on_event)
        self.engine.events.subscribe(self.audio.on_event)
        self.engine.events.subscribe(self.on_event)

    def on_event(self, event: GameEvent):
        if event.type is EventType.HIGH_SCORE_CHANGED:
            self.scores.save(event.value)

    def start_if_allowed(self):
        # engine.start() asks quota.can_start(), which rolls the day over
        if self.engine.start():
            self.quota.record_play()
            log.info("Game started, %d plays left today", self.quota.plays_left)

    def close_result(self):
        if self.engine.close():
            self.quota.refresh()

    def handle_input(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit()
                sys.exit()
            if e.type != pygame.KEYDOWN:
                continue
            state = self.engine.state
            if e.key in DIR_KEYS:
                self.engine.set_desired_direction(DIR_KEYS[e.key])
            elif e.key in (pygame.K_SPACE, pygame.K_RETURN) and state is not GameState.RUNNING:
                self.start_if_allowed()
            elif e.key == pygame.K_ESCAPE and state.terminal:
                self.close_result()

    def draw(self):
        self.screen.fill(BLACK)
        self.renderer.draw_maze(self.engine)
        for i, ghost in enumerate(self.engine.ghosts):
            self.renderer.draw_ghost(ghost, i)
        self.renderer.draw_player(self.engine)
        self.renderer.draw_hud(self.engine, self.quota.plays_left)
        self.renderer.draw_toasts(self.toasts.live())

        state = self.engine.state
        if state is GameState.PRE_GAME:
            self.renderer.draw_pre_game(self.quota.plays_left)
        elif state.terminal:
            self.renderer.draw_result(self.engine, self.quota.plays_left)

    def run(self):
        """Main loop: input, due engine timers, draw."""
        while True:
            self.clock.tick(FPS)
            self.handle_input()
            self.engine.update()
            self.draw()
            pygame.display.flip()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    print("=" * 40)
    print("       COIN CHASE")
    print("=" * 40)
    print()
    print("Controls: WASD or Arrow Keys")
    print("SPACE: Start | ESC: Close result")
    print()
    App().run()


if __name__ == "__main__":
    main()
