"""Procedural square-wave sound effects, one per engine event."""

from __future__ import annotations

import array
import logging
from typing import Dict, List, Sequence, Tuple

import pygame

from .engine import GameState
from .events import EventType, GameEvent

log = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# (frequency Hz, seconds); frequency 0 is a rest
Note = Tuple[float, float]

EFFECTS: Dict[str, Tuple[Sequence[Note], float]] = {
    # name: (notes, pulse duty cycle)
    "coin": ([(523.25, 0.04)], 0.125),
    "special": ([(784, 0.06), (988, 0.06), (1319, 0.12)], 0.125),
    "power": ([(200, 0.06), (350, 0.06), (500, 0.06), (800, 0.08)], 0.25),
    "eat_ghost": ([(330, 0.08), (440, 0.08), (554, 0.08), (659, 0.15)], 0.125),
    "death": ([(523, 0.12), (466, 0.12), (415, 0.12), (370, 0.12), (330, 0.15), (294, 0.2)], 0.25),
    "win": ([(523, 0.08), (659, 0.08), (784, 0.08), (1047, 0.2)], 0.125),
}


def square_wave(notes: Sequence[Note], duty: float, volume: float = 0.35) -> List[float]:
    """Pulse wave with a short attack and a linear release on every note."""
    samples: List[float] = []
    for freq, dur in notes:
        n = int(SAMPLE_RATE * dur)
        for i in range(n):
            if freq == 0:
                samples.append(0.0)
                continue
            t = i / SAMPLE_RATE
            progress = t / dur
            wave = 1.0 if (t * freq) % 1.0 < duty else -1.0
            if progress < 0.05:
                env = progress / 0.05
            else:
                env = 1.0 - (progress - 0.05) * 0.6
            samples.append(wave * env * volume)
    return samples


class AudioEngine:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        if not self.enabled:
            return
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 512)
            pygame.mixer.init()
            for name, (notes, duty) in EFFECTS.items():
                self.sounds[name] = self._make_sound(square_wave(notes, duty))
        except pygame.error as e:
            log.warning("Audio init failed, sound disabled: %s", e)
            self.enabled = False

    @staticmethod
    def _make_sound(samples: List[float]) -> pygame.mixer.Sound:
        arr = array.array("h", [int(max(-1, min(1, s)) * 32767) for s in samples])
        return pygame.mixer.Sound(buffer=arr)

    def play(self, name: str) -> None:
        if not self.enabled or name not in self.sounds:
            return
        self.sounds[name].play()

    def stop_all(self) -> None:
        if self.enabled:
            pygame.mixer.stop()

    def on_event(self, event: GameEvent) -> None:
        """Engine listener: pick the sound for an event."""
        if event.type is EventType.SCORE_CHANGED and event.value:
            self.play("coin")
        elif event.type is EventType.SPECIAL_PICKUP:
            self.play("special")
        elif event.type is EventType.POWER_UP:
            self.play("power")
        elif event.type is EventType.GHOST_EATEN:
            self.play("eat_ghost")
        elif event.type is EventType.STATE_CHANGED:
            if event.value is GameState.LOSE:
                self.stop_all()
                self.play("death")
            elif event.value is GameState.WIN:
                self.play("win")
