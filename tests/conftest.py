import random

import pytest

from coin_chase.engine import GameEngine


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now=1000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


class PickLast:
    """Stand-in RNG that always takes the last option."""

    def choice(self, seq):
        return list(seq)[-1]


OPEN_ROOM = [
    "#######",
    "#     #",
    "#     #",
    "#     #",
    "#######",
]

TUNNEL = [
    "#####",
    "     ",
    "#####",
]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_engine(clock, rng):
    def factory(**kwargs):
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("rng", rng)
        return GameEngine(**kwargs)
    return factory


@pytest.fixture
def recorder():
    events = []

    def listen(event):
        events.append(event)
    listen.events = events
    return listen
