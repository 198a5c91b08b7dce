import random

import pytest

from coin_chase import config
from coin_chase.engine import GameEngine, GameState
from coin_chase.entities import Direction
from coin_chase.events import EventType
from coin_chase.maze import CellKind

from conftest import FakeClock, PickLast

CORRIDOR = [
    "######",
    "#  o.#",
    "######",
]

AMBUSH = [
    "#####",
    "#   #",
    "## ##",
    "## ##",
    "#####",
]


def run_ticks(engine, clock, n):
    for _ in range(n):
        clock.advance(engine.tick_ms)
        engine.update()


def corridor_engine(make_engine):
    return make_engine(layout=CORRIDOR, player_start=(1, 1), ghost_starts=[],
                       special_slots=[(1, 2)])


def ambush_engine(make_engine, **kwargs):
    return make_engine(layout=AMBUSH, player_start=(1, 1), ghost_starts=[(1, 3)],
                       special_slots=[(3, 2)], **kwargs)


def test_start_sets_up_a_fresh_session(make_engine, recorder):
    engine = make_engine()
    engine.events.subscribe(recorder)
    assert engine.state is GameState.PRE_GAME
    assert engine.ghosts == ()

    assert engine.start()
    assert engine.state is GameState.RUNNING
    assert engine.score == 0
    assert engine.tick_count == 0
    assert engine.remaining == engine.maze.count_collectibles()
    assert engine.player.pos == config.PLAYER_START
    assert engine.player.direction is Direction.STOP
    assert [g.pos for g in engine.ghosts] == list(config.GHOST_STARTS)
    assert all(g.direction is Direction.UP for g in engine.ghosts)
    assert [e.value for e in recorder.events] == [GameState.RUNNING]


def test_start_while_running_is_refused(make_engine):
    engine = make_engine()
    engine.start()
    maze = engine.maze
    assert not engine.start()
    assert engine.maze is maze


def test_start_respects_the_play_quota(make_engine):
    engine = make_engine(can_start=lambda: False)
    assert not engine.start()
    assert engine.state is GameState.PRE_GAME
    assert engine.scheduler.pending == []


def test_direction_only_counts_while_running(make_engine):
    engine = make_engine()
    engine.set_desired_direction(Direction.UP)
    assert engine.desired_direction is Direction.STOP
    engine.start()
    engine.set_desired_direction(Direction.LEFT)
    assert engine.desired_direction is Direction.LEFT


def test_direction_must_be_a_direction(make_engine):
    engine = make_engine()
    engine.start()
    with pytest.raises(TypeError):
        engine.set_desired_direction("left")


def test_tick_outside_running_does_nothing(make_engine):
    engine = make_engine()
    engine.tick()
    assert engine.tick_count == 0


def test_ticks_follow_the_clock(make_engine, clock):
    engine = make_engine()
    engine.start()
    clock.advance(config.TICK_MS - 1)
    assert engine.update() == 0
    clock.advance(1)
    assert engine.update() == 1
    clock.advance(3 * config.TICK_MS)
    assert engine.update() == 3
    assert engine.tick_count == 4


def test_player_eats_a_coin_then_turns(make_engine, clock):
    engine = make_engine()
    engine.start()
    before = engine.remaining
    engine.set_desired_direction(Direction.LEFT)
    run_ticks(engine, clock, 3)

    assert engine.player.pos == (16, 6)
    assert engine.score == config.NORMAL_COIN_POINTS
    assert engine.maze.kind_at((16, 6)) is CellKind.EMPTY
    assert engine.remaining == before - 1

    engine.set_desired_direction(Direction.UP)
    run_ticks(engine, clock, 1)
    assert engine.player.pos == (15, 6)
    assert engine.player.direction is Direction.UP


def test_clearing_the_board_wins_on_the_same_tick(make_engine, clock, recorder):
    engine = corridor_engine(make_engine)
    engine.start()
    engine.events.subscribe(recorder)
    engine.set_desired_direction(Direction.RIGHT)
    run_ticks(engine, clock, 3)

    assert engine.state is GameState.WIN
    assert engine.tick_count == 3
    assert engine.remaining == 0
    assert engine.score == pytest.approx(5.2)
    # the pellet's frighten timer went with the game
    assert engine.resolver.frighten_timer is None
    assert engine.scheduler.pending == []
    states = [e.value for e in recorder.events if e.type is EventType.STATE_CHANGED]
    assert states == [GameState.WIN]

    run_ticks(engine, clock, 5)
    assert engine.tick_count == 3


def test_live_ghost_ends_the_game(make_engine, clock):
    engine = ambush_engine(make_engine)
    engine.start()
    before = engine.remaining
    run_ticks(engine, clock, 3)
    assert engine.state is GameState.RUNNING
    assert engine.ghosts[0].pos == (1, 2)

    run_ticks(engine, clock, 1)
    assert engine.state is GameState.LOSE
    assert engine.tick_count == 4
    assert engine.score == 0
    assert engine.remaining == before
    assert engine.scheduler.pending == []


@pytest.mark.parametrize("item,kind", [
    ("o", CellKind.POWER_PELLET),
    (".", CellKind.COIN),
])
def test_stepping_onto_a_guarded_pickup_loses(make_engine, clock, recorder, item, kind):
    engine = make_engine(layout=["######", f"# {item}  #", "######"], player_start=(1, 1),
                         ghost_starts=[(1, 2)], special_slots=[(1, 4)])
    engine.start()
    engine.events.subscribe(recorder)
    before = engine.remaining
    engine.set_desired_direction(Direction.RIGHT)
    run_ticks(engine, clock, 1)

    assert engine.player.pos == (1, 2)
    assert engine.state is GameState.LOSE
    assert engine.score == 0
    assert engine.remaining == before
    assert engine.maze.kind_at((1, 2)) is kind
    ghost = engine.ghosts[0]
    assert not ghost.frightened and not ghost.eaten
    assert [e.type for e in recorder.events] == [EventType.STATE_CHANGED]


def test_frightened_ghost_is_eaten_instead(make_engine, clock):
    layout = list(AMBUSH)
    layout[1] = "#o  #"
    engine = make_engine(layout=layout, player_start=(1, 1), ghost_starts=[(1, 3)],
                         special_slots=[(3, 2)], rng=PickLast())
    engine.start()
    run_ticks(engine, clock, 1)
    assert engine.ghosts[0].frightened

    run_ticks(engine, clock, 3)
    ghost = engine.ghosts[0]
    assert engine.state is GameState.RUNNING
    assert ghost.eaten
    assert engine.score == config.GHOST_POINTS


def test_close_returns_to_pre_game_and_restart_is_fresh(make_engine, clock):
    engine = ambush_engine(make_engine)
    assert not engine.close()
    engine.start()
    assert not engine.close()
    run_ticks(engine, clock, 4)
    assert engine.state is GameState.LOSE

    assert engine.close()
    assert engine.state is GameState.PRE_GAME
    assert engine.start()
    assert engine.tick_count == 0
    assert engine.player.pos == (1, 1)
    assert engine.ghosts[0].pos == (1, 3)
    assert engine.remaining == engine.maze.count_collectibles() == 1


def test_restart_straight_from_a_finished_game(make_engine, clock):
    engine = corridor_engine(make_engine)
    engine.start()
    engine.set_desired_direction(Direction.RIGHT)
    run_ticks(engine, clock, 3)
    assert engine.state is GameState.WIN

    assert engine.start()
    assert engine.score == 0
    assert engine.high_score == pytest.approx(5.2)
    assert engine.remaining == 3
    assert engine.desired_direction is Direction.STOP


def test_high_score_is_seeded_and_raised(make_engine, clock, recorder):
    engine = make_engine(high_score=0.1)
    engine.events.subscribe(recorder)
    engine.start()
    engine.set_desired_direction(Direction.LEFT)
    run_ticks(engine, clock, 3)
    assert engine.high_score == config.NORMAL_COIN_POINTS
    raised = [e.value for e in recorder.events if e.type is EventType.HIGH_SCORE_CHANGED]
    assert raised == [config.NORMAL_COIN_POINTS]


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_random_play_keeps_the_books_straight(seed):
    clock = FakeClock()
    engine = GameEngine(clock=clock, rng=random.Random(seed))
    moves = random.Random(seed + 100)
    engine.start()
    for _ in range(400):
        if moves.random() < 0.2:
            engine.set_desired_direction(moves.choice(list(Direction)))
        run_ticks(engine, clock, 1)
        assert 0 <= engine.score <= config.MAX_POINTS
        assert engine.remaining == engine.maze.count_collectibles()
        assert not engine.maze.is_wall(engine.player.pos)
        assert not any(engine.maze.is_wall(g.pos) for g in engine.ghosts)
        if engine.state is not GameState.RUNNING:
            assert engine.scheduler.pending == []
            break


def test_same_seed_plays_the_same_game():
    def play():
        clock = FakeClock()
        engine = GameEngine(clock=clock, rng=random.Random(99))
        engine.start()
        script = [Direction.LEFT] * 5 + [Direction.UP] * 8 + [Direction.RIGHT] * 12
        for direction in script:
            engine.set_desired_direction(direction)
            run_ticks(engine, clock, 1)
        return (engine.state, engine.score, engine.player.pos,
                [g.pos for g in engine.ghosts], engine.maze.snapshot())

    assert play() == play()
