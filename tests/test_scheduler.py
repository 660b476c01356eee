import threading
import time

from skyjo import (
    AutoAdvance,
    GameConfig,
    TurnPhase,
    advance_if_current,
    create_game,
    draw_from_deck,
    end_turn,
    flip_initial,
    new_game,
    replace_cell,
    wants_auto_advance,
)


def _acted_state():
    s = create_game(new_game(GameConfig(seed=11)), ["Ann", "Bob"], 100)
    for _ in range(2):
        s = flip_initial(s, 0, 0)
        s = flip_initial(s, 0, 1)
    s = replace_cell(draw_from_deck(s), 1, 1)
    assert s.phase == TurnPhase(acted=True)
    return s


def test_advance_if_current_moves_on_for_matching_version():
    s = _acted_state()
    assert wants_auto_advance(s)
    nxt = advance_if_current(s, s.version)
    assert nxt.current_idx == 1
    assert nxt.phase == TurnPhase()


def test_advance_if_current_is_dropped_when_superseded():
    s = _acted_state()
    stale = s.version
    moved = end_turn(s)
    assert advance_if_current(moved, stale) is moved
    # nothing to advance before acting either
    assert not wants_auto_advance(moved)
    assert advance_if_current(moved, moved.version) is moved


def test_auto_advance_fires_with_scheduled_version():
    fired = []
    done = threading.Event()

    def fire(version):
        fired.append(version)
        done.set()

    auto = AutoAdvance(0.01, fire)
    assert auto.schedule(5)
    assert done.wait(2.0)
    assert fired == [5]
    assert auto.pending_version is None


def test_auto_advance_cancel_and_reschedule():
    fired = []
    auto = AutoAdvance(0.05, fired.append)
    auto.schedule(1)
    auto.cancel()
    auto.schedule(2)
    auto.schedule(3)
    time.sleep(0.3)
    assert fired == [3]


def test_auto_advance_disabled_with_zero_delay():
    fired = []
    auto = AutoAdvance(0, fired.append)
    assert not auto.enabled
    assert not auto.schedule(1)
    assert auto.pending_version is None
    assert fired == []
