from typing import Any, Dict, List, cast

from skyjo import (
    DEFAULT_DISTRIBUTION,
    GameConfig,
    allowed_intents,
    create_game,
    deck_size,
    discard_held,
    draw_from_deck,
    end_turn,
    flip_initial,
    new_game,
    to_json,
)


def test_setup_snapshot():
    s = to_json(new_game(GameConfig(seed=1)))
    assert s["schemaVersion"] == 1
    assert s["phase"] == {"kind": "setup"}
    assert s["players"] == []
    assert s["allowed"] == ["createGame"]
    assert s["deckSize"] == 0


def test_hidden_values_are_not_exposed():
    state = create_game(new_game(GameConfig(seed=3)), ["Ann", "Bob"], 100)
    state = flip_initial(state, 1, 2)
    s = to_json(state)
    assert s["phase"] == {"kind": "initialFlip", "player": 0, "flipsRemaining": 1}
    assert s["initialFlipPlayer"] == 0 and s["flipsRemaining"] == 1
    grid = cast(List[Dict[str, Any]], s["players"])[0]["grid"]
    assert grid[1][2]["faceUp"] is True
    assert grid[1][2]["value"] == state.players[0].grid.cell(1, 2).value
    assert grid[0][0] == {"value": None, "faceUp": False, "removed": False}
    players = cast(List[Dict[str, Any]], s["players"])
    assert players[0]["visibleScore"] == state.players[0].grid.cell(1, 2).value
    assert s["discardTop"] == state.discard[-1]
    assert s["deckSize"] == deck_size(DEFAULT_DISTRIBUTION) - 25
    summary = cast(Dict[str, Any], s["deckSummary"])
    # every card minus the discard top and one face-up cell
    assert summary["remainingTotal"] == deck_size(DEFAULT_DISTRIBUTION) - 2


def test_held_card_and_allowed_intents():
    state = create_game(new_game(GameConfig(seed=3)), ["Ann", "Bob"], 100)
    for _ in range(2):
        state = flip_initial(state, 0, 0)
        state = flip_initial(state, 0, 1)
    assert allowed_intents(state) == ["drawFromDeck", "drawFromDiscard", "endTurn"]
    state = draw_from_deck(state)
    s = to_json(state)
    assert s["heldCard"] == state.held
    assert s["phase"] == {"kind": "turn", "held": state.held, "acted": False}
    assert s["allowed"] == ["replaceCell", "discardHeld"]
    state = discard_held(state)
    assert to_json(state)["allowed"] == ["flipAfterDiscard"]
    assert to_json(state)["heldCard"] is None


def test_round_end_reveals_every_grid():
    state = create_game(new_game(GameConfig(seed=3)), ["Ann", "Bob"], 500)
    for _ in range(2):
        state = flip_initial(state, 0, 0)
        state = flip_initial(state, 0, 1)
    state.closing_idx = 0
    state.current_idx = 1
    state = end_turn(state)
    s = to_json(state)
    assert cast(Dict[str, Any], s["phase"])["kind"] == "roundEnd"
    for p in cast(List[Dict[str, Any]], s["players"]):
        for row in p["grid"]:
            for cell in row:
                assert cell["value"] is not None
    assert s["allowed"] == ["startNextRound"]


def test_engine_has_no_io_calls():
    import os
    bad = []
    for root, _dirs, files in os.walk("skyjo"):
        for fn in files:
            if not fn.endswith(".py"):
                continue
            path = os.path.join(root, fn)
            with open(path, "r", encoding="utf-8") as f:
                txt = f.read()
                if "print(" in txt or "input(" in txt:
                    bad.append(path)
    assert not bad, f"I/O found in engine modules: {bad}"
