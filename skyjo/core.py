from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import random

from .types import (
    COLS,
    DEFAULT_DISTRIBUTION,
    ROWS,
    CreateGame,
    DiscardHeld,
    DrawFromDeck,
    DrawFromDiscard,
    EndTurn,
    FlipAfterDiscard,
    FlipAfterDiscardPhase,
    FlipInitial,
    GameOverPhase,
    InitialFlipPhase,
    Intent,
    Phase,
    ReplaceCell,
    RoundEndPhase,
    SetupPhase,
    StartNextRound,
    TurnPhase,
)
from .grid import Grid
from .deck import (
    DeckExhaustedError,
    deal_grid,
    deck_composition,
    deck_size,
    make_deck,
    required_cards,
    unseen_distribution,
    validate_distribution,
)

INITIAL_FLIPS: int = 2
SCHEMA_VERSION: int = 1


def _append_log(state: "GameState", msg: str) -> None:
    state.logs.append(msg)


def _top_discard(state: "GameState") -> Optional[int]:
    return state.discard[-1] if state.discard else None


@dataclass
class GameConfig:
    distribution: Dict[int, int] = field(default_factory=lambda: dict(DEFAULT_DISTRIBUTION))
    target_score: int = 100
    min_target: int = 30
    max_target: int = 500
    min_players: int = 2
    max_players: int = 6
    seed: Optional[int] = None  # None -> fresh entropy every round


@dataclass
class Player:
    id: int
    name: str
    grid: Grid
    total_score: int = 0


@dataclass
class GameState:
    cfg: GameConfig
    phase: Phase = field(default_factory=SetupPhase)
    players: List[Player] = field(default_factory=list)
    deck: List[int] = field(default_factory=list)
    discard: List[int] = field(default_factory=list)
    current_idx: int = 0
    closing_idx: Optional[int] = None
    target_score: int = 100
    round_number: int = 0
    version: int = 0
    logs: List[str] = field(default_factory=list)

    @property
    def held(self) -> Optional[int]:
        return self.phase.held if isinstance(self.phase, TurnPhase) else None


def new_game(cfg: Optional[GameConfig] = None) -> GameState:
    cfg = cfg if cfg is not None else GameConfig()
    validate_distribution(cfg.distribution)
    return GameState(cfg=cfg, target_score=cfg.target_score)


def _clone(state: GameState) -> GameState:
    return GameState(
        cfg=state.cfg,
        phase=state.phase,
        players=[
            Player(id=p.id, name=p.name, grid=p.grid.clone(), total_score=p.total_score)
            for p in state.players
        ],
        deck=list(state.deck),
        discard=list(state.discard),
        current_idx=state.current_idx,
        closing_idx=state.closing_idx,
        target_score=state.target_score,
        round_number=state.round_number,
        version=state.version,
        logs=list(state.logs),
    )


def _commit(state: GameState) -> GameState:
    state.version += 1
    return state


def _player(state: GameState) -> Player:
    return state.players[state.current_idx]


def _next_idx(state: GameState) -> int:
    return (state.current_idx + 1) % len(state.players)


def _round_rng(cfg: GameConfig, round_number: int) -> random.Random:
    if cfg.seed is None:
        return random.Random()
    return random.Random(f"{cfg.seed}:{round_number}")


def clamp_target(cfg: GameConfig, target_score: Optional[int]) -> int:
    target = target_score or cfg.target_score
    return max(cfg.min_target, min(cfg.max_target, int(target)))


def _deal_round(state: GameState, rng: Optional[random.Random]) -> None:
    need = required_cards(len(state.players))
    have = deck_size(state.cfg.distribution)
    if have < need:
        raise DeckExhaustedError(
            f"Deck of {have} cards cannot deal {len(state.players)} players (needs {need})"
        )
    deck = make_deck(state.cfg.distribution, rng if rng is not None else _round_rng(state.cfg, state.round_number))
    for p in state.players:
        cells, deck = deal_grid(deck)
        p.grid = Grid(cells)
    if not deck:
        raise DeckExhaustedError("Deck ran out before the initial discard.")
    state.discard = [deck.pop()]
    state.deck = deck
    state.phase = InitialFlipPhase(player=0, flips_remaining=INITIAL_FLIPS)
    state.current_idx = 0
    state.closing_idx = None
    _append_log(state, f"DEAL: round {state.round_number}")
    _append_log(state, f"INIT_DISCARD: {state.discard[-1]}")


def start_round(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Deal a fresh round to the current players.

    Raises DeckExhaustedError when the distribution cannot cover
    12 cards per player plus the initial discard.
    """
    s = _clone(state)
    _deal_round(s, rng)
    return _commit(s)


def create_game(
    state: GameState,
    names: Sequence[str],
    target_score: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    if not isinstance(state.phase, SetupPhase):
        return state
    trimmed = [n.strip() for n in names if isinstance(n, str)]
    valid = [n for n in trimmed if n][: state.cfg.max_players]
    if len(valid) < state.cfg.min_players:
        return state
    s = _clone(state)
    s.players = [Player(id=i, name=n, grid=Grid()) for i, n in enumerate(valid)]
    s.target_score = clamp_target(s.cfg, target_score)
    s.round_number = 1
    s.logs = [f"NEW_GAME: {', '.join(valid)}; target {s.target_score}"]
    _deal_round(s, rng)
    return _commit(s)


def flip_initial(state: GameState, row: int, col: int) -> GameState:
    phase = state.phase
    if not isinstance(phase, InitialFlipPhase):
        return state
    if not state.players[phase.player].grid.can_flip(row, col):
        return state
    s = _clone(state)
    p = s.players[phase.player]
    p.grid.flip(row, col)
    _append_log(s, f"INITIAL_FLIP: {p.name} ({row},{col}) -> {p.grid.cell(row, col).value}")
    remaining = phase.flips_remaining - 1
    if remaining > 0:
        s.phase = InitialFlipPhase(player=phase.player, flips_remaining=remaining)
    elif phase.player == len(s.players) - 1:
        s.phase = TurnPhase()
        s.current_idx = 0
        _append_log(s, f"TURN: {_player(s).name}")
    else:
        s.phase = InitialFlipPhase(player=phase.player + 1, flips_remaining=INITIAL_FLIPS)
    return _commit(s)


def _can_draw(state: GameState) -> bool:
    phase = state.phase
    return isinstance(phase, TurnPhase) and phase.held is None and not phase.acted


def draw_from_deck(state: GameState) -> GameState:
    if not _can_draw(state) or not state.deck:
        return state
    s = _clone(state)
    card = s.deck.pop()
    s.phase = TurnPhase(held=card)
    _append_log(s, f"DRAW_DECK: {_player(s).name} -> {card}")
    return _commit(s)


def draw_from_discard(state: GameState) -> GameState:
    if not _can_draw(state) or not state.discard:
        return state
    s = _clone(state)
    card = s.discard.pop()
    s.phase = TurnPhase(held=card)
    _append_log(s, f"DRAW_DISCARD: {_player(s).name} -> {card}")
    return _commit(s)


def _after_reveal(state: GameState) -> None:
    # Column clear, then closing detection for the acting player
    p = _player(state)
    for c in p.grid.clear_columns():
        _append_log(state, f"COLUMN_CLEAR: {p.name} col {c} ({p.grid.cell(0, c).value})")
    if state.closing_idx is None and p.grid.all_revealed_or_removed():
        state.closing_idx = state.current_idx
        _append_log(state, f"CLOSING: {p.name}")
    state.phase = TurnPhase(acted=True)


def replace_cell(state: GameState, row: int, col: int) -> GameState:
    phase = state.phase
    if not isinstance(phase, TurnPhase) or phase.held is None:
        return state
    if not Grid.in_bounds(row, col) or _player(state).grid.cell(row, col).removed:
        return state
    s = _clone(state)
    p = _player(s)
    old = p.grid.replace(row, col, phase.held)
    s.discard.append(old)
    _append_log(s, f"REPLACE: {p.name} ({row},{col}) {old} -> {phase.held}")
    _after_reveal(s)
    return _commit(s)


def discard_held(state: GameState) -> GameState:
    phase = state.phase
    if not isinstance(phase, TurnPhase) or phase.held is None:
        return state
    s = _clone(state)
    s.discard.append(phase.held)
    s.phase = FlipAfterDiscardPhase()
    _append_log(s, f"DISCARD: {_player(s).name} -> {phase.held}")
    return _commit(s)


def flip_after_discard(state: GameState, row: int, col: int) -> GameState:
    if not isinstance(state.phase, FlipAfterDiscardPhase):
        return state
    if not _player(state).grid.can_flip(row, col):
        return state
    s = _clone(state)
    p = _player(s)
    p.grid.flip(row, col)
    _append_log(s, f"FLIP: {p.name} ({row},{col}) -> {p.grid.cell(row, col).value}")
    _after_reveal(s)
    return _commit(s)


def round_scores(state: GameState) -> List[int]:
    return [p.grid.full_sum() for p in state.players]


def is_game_over(state: GameState) -> bool:
    return any(p.total_score >= state.target_score for p in state.players)


def winners(state: GameState) -> List[int]:
    if not state.players:
        return []
    best = min(p.total_score for p in state.players)
    return [i for i, p in enumerate(state.players) if p.total_score == best]


def _finish_round(state: GameState) -> None:
    scores = round_scores(state)
    # totals follow the round score sign: a negative round lowers them
    for p, pts in zip(state.players, scores):
        p.total_score += pts
    summary = ", ".join(f"{p.name} +{pts} = {p.total_score}" for p, pts in zip(state.players, scores))
    _append_log(state, f"ROUND_END: round {state.round_number}; {summary}")
    if is_game_over(state):
        won = tuple(winners(state))
        state.phase = GameOverPhase(round_scores=tuple(scores), winners=won)
        _append_log(state, "GAME_OVER: " + ", ".join(state.players[i].name for i in won))
    else:
        state.phase = RoundEndPhase(round_scores=tuple(scores))


def end_turn(state: GameState) -> GameState:
    phase = state.phase
    if not isinstance(phase, TurnPhase) or phase.held is not None:
        return state
    s = _clone(state)
    nxt = _next_idx(s)
    if s.closing_idx is not None and nxt == s.closing_idx:
        _finish_round(s)
        return _commit(s)
    s.current_idx = nxt
    s.phase = TurnPhase()
    _append_log(s, f"TURN: {_player(s).name}")
    return _commit(s)


def start_next_round(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    if not isinstance(state.phase, RoundEndPhase):
        return state
    s = _clone(state)
    s.round_number += 1
    _deal_round(s, rng)
    return _commit(s)


def apply_intent(state: GameState, intent: Intent) -> GameState:
    """Pure reducer: returns the next state, or `state` itself when rejected."""
    if isinstance(intent, CreateGame):
        return create_game(state, intent.names, intent.target_score)
    if isinstance(intent, FlipInitial):
        return flip_initial(state, intent.row, intent.col)
    if isinstance(intent, DrawFromDeck):
        return draw_from_deck(state)
    if isinstance(intent, DrawFromDiscard):
        return draw_from_discard(state)
    if isinstance(intent, ReplaceCell):
        return replace_cell(state, intent.row, intent.col)
    if isinstance(intent, DiscardHeld):
        return discard_held(state)
    if isinstance(intent, FlipAfterDiscard):
        return flip_after_discard(state, intent.row, intent.col)
    if isinstance(intent, EndTurn):
        return end_turn(state)
    if isinstance(intent, StartNextRound):
        return start_next_round(state)
    raise ValueError(f"Unknown intent: {intent!r}")


def allowed_intents(state: GameState) -> List[str]:
    # For the UI to disable unavailable actions
    phase = state.phase
    if isinstance(phase, SetupPhase):
        return ["createGame"]
    if isinstance(phase, InitialFlipPhase):
        return ["flipInitial"]
    if isinstance(phase, TurnPhase):
        if phase.held is not None:
            return ["replaceCell", "discardHeld"]
        out: List[str] = []
        if not phase.acted:
            if state.deck:
                out.append("drawFromDeck")
            if state.discard:
                out.append("drawFromDiscard")
        out.append("endTurn")
        return out
    if isinstance(phase, FlipAfterDiscardPhase):
        return ["flipAfterDiscard"]
    if isinstance(phase, RoundEndPhase):
        return ["startNextRound"]
    return []


def card_census(state: GameState) -> Counter:
    """Every card of the round: deck, discard, all grid cells and the held card."""
    cnt: Counter = Counter(state.deck)
    cnt.update(state.discard)
    for p in state.players:
        cnt.update(p.grid.values())
    if state.held is not None:
        cnt[state.held] += 1
    return cnt


def is_conserved(state: GameState) -> bool:
    if not state.players:
        return True
    return card_census(state) == deck_composition(state.cfg.distribution)


# --- Rendering snapshot (pure, no I/O) ---

def _phase_to_obj(phase: Phase) -> Dict[str, object]:
    obj: Dict[str, object] = {"kind": phase.kind}
    if isinstance(phase, InitialFlipPhase):
        obj["player"] = phase.player
        obj["flipsRemaining"] = phase.flips_remaining
    elif isinstance(phase, TurnPhase):
        obj["held"] = phase.held
        obj["acted"] = phase.acted
    elif isinstance(phase, RoundEndPhase):
        obj["roundScores"] = list(phase.round_scores)
    elif isinstance(phase, GameOverPhase):
        obj["roundScores"] = list(phase.round_scores)
        obj["winners"] = list(phase.winners)
    return obj


def _deck_summary(state: GameState) -> Dict[str, object]:
    seen: List[int] = list(state.discard)
    for p in state.players:
        seen.extend(p.grid.face_up_values())
    if state.held is not None:
        seen.append(state.held)
    dist = unseen_distribution(deck_composition(state.cfg.distribution), seen) if state.players else {}
    return {
        "remainingTotal": sum(dist.values()),
        "valuesDist": {str(v): k for v, k in dist.items()},
    }


def to_json(state: GameState) -> Dict[str, object]:
    # Hidden values stay hidden until the round is scored
    show_all = isinstance(state.phase, (RoundEndPhase, GameOverPhase))
    players_obj: List[Dict[str, object]] = []
    for p in state.players:
        grid_rows: List[List[Dict[str, object]]] = []
        for r in range(ROWS):
            row: List[Dict[str, object]] = []
            for c in range(COLS):
                cell = p.grid.cell(r, c)
                row.append({
                    "value": cell.value if (cell.face_up or show_all) else None,
                    "faceUp": cell.face_up,
                    "removed": cell.removed,
                })
            grid_rows.append(row)
        players_obj.append({
            "id": p.id,
            "name": p.name,
            "totalScore": p.total_score,
            "visibleScore": p.grid.visible_sum(),
            "grid": grid_rows,
        })

    phase = state.phase
    flip_player: Optional[int] = phase.player if isinstance(phase, InitialFlipPhase) else None
    flips: int = phase.flips_remaining if isinstance(phase, InitialFlipPhase) else 0

    return {
        "schemaVersion": SCHEMA_VERSION,
        "version": state.version,
        "phase": _phase_to_obj(phase),
        "players": players_obj,
        "currentPlayer": state.current_idx,
        "closingPlayer": state.closing_idx,
        "initialFlipPlayer": flip_player,
        "flipsRemaining": flips,
        "heldCard": state.held,
        "deckSize": len(state.deck),
        "discardTop": _top_discard(state),
        "deckSummary": _deck_summary(state),
        "roundNumber": state.round_number,
        "targetScore": state.target_score,
        "allowed": allowed_intents(state),
        "logs": list(state.logs),
    }
