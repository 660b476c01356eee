from .types import (
    ROWS,
    COLS,
    DEFAULT_DISTRIBUTION,
    Cell,
    GridPos,
    Phase,
    SetupPhase,
    InitialFlipPhase,
    TurnPhase,
    FlipAfterDiscardPhase,
    RoundEndPhase,
    GameOverPhase,
    Intent,
    CreateGame,
    FlipInitial,
    DrawFromDeck,
    DrawFromDiscard,
    ReplaceCell,
    DiscardHeld,
    FlipAfterDiscard,
    EndTurn,
    StartNextRound,
)
from .deck import DeckExhaustedError, make_deck, deal_grid, deck_composition, deck_size
from .grid import Grid
from .core import (
    Player,
    GameConfig,
    GameState,
    new_game,
    create_game,
    start_round,
    flip_initial,
    draw_from_deck,
    draw_from_discard,
    replace_cell,
    discard_held,
    flip_after_discard,
    end_turn,
    start_next_round,
    apply_intent,
    allowed_intents,
    round_scores,
    is_game_over,
    winners,
    card_census,
    is_conserved,
    to_json,
)
from .scheduler import AutoAdvance, advance_if_current, wants_auto_advance

__all__ = [
    "ROWS",
    "COLS",
    "DEFAULT_DISTRIBUTION",
    "Cell",
    "GridPos",
    "Phase",
    "SetupPhase",
    "InitialFlipPhase",
    "TurnPhase",
    "FlipAfterDiscardPhase",
    "RoundEndPhase",
    "GameOverPhase",
    "Intent",
    "CreateGame",
    "FlipInitial",
    "DrawFromDeck",
    "DrawFromDiscard",
    "ReplaceCell",
    "DiscardHeld",
    "FlipAfterDiscard",
    "EndTurn",
    "StartNextRound",
    "DeckExhaustedError",
    "make_deck",
    "deal_grid",
    "deck_composition",
    "deck_size",
    "Grid",
    "Player",
    "GameConfig",
    "GameState",
    "new_game",
    "create_game",
    "start_round",
    "flip_initial",
    "draw_from_deck",
    "draw_from_discard",
    "replace_cell",
    "discard_held",
    "flip_after_discard",
    "end_turn",
    "start_next_round",
    "apply_intent",
    "allowed_intents",
    "round_scores",
    "is_game_over",
    "winners",
    "card_census",
    "is_conserved",
    "to_json",
    "AutoAdvance",
    "advance_if_current",
    "wants_auto_advance",
]
