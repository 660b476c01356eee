from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Sequence, Tuple, Union

ROWS: int = 3
COLS: int = 4

# Playable approximation of the retail deck (186 cards)
DEFAULT_DISTRIBUTION: Dict[int, int] = {
    -2: 10,
    -1: 14,
    0: 16,
    1: 16,
    2: 16,
    3: 16,
    4: 16,
    5: 16,
    6: 14,
    7: 12,
    8: 10,
    9: 9,
    10: 8,
    11: 7,
    12: 6,
}

GridPos = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    value: int
    face_up: bool = False
    removed: bool = False

    def __str__(self) -> str:
        if self.removed:
            return ".."
        return f"{self.value:>2}" if self.face_up else " ?"


# --- Phase variants: each carries only the fields valid in that phase ---

@dataclass(frozen=True)
class SetupPhase:
    kind: Literal["setup"] = "setup"


@dataclass(frozen=True)
class InitialFlipPhase:
    player: int  # who is doing their initial flips
    flips_remaining: int = 2
    kind: Literal["initialFlip"] = "initialFlip"


@dataclass(frozen=True)
class TurnPhase:
    held: Optional[int] = None  # drawn card in flight, current player only
    acted: bool = False  # a reveal-producing action happened this turn
    kind: Literal["turn"] = "turn"


@dataclass(frozen=True)
class FlipAfterDiscardPhase:
    kind: Literal["flipAfterDiscard"] = "flipAfterDiscard"


@dataclass(frozen=True)
class RoundEndPhase:
    round_scores: Tuple[int, ...]
    kind: Literal["roundEnd"] = "roundEnd"


@dataclass(frozen=True)
class GameOverPhase:
    round_scores: Tuple[int, ...]
    winners: Tuple[int, ...]  # lowest total wins, ties kept
    kind: Literal["gameOver"] = "gameOver"


Phase = Union[
    SetupPhase,
    InitialFlipPhase,
    TurnPhase,
    FlipAfterDiscardPhase,
    RoundEndPhase,
    GameOverPhase,
]


# --- Intents dispatched by the presentation layer ---

@dataclass(frozen=True)
class CreateGame:
    names: Sequence[str]
    target_score: Optional[int] = 100


@dataclass(frozen=True)
class FlipInitial:
    row: int
    col: int


@dataclass(frozen=True)
class DrawFromDeck:
    pass


@dataclass(frozen=True)
class DrawFromDiscard:
    pass


@dataclass(frozen=True)
class ReplaceCell:
    row: int
    col: int


@dataclass(frozen=True)
class DiscardHeld:
    pass


@dataclass(frozen=True)
class FlipAfterDiscard:
    row: int
    col: int


@dataclass(frozen=True)
class EndTurn:
    pass


@dataclass(frozen=True)
class StartNextRound:
    pass


Intent = Union[
    CreateGame,
    FlipInitial,
    DrawFromDeck,
    DrawFromDiscard,
    ReplaceCell,
    DiscardHeld,
    FlipAfterDiscard,
    EndTurn,
    StartNextRound,
]
