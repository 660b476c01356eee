from __future__ import annotations

from typing import List, Optional

from skyjo import (
    COLS,
    ROWS,
    CreateGame,
    DiscardHeld,
    DrawFromDeck,
    DrawFromDiscard,
    EndTurn,
    FlipAfterDiscard,
    FlipInitial,
    GameConfig,
    GameOverPhase,
    GameState,
    Grid,
    GridPos,
    InitialFlipPhase,
    Intent,
    ReplaceCell,
    RoundEndPhase,
    StartNextRound,
    TurnPhase,
    FlipAfterDiscardPhase,
    apply_intent,
    new_game,
)


DEFAULT_NAMES: List[str] = ["Player 1", "Player 2"]
DEFAULT_TARGET: int = 100


def print_grid(g: Grid, title: str = "", reveal: bool = False) -> None:
    if title:
        print(f"--- {title} ---")
    print("     " + " ".join(f"{c:>3}" for c in range(COLS)))
    for r in range(ROWS):
        parts: List[str] = []
        for c in range(COLS):
            cell = g.cell(r, c)
            if reveal and not cell.removed:
                parts.append(f"{cell.value:>2}")
            else:
                parts.append(str(cell))
        print(f"  {r}: " + " ".join(f"{x:>3}" for x in parts))
    print()


def ask_pos() -> Optional[GridPos]:
    s = input(f"Cell (row col) in 0..{ROWS - 1} 0..{COLS - 1}: ").strip().split()
    if len(s) != 2:
        print("Please input two integers.")
        return None
    try:
        return (int(s[0]), int(s[1]))
    except ValueError:
        print("Invalid integers.")
        return None


def drain_logs(state: GameState, seen: int) -> int:
    for line in state.logs[seen:]:
        print(line)
    return len(state.logs)


def ask_setup() -> Intent:
    print("Enter 2-6 player names, empty line to finish.")
    names: List[str] = []
    while len(names) < 6:
        s = input(f"Name {len(names) + 1}: ").strip()
        if not s:
            break
        names.append(s)
    if len(names) < 2:
        print(f"Using default names: {', '.join(DEFAULT_NAMES)}")
        names = list(DEFAULT_NAMES)
    raw = input(f"Target score [{DEFAULT_TARGET}]: ").strip()
    try:
        target = int(raw) if raw else DEFAULT_TARGET
    except ValueError:
        target = DEFAULT_TARGET
    return CreateGame(names=names, target_score=target)


def ask_turn(state: GameState) -> Optional[Intent]:
    p = state.players[state.current_idx]
    phase = state.phase
    top = state.discard[-1] if state.discard else None
    print(f"Turn: {p.name} | deck {len(state.deck)} | discard top: {top if top is not None else '(empty)'}")
    print_grid(p.grid, f"{p.name}'s grid")
    if isinstance(phase, FlipAfterDiscardPhase):
        print("Flip a face-down card.")
        pos = ask_pos()
        return FlipAfterDiscard(*pos) if pos else None
    assert isinstance(phase, TurnPhase)
    if phase.held is not None:
        a = input(f"Holding {phase.held}: (r)eplace a cell or (d)iscard? ").strip().lower()
        if a == "r":
            pos = ask_pos()
            return ReplaceCell(*pos) if pos else None
        if a == "d":
            return DiscardHeld()
        return None
    if phase.acted:
        input("Press enter to pass to the next player.")
        return EndTurn()
    a = input("Draw from (k) deck, (d) discard, or (p)ass? ").strip().lower()
    if a == "k":
        return DrawFromDeck()
    if a == "d":
        return DrawFromDiscard()
    if a == "p":
        return EndTurn()
    return None


def show_scores(state: GameState) -> None:
    phase = state.phase
    assert isinstance(phase, (RoundEndPhase, GameOverPhase))
    for p, pts in zip(state.players, phase.round_scores):
        print_grid(p.grid, f"{p.name}: +{pts}", reveal=True)
    print("Cumulative:")
    for p in state.players:
        print(f"  {p.name}: {p.total_score} pts")


def main() -> None:
    print("SKYJO: hotseat console")
    state = new_game(GameConfig())
    seen = 0
    while not isinstance(state.phase, GameOverPhase):
        phase = state.phase
        if isinstance(phase, InitialFlipPhase):
            p = state.players[phase.player]
            print_grid(p.grid, f"{p.name}: flip {phase.flips_remaining} card(s)")
            pos = ask_pos()
            intent: Optional[Intent] = FlipInitial(*pos) if pos else None
        elif isinstance(phase, RoundEndPhase):
            show_scores(state)
            input("Press enter for the next round.")
            intent = StartNextRound()
        elif isinstance(phase, (TurnPhase, FlipAfterDiscardPhase)):
            intent = ask_turn(state)
        else:
            intent = ask_setup()
        if intent is None:
            continue
        nxt = apply_intent(state, intent)
        if nxt is state:
            print("Not allowed now.")
        state = nxt
        seen = drain_logs(state, seen)

    print("\n=== Game Over ===")
    show_scores(state)
    assert isinstance(state.phase, GameOverPhase)
    won = [state.players[i].name for i in state.phase.winners]
    if len(won) == 1:
        print(f"Winner: {won[0]}")
    else:
        print("Winners (tie): " + ", ".join(won))


if __name__ == "__main__":
    main()
