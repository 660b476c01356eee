from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
import random

from .types import COLS, ROWS, Cell


class DeckExhaustedError(ValueError):
    """Deck ran out while dealing: the distribution is too small for the table."""


def validate_distribution(distribution: Mapping[int, int]) -> None:
    for value, count in distribution.items():
        if not isinstance(value, int) or not isinstance(count, int):
            raise ValueError(f"Invalid distribution entry: {value!r}: {count!r}")
        if count < 0:
            raise ValueError(f"Negative count for card {value}: {count}")


def deck_composition(distribution: Mapping[int, int]) -> Counter:
    return Counter({v: k for v, k in distribution.items() if k > 0})


def deck_size(distribution: Mapping[int, int]) -> int:
    return sum(k for k in distribution.values() if k > 0)


def required_cards(num_players: int) -> int:
    # 12 per grid plus the initial discard turn-up
    return ROWS * COLS * num_players + 1


def make_deck(distribution: Mapping[int, int], rng: Optional[random.Random] = None) -> List[int]:
    """Build the deck and shuffle it with Fisher-Yates.

    Each value is repeated per its count; the end of the list is the top of
    the stack. An empty distribution yields an empty deck.
    """
    validate_distribution(distribution)
    r = rng if rng is not None else random.Random()
    deck: List[int] = []
    for v, k in distribution.items():
        deck.extend([v] * k)
    for i in range(len(deck) - 1, 0, -1):
        j = r.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def deal_grid(deck: List[int]) -> Tuple[List[List[Cell]], List[int]]:
    new_deck = list(deck)
    rows: List[List[Cell]] = []
    for _ in range(ROWS):
        row: List[Cell] = []
        for _ in range(COLS):
            if not new_deck:
                raise DeckExhaustedError("Deck ran out during deal.")
            row.append(Cell(value=new_deck.pop()))
        rows.append(row)
    return rows, new_deck


def unseen_distribution(composition: Counter, seen: Iterable[int]) -> Dict[int, int]:
    # What nobody at the table can see: deck plus face-down cells
    dd: Counter = Counter(composition)
    dd.subtract(Counter(seen))
    return {v: int(k) for v, k in sorted(dd.items()) if k > 0}
