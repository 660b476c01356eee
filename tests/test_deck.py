import random
from collections import Counter

import pytest

from skyjo import DEFAULT_DISTRIBUTION, DeckExhaustedError, deal_grid, deck_composition, deck_size, make_deck


def test_make_deck_keeps_composition():
    deck = make_deck(DEFAULT_DISTRIBUTION, random.Random(3))
    assert len(deck) == deck_size(DEFAULT_DISTRIBUTION) == 186
    assert Counter(deck) == deck_composition(DEFAULT_DISTRIBUTION)


def test_empty_distribution_gives_empty_deck():
    assert make_deck({}, random.Random(0)) == []


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        make_deck({1: -1})


def test_shuffle_positions_follow_distribution():
    dist = {0: 1, 1: 2, 2: 3}
    size = 6
    trials = 6000
    rng = random.Random(1234)
    hits = [Counter() for _ in range(size)]
    for _ in range(trials):
        deck = make_deck(dist, rng)
        for pos, v in enumerate(deck):
            hits[pos][v] += 1
    for pos in range(size):
        for v, k in dist.items():
            freq = hits[pos][v] / trials
            assert abs(freq - k / size) < 0.03, (pos, v, freq)


def test_deal_grid_pops_from_the_end():
    deck = list(range(20))
    rows, rest = deal_grid(deck)
    assert [c.value for c in rows[0]] == [19, 18, 17, 16]
    assert rest == list(range(8))
    assert all(not c.face_up and not c.removed for row in rows for c in row)
    # input deck untouched
    assert len(deck) == 20


def test_deal_grid_exhaustion_is_fatal():
    with pytest.raises(DeckExhaustedError):
        deal_grid(list(range(11)))
