# Five-card evaluation is three table lookups and never branches on the hand type:
# suited hands go straight to the flush table, five distinct ranks to unique5,
# everything else through the perfect hash of the rank primes.
# Lower values are better: 1 is a royal flush, 7462 is 7-5-4-3-2 unsuited.

import itertools

import numpy as np
from numba import njit, int32, int64

from .cards import SUIT_MASK
from .categories import hand_rank
from .perfect_hash import perfect_hash
from .tables import get_tables

# numba freezes these arrays into the compiled code, on-disk cache included. The
# cache is keyed on this file only: clear __pycache__ after changing tables.py.
FLUSHES, UNIQUE5, HASH_ADJUST, HASH_VALUES = get_tables()

# The 21 ways to pick five of seven cards.
PERM7 = np.array(list(itertools.combinations(range(7), 5)), dtype=np.int64)


@njit(cache=True)
def classify_cards(c1: int32, c2: int32, c3: int32, c4: int32, c5: int32) -> int32:
    """Equivalence value 1..7462 of five distinct packed cards."""
    q = (c1 | c2 | c3 | c4 | c5) >> 16

    if c1 & c2 & c3 & c4 & c5 & SUIT_MASK:
        return int32(FLUSHES[q])

    s = UNIQUE5[q]
    if s:
        return int32(s)

    u = int64(c1 & 0xFF) * (c2 & 0xFF) * (c3 & 0xFF) * (c4 & 0xFF) * (c5 & 0xFF)
    return int32(HASH_VALUES[perfect_hash(u, HASH_ADJUST)])


@njit(cache=True)
def classify(hand) -> int32:
    return classify_cards(hand[0], hand[1], hand[2], hand[3], hand[4])


@njit(cache=True)
def best_of_seven(hand) -> int32:
    """Best (lowest) value over all 21 five-card subsets of a seven-card hand."""
    best = int32(9999)
    for i in range(PERM7.shape[0]):
        p = PERM7[i]
        v = classify_cards(hand[p[0]], hand[p[1]], hand[p[2]], hand[p[3]], hand[p[4]])
        if v < best:
            best = v
    return best


@njit(cache=True)
def batch_classify(hands):
    """Evaluate an array of hands shaped (N, 5) of packed cards."""
    N = hands.shape[0]
    out = np.empty(N, dtype=np.uint16)
    for i in range(N):
        out[i] = classify(hands[i])
    return out


@njit(cache=True)
def batch_best_of_seven(hands):
    """Evaluate an array of hands shaped (N, 7) of packed cards."""
    N = hands.shape[0]
    out = np.empty(N, dtype=np.uint16)
    for i in range(N):
        out[i] = best_of_seven(hands[i])
    return out


@njit(cache=True)
def tally_all_five(deck):
    """Count hand_rank over every five-card subset of deck; index 0 is unused."""
    freq = np.zeros(10, dtype=np.int64)
    n = deck.shape[0]
    for a in range(n - 4):
        for b in range(a + 1, n - 3):
            for c in range(b + 1, n - 2):
                for d in range(c + 1, n - 1):
                    for e in range(d + 1, n):
                        v = classify_cards(deck[a], deck[b], deck[c], deck[d], deck[e])
                        freq[hand_rank(v)] += 1
    return freq
