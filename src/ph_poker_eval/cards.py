"""
Packed integer card encoding.

Every card is one int32:

    +--------+--------+--------+--------+
    |xxxbbbbb|bbbbbbbb|cdhsrrrr|xxpppppp|
    +--------+--------+--------+--------+

    p = prime of the rank (deuce=2, trey=3, four=5, ..., ace=41)
    r = rank (deuce=2, ..., ace=14)
    cdhs = one suit flag
    b = one-hot rank bit at position rank-2 of the high half-word

The five of hearts is 0x00082507, the queen of clubs 0x04008C1F.
"""

import numpy as np
from numba import njit, int32


class InvalidCardError(ValueError):
    """Raised when card text cannot be turned into a valid card."""


CLUB = 0x8000
DIAMOND = 0x4000
HEART = 0x2000
SPADE = 0x1000
SUITS = (CLUB, DIAMOND, HEART, SPADE)
SUIT_MASK = 0xF000

DEUCE = 2
TREY = 3
FOUR = 4
FIVE = 5
SIX = 6
SEVEN = 7
EIGHT = 8
NINE = 9
TEN = 10
JACK = 11
QUEEN = 12
KING = 13
ACE = 14
RANKS = tuple(range(DEUCE, ACE + 1))

PRIMES = np.array([2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41], dtype=np.int32)

RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = {CLUB: "c", DIAMOND: "d", HEART: "h", SPADE: "s"}
_CHAR_SUITS = {c: s for s, c in SUIT_CHARS.items()}


@njit(cache=True)
def encode(rank: int32, suit: int32) -> int32:
    """rank: 2..14, suit: one of the four suit flags"""
    j = rank - 2
    return int32(PRIMES[j] | (rank << 8) | suit | (1 << (16 + j)))


@njit(cache=True)
def card_rank(card: int32) -> int32:
    return (card >> 8) & 0xF


@njit(cache=True)
def card_suit(card: int32) -> int32:
    return card & SUIT_MASK


@njit(cache=True)
def card_prime(card: int32) -> int32:
    return card & 0xFF


@njit(cache=True)
def card_rankbits(card: int32) -> int32:
    """13-bit rank-presence field; OR these over a hand to get its rank pattern."""
    return (card >> 16) & 0x1FFF


@njit(cache=True)
def decode_card(card: int32):
    """Return (rank, suit)"""
    return (card >> 8) & 0xF, card & SUIT_MASK


def init_deck():
    """All 52 cards: clubs, diamonds, hearts, spades, each deuce..ace."""
    deck = np.empty(52, dtype=np.int32)
    n = 0
    for suit in SUITS:
        for rank in RANKS:
            deck[n] = encode(rank, suit)
            n += 1
    return deck


def find_card(rank, suit, deck):
    """Index of the (rank, suit) card in deck, or -1."""
    for i, c in enumerate(deck):
        if (c & suit) and card_rank(c) == rank:
            return i
    return -1


def shuffle_deck(deck, seed=None):
    """Return a shuffled copy of deck."""
    rng = np.random.default_rng(seed)
    return rng.permutation(deck)


def card_to_str(card) -> str:
    rank, suit = decode_card(int(card))
    if suit not in SUIT_CHARS or not DEUCE <= rank <= ACE:
        raise InvalidCardError(f"not a card: {int(card):#010x}")
    return RANK_CHARS[rank - 2] + SUIT_CHARS[suit]


def hand_to_str(hand) -> str:
    """e.g. 'Ac 4d 7c Jh 2s'"""
    return " ".join(card_to_str(c) for c in hand)


def parse_card(text: str) -> int:
    """Parse 'As', 'td', '7H' ... into a packed card."""
    if len(text) != 2:
        raise InvalidCardError(f"bad card {text!r}: expected rank and suit, e.g. 'As'")
    r, s = text[0].upper(), text[1].lower()
    if r not in RANK_CHARS:
        raise InvalidCardError(f"bad card {text!r}: unknown rank {text[0]!r}")
    if s not in _CHAR_SUITS:
        raise InvalidCardError(f"bad card {text!r}: unknown suit {text[1]!r}")
    return encode(RANK_CHARS.index(r) + 2, _CHAR_SUITS[s])


def parse_hand(text) -> np.ndarray:
    """Parse 'As Ks Qs Js Ts' (or a list of card strings) into an int32 array."""
    tokens = text.split() if isinstance(text, str) else list(text)
    cards = [parse_card(t) for t in tokens]
    if len(set(cards)) != len(cards):
        raise InvalidCardError(f"duplicate cards in {' '.join(tokens)!r}")
    return np.array(cards, dtype=np.int32)
