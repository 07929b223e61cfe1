"""
Equivalence value -> hand category.

Number of distinct values per category:

    Straight Flush       10
    Four of a Kind      156
    Full House          156
    Flush              1277
    Straight             10
    Three of a Kind     858
    Two Pair            858
    One Pair           2860
    High Card        + 1277
    -----------------------
    TOTAL              7462
"""

from enum import IntEnum

from numba import njit, int32


MAX_STRAIGHT_FLUSH = 10
MAX_FOUR_OF_A_KIND = 166
MAX_FULL_HOUSE = 322
MAX_FLUSH = 1599
MAX_STRAIGHT = 1609
MAX_THREE_OF_A_KIND = 2467
MAX_TWO_PAIR = 3325
MAX_PAIR = 6185
MAX_HIGH_CARD = 7462


class HandCategory(IntEnum):
    STRAIGHT_FLUSH = 1
    FOUR_OF_A_KIND = 2
    FULL_HOUSE = 3
    FLUSH = 4
    STRAIGHT = 5
    THREE_OF_A_KIND = 6
    TWO_PAIR = 7
    ONE_PAIR = 8
    HIGH_CARD = 9

    def __str__(self) -> str:
        return CATEGORY_NAMES[self]


CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}


# Counts over all C(52,5) = 2,598,960 five-card hands.
EXPECTED_FREQUENCIES = {
    HandCategory.STRAIGHT_FLUSH: 40,
    HandCategory.FOUR_OF_A_KIND: 624,
    HandCategory.FULL_HOUSE: 3744,
    HandCategory.FLUSH: 5108,
    HandCategory.STRAIGHT: 10200,
    HandCategory.THREE_OF_A_KIND: 54912,
    HandCategory.TWO_PAIR: 123552,
    HandCategory.ONE_PAIR: 1098240,
    HandCategory.HIGH_CARD: 1302540,
}


@njit(cache=True)
def hand_rank(value: int32) -> int32:
    """Category number 1..9 of an equivalence value in 1..7462."""
    if value > MAX_PAIR:
        return 9
    if value > MAX_TWO_PAIR:
        return 8
    if value > MAX_THREE_OF_A_KIND:
        return 7
    if value > MAX_STRAIGHT:
        return 6
    if value > MAX_FLUSH:
        return 5
    if value > MAX_FULL_HOUSE:
        return 4
    if value > MAX_FOUR_OF_A_KIND:
        return 3
    if value > MAX_STRAIGHT_FLUSH:
        return 2
    return 1


def category(value) -> HandCategory:
    return HandCategory(hand_rank(int(value)))
