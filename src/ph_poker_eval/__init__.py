"""
Constant-time five- and seven-card poker hand evaluation.

Cards are packed integers (see cards.py); hands are numpy int32 arrays of them.
Values run from 1 (royal flush) to 7462 (7-5-4-3-2 unsuited).
"""

from .cards import (
    CLUB,
    DIAMOND,
    HEART,
    SPADE,
    InvalidCardError,
    encode,
    decode_card,
    init_deck,
    find_card,
    shuffle_deck,
    card_to_str,
    hand_to_str,
    parse_card,
    parse_hand,
)
from .categories import HandCategory, category, hand_rank
from .evaluator import (
    classify,
    classify_cards,
    best_of_seven,
    batch_classify,
    batch_best_of_seven,
    tally_all_five,
)
from .tables import PerfectHashError, TableBuildError

__all__ = [
    'CLUB',
    'DIAMOND',
    'HEART',
    'SPADE',
    'InvalidCardError',
    'PerfectHashError',
    'TableBuildError',
    'HandCategory',
    'encode',
    'decode_card',
    'init_deck',
    'find_card',
    'shuffle_deck',
    'card_to_str',
    'hand_to_str',
    'parse_card',
    'parse_hand',
    'classify',
    'classify_cards',
    'best_of_seven',
    'batch_classify',
    'batch_best_of_seven',
    'tally_all_five',
    'category',
    'hand_rank',
]
