"""Command line harness: exhaustive five-card tally, single-hand evaluation, random deals."""

import argparse
import logging
import sys
import time

from .cards import InvalidCardError, hand_to_str, init_deck, parse_hand, shuffle_deck
from .categories import EXPECTED_FREQUENCIES, HandCategory, category
from .evaluator import best_of_seven, classify, tally_all_five

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def evaluate(hand):
    """Value of a 5- or 7-card hand array."""
    if len(hand) == 5:
        return classify(hand)
    if len(hand) == 7:
        return best_of_seven(hand)
    raise InvalidCardError(f"expected 5 or 7 cards, got {len(hand)}")


def run_allfive(args):
    deck = init_deck()
    start = time.perf_counter()
    freq = tally_all_five(deck)
    elapsed = time.perf_counter() - start
    logger.debug("tallied %d hands in %.3fs", freq.sum(), elapsed)

    ok = True
    for cat in HandCategory:
        line = f"{str(cat):>15}: {freq[cat]:8d}"
        if freq[cat] != EXPECTED_FREQUENCIES[cat]:
            line += f" (expected {EXPECTED_FREQUENCIES[cat]})"
            ok = False
        print(line)
    print(f"\nElapsed time: {elapsed * 1000:.4f} (msecs)")
    return 0 if ok else 1


def run_eval(args):
    try:
        hand = parse_hand(args.cards)
        value = evaluate(hand)
    except InvalidCardError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(f"{hand_to_str(hand)}  {value}  {category(value)}")
    return 0


def run_deal(args):
    deck = shuffle_deck(init_deck(), seed=args.seed)
    hand = deck[: args.cards]
    logger.debug("dealt %d cards with seed %s", args.cards, args.seed)
    value = evaluate(hand)
    print(f"{hand_to_str(hand)}  {value}  {category(value)}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="ph-poker-eval", description="Perfect-hash poker hand evaluator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("allfive", help="Evaluate all 2,598,960 five-card hands and print category counts")
    p.set_defaults(func=run_allfive)

    p = sub.add_parser("eval", help="Evaluate one hand, e.g. 'As Ks Qs Js Ts'")
    p.add_argument("cards", nargs="+", help="5 or 7 cards such as As Td 7h")
    p.set_defaults(func=run_eval)

    p = sub.add_parser("deal", help="Deal a random hand and evaluate it")
    p.add_argument("--cards", "-n", type=int, choices=(5, 7), default=5, help="Number of cards to deal")
    p.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    p.set_defaults(func=run_deal)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)
