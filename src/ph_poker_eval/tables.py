"""
Lookup table construction.

Four tables drive the evaluator:

    flushes     13-bit rank pattern -> value, all five cards suited (1..10, 323..1599)
    unique5     13-bit rank pattern -> value, five distinct ranks unsuited
                (1600..1609, 6186..7462), 0 for any other pattern
    hash_adjust 512 bucket adjustments for the perfect hash
    hash_values perfect hash slot -> value for every hand holding a pair or better
                (11..322, 1610..6185)

They are derived here rather than written out: the distinct-rank patterns are
ranked by plain integer order of their bit masks (highest card decides first),
the paired rank multisets by walking ranks from ace down, and the adjustment
table by a displacement search against the fixed mixer in perfect_hash.py.
"""

import itertools
import logging
import threading
from typing import NamedTuple

import numpy as np

from .cards import PRIMES
from .categories import (
    MAX_STRAIGHT_FLUSH,
    MAX_FOUR_OF_A_KIND,
    MAX_FULL_HOUSE,
    MAX_FLUSH,
    MAX_STRAIGHT,
    MAX_THREE_OF_A_KIND,
    MAX_TWO_PAIR,
    MAX_PAIR,
)
from .perfect_hash import HASH_BUCKETS, HASH_SLOTS, hash_mix, perfect_hash

logger = logging.getLogger(__name__)

PATTERN_SLOTS = 1 << 13

# Best first: AKQJT .. 65432, then the wheel 5432A.
STRAIGHTS = tuple([0x1F << s for s in range(8, -1, -1)] + [0x100F])

_DESCENDING = tuple(range(12, -1, -1))


class TableBuildError(RuntimeError):
    """The lookup tables could not be built."""


class PerfectHashError(TableBuildError):
    """The adjustment search could not make the hash collision-free."""


class LookupTables(NamedTuple):
    flushes: np.ndarray
    unique5: np.ndarray
    hash_adjust: np.ndarray
    hash_values: np.ndarray


def distinct_rank_patterns():
    """The 1,277 five-distinct-rank patterns that are not straights, strongest first."""
    patterns = (
        sum(1 << r for r in combo) for combo in itertools.combinations(range(13), 5)
    )
    return sorted((p for p in patterns if p not in STRAIGHTS), reverse=True)


def build_flush_tables():
    """Return (flushes, unique5), both indexed by the OR of the cards' rank bits."""
    flushes = np.zeros(PATTERN_SLOTS, dtype=np.uint16)
    unique5 = np.zeros(PATTERN_SLOTS, dtype=np.uint16)

    for i, pattern in enumerate(STRAIGHTS):
        flushes[pattern] = 1 + i
        unique5[pattern] = MAX_FLUSH + 1 + i

    for i, pattern in enumerate(distinct_rank_patterns()):
        flushes[pattern] = MAX_FULL_HOUSE + 1 + i
        unique5[pattern] = MAX_PAIR + 1 + i

    return flushes, unique5


def _check_count(value, expected):
    if value != expected:
        raise TableBuildError(f"rank multiset enumeration stopped at value {value}, expected {expected}")


def paired_rank_products():
    """(prime product, value) for each of the 4,888 rank multisets with a repeated rank."""
    p = [int(x) for x in PRIMES]
    entries = []

    value = MAX_STRAIGHT_FLUSH + 1
    for quad in _DESCENDING:
        for kicker in _DESCENDING:
            if kicker != quad:
                entries.append((p[quad] ** 4 * p[kicker], value))
                value += 1
    _check_count(value, MAX_FOUR_OF_A_KIND + 1)

    for trips in _DESCENDING:
        for pair in _DESCENDING:
            if pair != trips:
                entries.append((p[trips] ** 3 * p[pair] ** 2, value))
                value += 1
    _check_count(value, MAX_FULL_HOUSE + 1)

    value = MAX_STRAIGHT + 1
    for trips in _DESCENDING:
        kickers = [r for r in _DESCENDING if r != trips]
        for k1, k2 in itertools.combinations(kickers, 2):
            entries.append((p[trips] ** 3 * p[k1] * p[k2], value))
            value += 1
    _check_count(value, MAX_THREE_OF_A_KIND + 1)

    for hi, lo in itertools.combinations(_DESCENDING, 2):
        for kicker in _DESCENDING:
            if kicker != hi and kicker != lo:
                entries.append((p[hi] ** 2 * p[lo] ** 2 * p[kicker], value))
                value += 1
    _check_count(value, MAX_TWO_PAIR + 1)

    for pair in _DESCENDING:
        kickers = [r for r in _DESCENDING if r != pair]
        for k1, k2, k3 in itertools.combinations(kickers, 3):
            entries.append((p[pair] ** 2 * p[k1] * p[k2] * p[k3], value))
            value += 1
    _check_count(value, MAX_PAIR + 1)

    return entries


def search_hash_adjust(products, n_slots=HASH_SLOTS):
    """
    Find one adjustment per bucket so that a ^ adjust[b] is distinct and below n_slots for all keys.

    Buckets are placed largest first; each takes the smallest adjustment whose
    displaced slots are all free.
    """
    buckets = [[] for _ in range(HASH_BUCKETS)]
    for u in products:
        a, b = hash_mix(u)
        buckets[b].append(a)

    for b, keys in enumerate(buckets):
        if len(set(keys)) != len(keys):
            raise PerfectHashError(
                f"bucket {b} holds two keys with the same raw slot; no adjustment can separate them"
            )

    adjust = np.zeros(HASH_BUCKETS, dtype=np.uint16)
    taken = bytearray(n_slots)
    order = sorted(range(HASH_BUCKETS), key=lambda b: (-len(buckets[b]), b))
    probes = 0

    for b in order:
        keys = buckets[b]
        if not keys:
            break
        for d in range(HASH_SLOTS):
            if all((a ^ d) < n_slots and not taken[a ^ d] for a in keys):
                break
        else:
            raise PerfectHashError(f"no adjustment places bucket {b} ({len(keys)} keys)")
        probes += d + 1
        for a in keys:
            taken[a ^ d] = 1
        adjust[b] = d

    logger.debug(
        "hash adjust search: %d keys, %d non-empty buckets, largest %d, %d probes",
        len(products),
        sum(1 for keys in buckets if keys),
        max(len(keys) for keys in buckets),
        probes,
    )
    return adjust


def build_hash_tables():
    """Return (hash_adjust, hash_values) for the paired hands."""
    entries = paired_rank_products()
    adjust = search_hash_adjust([u for u, _ in entries])

    values = np.zeros(HASH_SLOTS, dtype=np.uint16)
    for u, value in entries:
        slot = perfect_hash(u, adjust)
        if values[slot]:
            raise PerfectHashError(f"prime product {u} collides at slot {slot}")
        values[slot] = value
    return adjust, values


def build_tables() -> LookupTables:
    flushes, unique5 = build_flush_tables()
    hash_adjust, hash_values = build_hash_tables()
    tables = LookupTables(flushes, unique5, hash_adjust, hash_values)
    for table in tables:
        table.flags.writeable = False
    logger.info(
        "lookup tables built: %d flush, %d distinct-rank, %d hashed values",
        np.count_nonzero(flushes),
        np.count_nonzero(unique5),
        np.count_nonzero(hash_values),
    )
    return tables


_tables = None
_lock = threading.Lock()


def get_tables() -> LookupTables:
    """The process-wide tables, built on first use."""
    global _tables
    if _tables is None:
        with _lock:
            if _tables is None:
                _tables = build_tables()
    return _tables
