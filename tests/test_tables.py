"""Tests for lookup table construction and the perfect hash."""

import math

import numpy as np
import pytest

from ph_poker_eval.categories import HandCategory, category
from ph_poker_eval.perfect_hash import HASH_BUCKETS, HASH_SLOTS, hash_mix, perfect_hash
from ph_poker_eval import tables as tables_module
from ph_poker_eval.tables import (
    STRAIGHTS,
    PerfectHashError,
    TableBuildError,
    build_flush_tables,
    distinct_rank_patterns,
    get_tables,
    paired_rank_products,
    search_hash_adjust,
)


@pytest.fixture(scope="module")
def tables():
    return get_tables()


@pytest.fixture(scope="module")
def entries():
    return paired_rank_products()


class TestPatterns:

    def test_straights(self):
        assert len(STRAIGHTS) == 10
        assert STRAIGHTS[0] == 0b1111100000000
        assert STRAIGHTS[-2] == 0b0000000011111
        assert STRAIGHTS[-1] == 0b1000000001111
        assert all(bin(s).count("1") == 5 for s in STRAIGHTS)

    def test_distinct_rank_patterns(self):
        patterns = distinct_rank_patterns()
        assert len(patterns) == 1277
        assert len(set(patterns)) == 1277
        assert patterns[0] == 0b1111010000000  # A K Q J 9
        assert patterns[-1] == 0b0000000101111  # 7 5 4 3 2
        assert not set(patterns) & set(STRAIGHTS)
        assert patterns == sorted(patterns, reverse=True)


class TestFlushTables:

    def test_values(self):
        flushes, unique5 = build_flush_tables()
        assert np.count_nonzero(flushes) == 1287
        assert np.count_nonzero(unique5) == 1287
        assert set(flushes[flushes > 0].tolist()) == set(range(1, 11)) | set(range(323, 1600))
        assert set(unique5[unique5 > 0].tolist()) == set(range(1600, 1610)) | set(range(6186, 7463))

    def test_same_patterns_in_both(self):
        flushes, unique5 = build_flush_tables()
        assert np.array_equal(flushes > 0, unique5 > 0)

    def test_wheel(self):
        flushes, unique5 = build_flush_tables()
        assert flushes[0b1000000001111] == 10
        assert unique5[0b1000000001111] == 1609
        assert unique5[0b0000000011111] == 1608


class TestPairedProducts:

    def test_counts(self, entries):
        assert len(entries) == 4888
        products = [u for u, _ in entries]
        assert len(set(products)) == 4888

    def test_values(self, entries):
        values = sorted(v for _, v in entries)
        assert values == list(range(11, 323)) + list(range(1610, 6186))

    def test_ordering(self, entries):
        by_product = dict(entries)
        # AAAA K is the best quad hand, 2222 3 the worst
        assert by_product[41 ** 4 * 37] == 11
        assert by_product[2 ** 4 * 3] == 166
        # AAA KK and 222 33
        assert by_product[41 ** 3 * 37 ** 2] == 167
        assert by_product[2 ** 3 * 3 ** 2] == 322
        # 22 + 5 4 3 is the worst pair
        assert by_product[2 ** 2 * 7 * 5 * 3] == 6185

    def test_categories(self, entries):
        cats = {category(v) for _, v in entries}
        assert HandCategory.FLUSH not in cats
        assert HandCategory.STRAIGHT not in cats
        assert HandCategory.HIGH_CARD not in cats

    def test_short_enumeration_raises(self, monkeypatch):
        monkeypatch.setattr(tables_module, "_DESCENDING", tuple(range(11, -1, -1)))
        with pytest.raises(TableBuildError, match="enumeration stopped"):
            paired_rank_products()


class TestPerfectHash:

    def test_mix_ranges(self, entries):
        for u, _ in entries:
            a, b = hash_mix(u)
            assert 0 <= a < HASH_SLOTS
            assert 0 <= b < HASH_BUCKETS

    def test_collision_free(self, tables, entries):
        slots = [perfect_hash(u, tables.hash_adjust) for u, _ in entries]
        assert len(set(slots)) == len(entries)
        assert all(0 <= s < HASH_SLOTS for s in slots)

    def test_slots_hold_values(self, tables, entries):
        for u, v in entries:
            assert tables.hash_values[perfect_hash(u, tables.hash_adjust)] == v

    def test_adjust_table_shape(self, tables):
        assert tables.hash_adjust.shape == (HASH_BUCKETS,)
        assert int(tables.hash_adjust.max()) < HASH_SLOTS

    def test_search_is_deterministic(self, tables, entries):
        again = search_hash_adjust([u for u, _ in entries])
        assert np.array_equal(again, tables.hash_adjust)

    def test_inseparable_keys(self):
        with pytest.raises(PerfectHashError):
            search_hash_adjust([48, 48])

    def test_no_room_for_bucket(self, entries):
        with pytest.raises(PerfectHashError, match="no adjustment places bucket"):
            search_hash_adjust([u for u, _ in entries[:2]], n_slots=1)

    def test_slot_bound(self, entries):
        products = [u for u, _ in entries[:50]]
        adjust = search_hash_adjust(products, n_slots=4096)
        slots = [perfect_hash(u, adjust) for u in products]
        assert len(set(slots)) == 50
        assert max(slots) < 4096

    def test_adjust_table_too_small_for_minimal_hash(self):
        # A minimal perfect hash of n keys needs at least n * log2(e) bits.
        assert HASH_BUCKETS * 13 < 4888 * math.log2(math.e)


class TestSingleton:

    def test_built_once(self, tables):
        assert get_tables() is tables

    def test_read_only(self, tables):
        for table in tables:
            with pytest.raises(ValueError):
                table[0] = 1

    def test_all_values_present_once(self, tables):
        values = np.concatenate([
            tables.flushes[tables.flushes > 0],
            tables.unique5[tables.unique5 > 0],
            tables.hash_values[tables.hash_values > 0],
        ])
        assert sorted(values.tolist()) == list(range(1, 7463))
