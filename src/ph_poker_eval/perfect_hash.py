"""
Perfect hash over the prime products of paired five-card hands (after Paul Senzee).

The mixer below and the adjustment table built in tables.py are a matched pair:
change a shift or the constant and the table has to be searched again.
All arithmetic is unsigned 32-bit.
"""

from numba import njit, int64


MIX_CONSTANT = 0xE91AAA35
MASK32 = 0xFFFFFFFF
HASH_BUCKETS = 512  # b is 9 bits
HASH_SLOTS = 8192  # a is 13 bits, so a ^ adjust stays below this


@njit(cache=True)
def hash_mix(u: int64):
    """Return (a, b): a in 0..8191 is the raw slot, b in 0..511 the bucket."""
    u = (u + MIX_CONSTANT) & MASK32
    u ^= u >> 16
    u = (u + (u << 8)) & MASK32
    u ^= u >> 4
    b = (u >> 8) & 0x1FF
    a = ((u + (u << 2)) & MASK32) >> 19
    return a, b


@njit(cache=True)
def perfect_hash(u: int64, hash_adjust) -> int64:
    a, b = hash_mix(u)
    return a ^ hash_adjust[b]
