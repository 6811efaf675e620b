"""
Helpers for fixed-width integer bitsets.

Bit ``n`` set means value ``n`` is active for the field.
"""
from typing import Iterator


def full_mask(low: int, high: int) -> int:
    """
    Return a bitset with every bit in [low, high] set.
    """
    return ((1 << (high - low + 1)) - 1) << low


def set_range(bits: int, low: int, high: int, step: int = 1) -> int:
    for value in range(low, high + 1, step):
        bits |= 1 << value
    return bits


def has_bit(bits: int, value: int) -> bool:
    return (bits >> value) & 1 == 1


def iter_bits(bits: int) -> Iterator[int]:
    """
    Yield the positions of the set bits in ascending order.
    """
    value = 0
    while bits:
        if bits & 1:
            yield value
        bits >>= 1
        value += 1


def count_bits(bits: int) -> int:
    return bin(bits).count("1")
