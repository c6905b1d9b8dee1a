#!/usr/bin/env python3
"""
Deterministic pseudo-random numbers seeded from strings.

The generator is a pure step function, advance(state) -> (value, state), so
each generation call can own its state and two calls never interfere.
SeededRandom is a thin wrapper that keeps that state for one call.
"""

import math
from dataclasses import dataclass
from typing import Sequence, TypeVar, Union

T = TypeVar('T')


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def hash_seed(seed: Union[str, int]) -> int:
    """
    Hash a seed string into a non-negative integer state.

    Each step is code + ((h << 5) - h) where only the shift runs in 32-bit
    integer arithmetic; the running value itself is never wrapped, so long
    strings can hash above 2**31. Integer seeds are used as-is.
    """
    if isinstance(seed, int):
        return abs(seed)
    h = 0
    for ch in seed:
        h = ord(ch) + _to_int32(_to_int32(h) << 5) - h
    return abs(h)


def advance(state: int) -> tuple[float, int]:
    """Return the next value in [0, 1) and the following state."""
    x = math.sin(state) * 10000
    return x - math.floor(x), state + 1


@dataclass
class SeededRandom:
    """Owned PRNG state for a single generation call."""
    state: int

    @classmethod
    def from_seed(cls, seed: Union[str, int]) -> 'SeededRandom':
        return cls(hash_seed(seed))

    def next(self) -> float:
        value, self.state = advance(self.state)
        return value

    def next_int(self, low: int, high: int) -> int:
        """Integer in [low, high], inclusive."""
        return int(math.floor(self.next() * (high - low + 1))) + low

    def next_float(self, low: float, high: float) -> float:
        return self.next() * (high - low) + low

    def pick(self, items: Sequence[T]) -> T:
        return items[int(math.floor(self.next() * len(items)))]
