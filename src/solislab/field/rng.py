"""
Deterministic Pseudo-Random Generators
======================================
Small 32-bit generators used to synthesise lattices, particles and fields.
Each instance is an explicit state object; the same seed always yields the
same stream, independent of numpy's global state.
"""
from __future__ import annotations

from typing import List

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a * b."""
    return (a * b) & MASK32


class LCG:
    """
    Linear congruential generator (Numerical Recipes constants).

    state <- state * 1664525 + 1013904223 (mod 2**32), output state / 0xFFFFFFFF.
    """

    def __init__(self, seed: int) -> None:
        self.state = int(seed) & MASK32

    def next(self) -> float:
        self.state = (self.state * 1664525 + 1013904223) & MASK32
        return self.state / MASK32

    def sample(self, n: int) -> List[float]:
        return [self.next() for _ in range(n)]


class XorShift32:
    """Marsaglia xorshift32. A zero seed is replaced by a fixed non-zero state."""

    def __init__(self, seed: int = 1234) -> None:
        self.state = (int(seed) & MASK32) or 0x6D2B79F5

    def next(self) -> float:
        x = self.state
        x ^= (x << 13) & MASK32
        x ^= x >> 17
        x ^= (x << 5) & MASK32
        self.state = x & MASK32
        return self.state / MASK32


class Mulberry32:
    """Mulberry32 generator, output in [0, 1)."""

    def __init__(self, seed: int) -> None:
        self.state = int(seed) & MASK32

    def next(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296
