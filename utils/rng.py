"""
Seeded pseudo-random generator for reproducible demand curves.

Implements mulberry32 on explicit 32-bit integer arithmetic so that the same
seed yields the same float sequence on every platform.
"""

_MASK_32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK_32


class Mulberry32:
    """Deterministic generator of floats in [0, 1)."""

    def __init__(self, seed: int):
        self.state = seed & _MASK_32

    def next_float(self) -> float:
        self.state = (self.state + 0x6D2B79F5) & _MASK_32
        t = _imul(self.state ^ (self.state >> 15), 1 | self.state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK_32) ^ t
        return ((t ^ (t >> 14)) & _MASK_32) / 4294967296

    def uniform(self, low: float, high: float) -> float:
        return low + self.next_float() * (high - low)

    def __call__(self) -> float:
        return self.next_float()

    def __iter__(self):
        return self

    def __next__(self) -> float:
        return self.next_float()
