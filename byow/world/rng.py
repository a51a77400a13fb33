"""Seeded linear congruential generator.

World layouts must be byte-identical for a given seed across runs and
platforms, so generation never touches the ``random`` module. The LCG exposes
the subset of the ``random.Random`` API the placement code needs.
"""

from __future__ import annotations

MULTIPLIER = 1103515245
INCREMENT = 12345
MASK = 0x7FFFFFFF


class Lcg:
    __slots__ = ("_state",)

    def __init__(self, seed: int = 0):
        self._state = 0
        self.seed(seed)

    def seed(self, value: int) -> None:
        self._state = int(value)

    @property
    def state(self) -> int:
        return self._state

    def _next_raw(self) -> int:
        self._state = (self._state * MULTIPLIER + INCREMENT) & MASK
        return self._state

    def randint(self, lo: int, hi: int) -> int:
        """Return an integer in ``[lo, hi]``; ``lo >= hi`` yields ``lo`` without advancing."""
        if lo >= hi:
            return lo
        return lo + self._next_raw() % (hi - lo + 1)

    def __repr__(self):
        return f"<Lcg state={self._state}>"


__all__ = ["Lcg"]
