"""Deterministic random numbers for tree generation.

A plain linear congruential generator so that a seed reproduces the same tree
on any platform, independent of the interpreter's ``random`` implementation.
"""

import math

# Numerical Recipes LCG constants.
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 1 << 32


class TreeRNG(object):
    __slots__ = ("state",)

    def __init__(self, seed):
        self.state = int(seed) % LCG_MODULUS

    def next(self):
        """Advance the state and return a float in [0, 1)."""
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) % LCG_MODULUS
        return self.state / float(LCG_MODULUS)

    def range(self, lo, hi):
        return lo + (hi - lo) * self.next()

    def int(self, lo, hi):
        """Integer in the closed interval [lo, hi]."""
        return int(math.floor(self.range(lo, hi + 1)))

    def chance(self, p):
        return self.next() < p

    def choice(self, seq):
        return seq[self.int(0, len(seq) - 1)]
