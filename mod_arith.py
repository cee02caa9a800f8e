#!/usr/bin/env python3
"""
Modular arithmetic for cyclic domains such as hue angles.

A Range always sweeps forward (the increasing direction) from its start to its
end, so a hue range of 345 -> 15 passes through 0 rather than through 180.
A range of length zero covers the whole circle.

Scalars and numpy arrays are both accepted; arrays give element-wise results.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Space:
    """A cyclic numeric domain of size `modulus`."""
    modulus: float = 360.0

    def modulo(self, n):
        """Map any real n into [0, modulus)."""
        m = self.modulus
        r = np.mod(n, m)
        # -1e-20 % 360 rounds up to 360.0
        r = np.where(r >= m, 0.0, r)
        return r if np.ndim(r) else float(r)

    def positive_distance(self, a, b):
        """Forward distance d in [0, modulus) such that a + d == b (mod modulus).

        Not symmetric: positive_distance(350, 10) == 20 but
        positive_distance(10, 350) == 340.
        """
        return self.modulo(np.subtract(b, a))

    def range(self, start, end) -> 'Range':
        return Range.between(self, start, end)


@dataclass(frozen=True)
class Range:
    """Forward interval [start, start + length] on a Space."""
    space: Space
    start: float
    length: float

    @classmethod
    def between(cls, space: Space, start, end) -> 'Range':
        return cls(space, space.modulo(start), space.positive_distance(start, end))

    @property
    def end(self) -> float:
        return self.space.modulo(self.start + self.length)

    @property
    def full(self) -> bool:
        """Zero-length ranges contain every point."""
        return self.length == 0

    def contains(self, n):
        if self.full:
            return np.ones(np.shape(n), dtype=bool) if np.ndim(n) else True
        return self.space.positive_distance(self.start, n) <= self.length
