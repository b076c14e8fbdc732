"""Weighted random choice over successor counts."""

from __future__ import annotations

import bisect
import itertools
import random
from typing import Hashable, Mapping


class EmptyDistributionError(ValueError):
    """Raised when sampling from a distribution with no positive weight."""


class WeightedSampler:
    """Draws one key from a ``{key: count}`` mapping, proportional to its count.

    ``rng`` is anything with a ``randrange(stop)`` method. Pass a seeded
    ``random.Random`` for reproducible output; the default is the process-wide
    generator of the :mod:`random` module.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random

    def sample(self, distribution: Mapping[Hashable, int]) -> Hashable:
        keys = list(distribution.keys())
        cumulative = list(itertools.accumulate(distribution[key] for key in keys))
        total = cumulative[-1] if cumulative else 0
        if total <= 0:
            raise EmptyDistributionError("Cannot sample from an empty distribution.")
        draw = self.rng.randrange(total)
        # first running sum strictly greater than the draw
        return keys[bisect.bisect_right(cumulative, draw)]
