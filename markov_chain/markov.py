from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Hashable, Iterable, List, Tuple

from .iterators import ChainIterator
from .sampler import WeightedSampler

logger = logging.getLogger(__name__)


class _Boundary:
    """Marks the start and the end of a sequence inside a context window."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BOUNDARY"


BOUNDARY = _Boundary()

Window = Tuple[Hashable, ...]


class EmptyChainError(RuntimeError):
    """Raised when generating from a chain that has not been fed yet."""


def _check_order(order) -> None:
    if not isinstance(order, int) or isinstance(order, bool) or order < 1:
        raise ValueError(f"Order must be an integer of at least 1, got {order!r}.")


class MarkovChain:
    """A variable-order Markov chain over any hashable tokens.

    The chain maps every context window (a tuple of ``order`` tokens, where
    ``BOUNDARY`` pads the start and end of each fed sequence) to a counter of
    the tokens observed right after it.

    Example::

        chain = MarkovChain()
        chain.feed([1, 2, 3, 5]).feed([3, 9, 2])
        print(chain.generate())
    """

    def __init__(self, order: int = 1, rng=None):
        _check_order(order)
        self._order = order
        self.transitions: Dict[Window, Counter] = {self._start(): Counter()}
        self._tokens: Dict[Hashable, Hashable] = {}
        self.sampler = WeightedSampler(rng)

    @property
    def order(self) -> int:
        return self._order

    def set_order(self, order: int) -> "MarkovChain":
        """Choose how many previous tokens index the chain.

        Data fed under a previous order is kept; only the start window of the
        new length is reset.
        """
        _check_order(order)
        self._order = order
        self.transitions[self._start()] = Counter()
        logger.debug(f"Order set to {order}, {len(self.transitions)} windows kept")
        return self

    def is_empty(self) -> bool:
        return not self.transitions[self._start()]

    def feed(self, tokens: Iterable[Hashable]) -> "MarkovChain":
        """Count every (window, successor) pair of ``tokens``. O(n) in its length."""
        tokens = [self._intern(token) for token in tokens]
        if not tokens:
            return self
        padded = [BOUNDARY] * self._order + tokens + [BOUNDARY]
        for i in range(len(padded) - self._order):
            window = tuple(padded[i:i + self._order])
            successor = padded[i + self._order]
            self.transitions.setdefault(window, Counter())[successor] += 1
        return self

    def generate(self) -> List[Hashable]:
        """Generate one sequence, starting from the start window."""
        if self.is_empty():
            raise EmptyChainError("The chain is empty; feed it before generating.")
        return self._walk(self._start(), [])

    def generate_from_token(self, token: Hashable) -> List[Hashable]:
        """Generate one sequence beginning with ``token``.

        Only works when ``token`` was seen ``order`` times in a row while
        feeding; otherwise returns an empty list.
        """
        if token is BOUNDARY:
            return []
        token = self._tokens.get(token, token)
        window = (token,) * self._order
        if window not in self.transitions:
            return []
        return self._walk(window, [token])

    def iter(self) -> ChainIterator:
        """Infinite iterator of generated sequences."""
        return ChainIterator(self)

    def iter_for(self, size: int) -> ChainIterator:
        """Iterator of exactly ``size`` generated sequences."""
        return ChainIterator(self, count=size)

    def successors(self, window: Iterable[Hashable]) -> Dict[Hashable, int]:
        """Copy of the successor counts stored for ``window`` (empty if unknown)."""
        return dict(self.transitions.get(tuple(window), {}))

    def _walk(self, window: Window, result: List[Hashable]) -> List[Hashable]:
        while True:
            successor = self.sampler.sample(self.transitions[window])
            window = window[1:] + (successor,)
            if successor is BOUNDARY:
                return result
            result.append(successor)

    def _start(self) -> Window:
        return (BOUNDARY,) * self._order

    def _intern(self, token: Hashable) -> Hashable:
        return self._tokens.setdefault(token, token)

    def __len__(self) -> int:
        return len(self.transitions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarkovChain):
            return NotImplemented
        return self._order == other._order and self.transitions == other.transitions

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self._order}, windows={len(self.transitions)})"
