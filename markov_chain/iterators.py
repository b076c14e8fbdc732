from __future__ import annotations

from typing import Callable, Optional, Tuple


class ChainIterator:
    """Lazily generates sequences from a chain, one per ``next()`` call.

    With ``count=None`` the iterator never stops; otherwise it yields exactly
    ``count`` sequences. ``render``, when given, is applied to every
    generated sequence before it is returned.
    """

    def __init__(self, chain, count: Optional[int] = None, render: Optional[Callable] = None):
        if count is not None and count < 0:
            raise ValueError("count must not be negative.")
        self.chain = chain
        self.remaining = count
        self.render = render

    def __iter__(self) -> "ChainIterator":
        return self

    def __next__(self):
        if self.remaining is not None:
            if self.remaining == 0:
                raise StopIteration
            self.remaining -= 1
        generated = self.chain.generate()
        if self.render is not None:
            return self.render(generated)
        return generated

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """(lower, upper) bound on the sequences left; upper is None when unbounded."""
        if self.remaining is None:
            return 0, None
        return self.remaining, self.remaining

    def __length_hint__(self):
        if self.remaining is None:
            return NotImplemented
        return self.remaining
