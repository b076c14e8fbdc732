"""Word-level chain: feeds sentences and files, renders generated words as text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from .iterators import ChainIterator
from .markov import MarkovChain

logger = logging.getLogger(__name__)


class TextChain(MarkovChain):
    """A :class:`MarkovChain` whose tokens are words."""

    def feed_str(self, text: str) -> "TextChain":
        """Feed one sentence, split on single spaces."""
        return self.feed(text.split(" "))

    def feed_lines(self, lines: Iterable[str]) -> "TextChain":
        """Feed every line as its own sentence, split on any whitespace."""
        for line in lines:
            self.feed(line.split())
        return self

    def feed_file(self, path: Union[str, Path], encoding: str = "utf-8") -> "TextChain":
        """Feed a file holding one sentence per line.

        Errors opening or decoding the file are raised to the caller.
        """
        with open(path, "r", encoding=encoding) as f:
            self.feed_lines(f)
        logger.debug(f"Fed {path}, chain now has {len(self)} windows")
        return self

    @staticmethod
    def render(words: List[str]) -> str:
        return " ".join(words)

    def generate_str(self) -> str:
        return self.render(self.generate())

    def generate_str_from_token(self, word: str) -> str:
        """Generate a sentence starting with ``word``; empty string if it is unknown."""
        return self.render(self.generate_from_token(word))

    def str_iter(self) -> ChainIterator:
        return ChainIterator(self, render=self.render)

    def str_iter_for(self, size: int) -> ChainIterator:
        return ChainIterator(self, count=size, render=self.render)
