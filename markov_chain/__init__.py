"""A generic variable-order Markov chain with a word-level text front end."""

from .iterators import ChainIterator
from .markov import BOUNDARY, EmptyChainError, MarkovChain
from .sampler import EmptyDistributionError, WeightedSampler
from .text import TextChain

__all__ = [
    "BOUNDARY",
    "ChainIterator",
    "EmptyChainError",
    "EmptyDistributionError",
    "MarkovChain",
    "TextChain",
    "WeightedSampler",
]
