"""
Uniform Sampler
===============

Seedable source of independent draws from [0, 1).

numpy draws are generated a block at a time and handed out one by one, so
the per-event call in the race loop only indexes a list.
"""

from typing import Optional
import numpy as np

from .config import get_rng


DEFAULT_BLOCK_SIZE = 65_536


class UniformSampler:
    """
    Buffered view over a `numpy.random.Generator` stream.

    Values come out in the generator's order whatever the block size, so a
    seeded sampler reproduces the same sequence across runs.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        block_size: int = DEFAULT_BLOCK_SIZE,
    ):
        if block_size < 1:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self.seed = seed
        self.block_size = block_size
        self.rng = rng if rng is not None else get_rng(seed)
        self._block = []
        self._pos = 0
        self.draws = 0

    def reseed(self, seed: Optional[int]) -> None:
        """Restart the stream from `seed`, discarding buffered values."""
        self.seed = seed
        self.rng = get_rng(seed)
        self._block = []
        self._pos = 0
        self.draws = 0

    def _refill(self) -> None:
        self._block = self.rng.random(self.block_size).tolist()
        self._pos = 0

    def next(self) -> float:
        """Next draw from [0, 1)."""
        if self._pos >= len(self._block):
            self._refill()
        value = self._block[self._pos]
        self._pos += 1
        self.draws += 1
        return value

    __call__ = next
