"""
core.rng
--------
Seeded random number context used by every randomized split.
Functions:
    - new_context: Build an RngContext from an integer seed.

The context wraps its own numpy Generator (PCG64), never numpy's global
state, so independent planning calls can run side by side.
"""
import numbers

import numpy as np

from core.errors import InvalidSeedError

MAX_SEED = 2 ** 64


class RngContext:
    def __init__(self, seed):
        self.seed = seed
        self._generator = np.random.Generator(np.random.PCG64(seed))
        self.draws = 0

    def permutation(self, n):
        """
        Return a random permutation of range(n) as a numpy array.
        """
        self.draws += 1
        return self._generator.permutation(n)

    def shuffle(self, items):
        """
        Return a shuffled copy of items as a list. The input is left untouched.
        """
        items = list(items)
        order = self.permutation(len(items))
        return [items[i] for i in order]

    def __repr__(self):
        return f"RngContext(seed={self.seed}, draws={self.draws})"


def new_context(seed):
    """
    Create a random context from a seed.

    Parameters
    ----------
    seed : int
        Non-negative integer below 2**64.

    Returns
    -------
    RngContext

    Raises
    ------
    InvalidSeedError
        If seed is not an integer (bool and float included) or out of range.
    """
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise InvalidSeedError(f"Seed must be an integer, got {type(seed).__name__}: {seed!r}")
    seed = int(seed)
    if not 0 <= seed < MAX_SEED:
        raise InvalidSeedError(f"Seed must be in [0, 2**64), got {seed}.")
    return RngContext(seed)
