"""
Seeded random source for the maze generator.

The generator only draws floats for its difficulty bias rolls and picks
neighbours and start cells with ``choice``, so those two calls are all this
wrapper exposes. Passing the same seed reproduces the same maze.
"""

import random
from typing import Optional


class SeededRNG:
    """Seeded random number generator for reproducible results."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> Optional[int]:
        """Get the current seed."""
        return self._seed

    def set_seed(self, seed: Optional[int]):
        """Set a new seed."""
        self._seed = seed
        self._rng.seed(seed)

    def random(self) -> float:
        """Generate a random float in [0.0, 1.0)."""
        return self._rng.random()

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        return self._rng.choice(seq)


# Global instance for convenience
default_rng = SeededRNG()


def set_global_seed(seed: Optional[int]):
    """Set the seed for the global RNG instance."""
    default_rng.set_seed(seed)


def get_global_seed() -> Optional[int]:
    """Get the seed of the global RNG instance."""
    return default_rng.seed
