import random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar('T')


class RandomSource:
    """
    Uniform randomness shared by every algorithm.

    seed=None -> OS entropy (random.SystemRandom), not reproducible.
    seed=int  -> random.Random(seed), reproducible run for tests and replays.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        if seed is None:
            self._rng = random.SystemRandom()
        else:
            self._rng = random.Random(seed)

    @classmethod
    def wrap(cls, rng) -> 'RandomSource':
        """Use any random.Random-compatible object (e.g. a fixed-sequence stub)."""
        source = cls.__new__(cls)
        source.seed = None
        source._rng = rng
        return source

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        return self._rng.randrange(n)

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self._rng.randrange(len(seq))]

    def coin(self) -> bool:
        return self._rng.randrange(2) == 0

    def shuffle(self, items: MutableSequence[T]):
        # Fisher-Yates, in place
        for i in range(len(items) - 1, 0, -1):
            j = self._rng.randrange(i + 1)
            items[i], items[j] = items[j], items[i]
