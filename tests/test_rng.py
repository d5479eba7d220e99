import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.rng import RandomSource


class FixedSequence:
    """Stub: randrange(n) returns the next scripted value modulo n."""

    def __init__(self, values):
        self.values = list(values)
        self.i = 0

    def randrange(self, n):
        v = self.values[self.i % len(self.values)] % n
        self.i += 1
        return v


class TestRandomSource(unittest.TestCase):
    def test_seeded_is_reproducible(self):
        a = RandomSource(123)
        b = RandomSource(123)
        self.assertEqual([a.randrange(1000) for _ in range(20)],
                         [b.randrange(1000) for _ in range(20)])

    def test_unseeded_ranges(self):
        rng = RandomSource()
        for _ in range(200):
            self.assertIn(rng.randrange(4), range(4))
            self.assertIn(rng.coin(), (True, False))

    def test_shuffle_is_permutation(self):
        rng = RandomSource(5)
        items = list(range(50))
        rng.shuffle(items)
        self.assertEqual(sorted(items), list(range(50)))
        self.assertNotEqual(items, list(range(50)))

    def test_wrapped_stub(self):
        rng = RandomSource.wrap(FixedSequence([2, 0, 1]))
        self.assertEqual(rng.choice("abc"), "c")
        self.assertEqual(rng.choice("abc"), "a")
        self.assertEqual(rng.randrange(10), 1)

    def test_shuffle_with_stub(self):
        # Always j = 0 -> element at i swaps with index 0 each round
        rng = RandomSource.wrap(FixedSequence([0]))
        items = [1, 2, 3]
        rng.shuffle(items)
        self.assertEqual(items, [2, 3, 1])


if __name__ == '__main__':
    unittest.main()
