import random
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.complexity import MazeStats
from maze_stepper.core.errors import InvalidDimensions, OutOfRange
from maze_stepper.core.grid import GridModel
from maze_stepper.core.replay import apply_changes
from maze_stepper.core.rng import RandomSource
from maze_stepper.generator import AlgorithmKind, MazeGenerator, StepResult


def drive(maze, limit=100_000):
    """Steps an active run to completion; returns (steps, changes)."""
    changes = []
    for steps in range(1, limit + 1):
        result = maze.generation_step_with_changes()
        changes.extend(result.changes)
        if result.is_finished:
            return steps, changes
    raise AssertionError("generation did not finish")


class TestMazeGenerator(unittest.TestCase):
    def test_dimensions(self):
        maze = MazeGenerator(12, 7)
        self.assertEqual(maze.get_grid_width(), 12)
        self.assertEqual(maze.get_grid_height(), 7)
        with self.assertRaises(InvalidDimensions):
            MazeGenerator(0, 7)

    def test_generate_all_algorithms(self):
        for kind in AlgorithmKind:
            with self.subTest(algo=kind.value):
                maze = MazeGenerator(15, 11, seed=1)
                maze.generate_maze(kind)
                self.assertTrue(MazeStats.is_perfect(maze.grid))
                self.assertFalse(maze.is_generating)

    def test_algorithm_by_name(self):
        maze = MazeGenerator(6, 6, seed=2)
        maze.generate_maze("division")
        self.assertTrue(MazeStats.is_perfect(maze.grid))
        with self.assertRaises(ValueError):
            maze.generate_maze("bogus")

    def test_replay_equivalence(self):
        w, h = 13, 9
        for kind in AlgorithmKind:
            with self.subTest(algo=kind.value):
                instant = MazeGenerator(w, h, seed=99)
                instant.generate_maze(kind)

                stepped = MazeGenerator(w, h, seed=99)
                stepped.start_generation(kind)
                _, changes = drive(stepped)

                replayed = GridModel(w, h)
                if kind.requires_clear_grid:
                    replayed.clear_grid()
                apply_changes(replayed, changes, present=kind.requires_clear_grid)

                self.assertEqual(stepped.grid.snapshot(), instant.grid.snapshot())
                self.assertEqual(replayed.snapshot(), instant.grid.snapshot())

    def test_kruskal_example(self):
        maze = MazeGenerator(5, 5)
        maze.start_generation(AlgorithmKind.KRUSKAL)
        finished = False
        steps = 0
        while not finished and steps < 10000:
            finished = maze.generation_step_with_changes().is_finished
            steps += 1
        self.assertTrue(finished)
        # Bounded by the candidate wall list (40 interior walls on 5x5)
        self.assertLessEqual(steps, 40)
        self.assertTrue(MazeStats.is_perfect(maze.grid))

    def test_start_resets_grid(self):
        maze = MazeGenerator(6, 6, seed=4)
        maze.generate_maze(AlgorithmKind.PRIM)

        maze.start_generation(AlgorithmKind.WILSON)
        self.assertTrue(all(maze.grid.snapshot()))

        maze.start_generation(AlgorithmKind.RECURSIVE_DIVISION)
        self.assertFalse(any(maze.grid.snapshot()))

    def test_step_without_generation(self):
        maze = MazeGenerator(5, 5)
        self.assertFalse(maze.generation_step())
        self.assertEqual(maze.generation_step_with_changes(), StepResult(False, []))
        self.assertEqual(maze.get_cell_layers(), [])

    def test_run_is_discarded_after_finish(self):
        maze = MazeGenerator(4, 4, seed=5)
        maze.start_generation(AlgorithmKind.BACKTRACKING)
        self.assertTrue(maze.is_generating)
        self.assertEqual(maze.active_algorithm, "Recursive Backtracking")
        drive(maze)
        self.assertFalse(maze.is_generating)
        snap = maze.grid.snapshot()
        self.assertEqual(maze.generation_step_with_changes(), StepResult(False, []))
        self.assertEqual(maze.grid.snapshot(), snap)

    def test_grid_operations_discard_run(self):
        ops = [
            lambda m: m.clear_grid(),
            lambda m: m.fill_grid(),
            lambda m: m.resize_grid(8, 8),
        ]
        for op in ops:
            maze = MazeGenerator(6, 6, seed=6)
            maze.start_generation(AlgorithmKind.KRUSKAL)
            for _ in range(5):
                maze.generation_step()
            op(maze)
            self.assertFalse(maze.is_generating)
            self.assertFalse(maze.generation_step())
            self.assertEqual(maze.get_cell_layers(), [])

    def test_new_start_supersedes_run(self):
        maze = MazeGenerator(6, 6, seed=7)
        maze.start_generation(AlgorithmKind.WILSON)
        for _ in range(20):
            maze.generation_step()
        maze.start_generation(AlgorithmKind.PRIM)
        self.assertEqual(maze.active_algorithm, "Prim's Algorithm")
        drive(maze)
        self.assertTrue(MazeStats.is_perfect(maze.grid))

    def test_resize(self):
        maze = MazeGenerator(5, 5, seed=8)
        maze.generate_maze(AlgorithmKind.KRUSKAL)
        maze.resize_grid(9, 4)
        self.assertEqual((maze.get_grid_width(), maze.get_grid_height()), (9, 4))
        for y in range(4):
            for x in range(8):
                self.assertTrue(maze.has_vertical_wall(x, y))
        for y in range(3):
            for x in range(9):
                self.assertTrue(maze.has_horizontal_wall(x, y))

        with self.assertRaises(InvalidDimensions):
            maze.resize_grid(0, 4)
        self.assertEqual((maze.get_grid_width(), maze.get_grid_height()), (9, 4))

        maze.generate_maze(AlgorithmKind.WILSON)
        self.assertTrue(MazeStats.is_perfect(maze.grid))

    def test_out_of_range_queries(self):
        maze = MazeGenerator(5, 5)
        with self.assertRaises(OutOfRange):
            maze.has_vertical_wall(4, 0)
        with self.assertRaises(OutOfRange):
            maze.has_horizontal_wall(0, 4)
        with self.assertRaises(OutOfRange):
            maze.has_vertical_wall(0, 7)

    def test_clear_and_fill_idempotent(self):
        maze = MazeGenerator(7, 5)
        maze.clear_grid()
        maze.clear_grid()
        self.assertFalse(any(maze.grid.snapshot()))
        maze.fill_grid()
        once = maze.grid.snapshot()
        maze.fill_grid()
        self.assertEqual(maze.grid.snapshot(), once)

    def test_layers_during_wilson(self):
        maze = MazeGenerator(10, 10, seed=9)
        maze.start_generation(AlgorithmKind.WILSON)
        maze.generation_step()
        layers = maze.get_named_layers()
        self.assertEqual([layer.name for layer in layers], ["maze", "walk"])
        self.assertEqual(len(maze.get_cell_layers()[0]), 1)

    def test_injected_random_source(self):
        a = MazeGenerator(8, 8, random_source=RandomSource.wrap(random.Random(3)))
        b = MazeGenerator(8, 8, random_source=RandomSource.wrap(random.Random(3)))
        a.generate_maze(AlgorithmKind.PRIM)
        b.generate_maze(AlgorithmKind.PRIM)
        self.assertEqual(a.grid.snapshot(), b.grid.snapshot())

    def test_unseeded_mazes_are_perfect(self):
        maze = MazeGenerator(10, 10)
        for kind in AlgorithmKind:
            maze.generate_maze(kind)
            self.assertTrue(MazeStats.is_perfect(maze.grid))


if __name__ == '__main__':
    unittest.main()
