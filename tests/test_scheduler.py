import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.config import ANIMATION, steps_per_second
from maze_stepper.generator import AlgorithmKind, MazeGenerator, StepResult
from maze_stepper.viz.scheduler import StepScheduler


class CountingMaze:
    """Stands in for MazeGenerator; never finishes."""

    is_generating = True

    def __init__(self):
        self.calls = 0

    def generation_step_with_changes(self):
        self.calls += 1
        return StepResult(False, [])


class TestStepScheduler(unittest.TestCase):
    def test_speed_curve(self):
        self.assertAlmostEqual(steps_per_second(50), 1.07 ** 50)
        # Clamped to the configured range
        self.assertEqual(steps_per_second(500), steps_per_second(ANIMATION.max_speed))
        self.assertEqual(steps_per_second(-3), steps_per_second(ANIMATION.min_speed))

    def test_steps_per_tick(self):
        maze = CountingMaze()
        sched = StepScheduler(maze, speed=50)
        sched.tick(1.0)
        self.assertEqual(maze.calls, int(1.07 ** 50))

    def test_slow_speed_accumulates_debt(self):
        maze = CountingMaze()
        sched = StepScheduler(maze, speed=1)  # 1.07 steps/sec
        for _ in range(10):
            sched.tick(0.05)
        self.assertEqual(maze.calls, 0)
        for _ in range(10):
            sched.tick(0.05)
        self.assertEqual(maze.calls, 1)

    def test_frame_cap(self):
        maze = CountingMaze()
        sched = StepScheduler(maze, speed=100)
        sched.tick(10.0)
        self.assertEqual(maze.calls, ANIMATION.max_steps_per_frame)
        self.assertLessEqual(sched.step_debt, 1.0)

    def test_pause(self):
        maze = CountingMaze()
        sched = StepScheduler(maze, speed=80)
        sched.paused = True
        self.assertEqual(sched.tick(1.0), ([], False))
        self.assertEqual(maze.calls, 0)

    def test_speed_is_clamped(self):
        sched = StepScheduler(CountingMaze(), speed=10)
        sched.speed = 1000
        self.assertEqual(sched.speed, ANIMATION.max_speed)
        sched.speed = 0
        self.assertEqual(sched.speed, ANIMATION.min_speed)

    def test_runs_real_generation_to_completion(self):
        maze = MazeGenerator(2, 2, seed=1)
        maze.start_generation(AlgorithmKind.BACKTRACKING)
        sched = StepScheduler(maze, speed=50)
        changes, finished = sched.tick(1.0)  # ~29 steps, backtracking needs 8
        self.assertTrue(finished)
        self.assertEqual(len(changes), 3)
        self.assertFalse(maze.is_generating)
        self.assertEqual(sched.tick(1.0), ([], False))


if __name__ == '__main__':
    unittest.main()
