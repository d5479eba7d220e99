from typing import List, Tuple

from maze_stepper.config import ANIMATION, AnimationConfig, steps_per_second
from maze_stepper.core.grid import WallChange


class StepScheduler:
    """
    Turns elapsed time into a number of engine steps.

    Fractional steps accumulate as "debt" so slow speeds still advance
    (one step every few frames) and fast speeds batch several steps per frame.
    """

    def __init__(self, maze, speed: int = ANIMATION.default_speed, config: AnimationConfig = ANIMATION):
        self.maze = maze
        self.config = config
        self.speed = speed
        self.step_debt = 0.0
        self.paused = False

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int):
        self._speed = max(self.config.min_speed, min(self.config.max_speed, value))

    def reset(self):
        self.step_debt = 0.0

    def tick(self, dt: float) -> Tuple[List[WallChange], bool]:
        """
        Advances the maze for dt seconds of animation.
        Returns (changes applied this tick, finished).
        """
        if self.paused or not self.maze.is_generating:
            return [], False

        self.step_debt += steps_per_second(self.speed, self.config) * dt
        steps = min(int(self.step_debt), self.config.max_steps_per_frame)
        self.step_debt -= steps
        if steps == self.config.max_steps_per_frame:
            # Drop the backlog instead of spiralling
            self.step_debt = min(self.step_debt, 1.0)

        all_changes: List[WallChange] = []
        for _ in range(steps):
            result = self.maze.generation_step_with_changes()
            all_changes.extend(result.changes)
            if result.is_finished:
                self.step_debt = 0.0
                return all_changes, True
        return all_changes, False
