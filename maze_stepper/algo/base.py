from abc import ABC, abstractmethod
from typing import List, Tuple

from maze_stepper.core.grid import CellLayer, GridModel, WallChange, WallType
from maze_stepper.core.rng import RandomSource


class Generator(ABC):
    """
    One resumable maze-generation run.

    All progress lives in plain attributes so a run can be paused between
    any two step() calls. The grid is the only wall storage: algorithms keep
    bookkeeping (stacks, frontiers, union-find...) but never a wall copy.
    """

    name = "Generator"
    # Carving algorithms start from a full grid, division from an empty one
    requires_clear_grid = False

    def __init__(self, grid: GridModel, rng: RandomSource):
        self.grid = grid
        self.rng = rng
        self.step_count = 0
        self.finished = False

    def start(self):
        """Prepares bookkeeping for the current grid size. Does not step."""
        pass

    def step(self) -> Tuple[bool, List[WallChange]]:
        """
        Performs exactly one unit of work.
        Returns (finished, wall changes applied during this step).
        """
        if self.finished:
            return True, []
        changes: List[WallChange] = []
        self.finished = self._advance(changes)
        self.step_count += 1
        return self.finished, changes

    @abstractmethod
    def _advance(self, changes: List[WallChange]) -> bool:
        """Single step body. Appends applied changes, returns finished flag."""
        pass

    @abstractmethod
    def cell_layers(self) -> List[CellLayer]:
        """Visualization layers, lowest priority first."""
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        while not self.step()[0]:
            pass

    def _set_wall(self, changes: List[WallChange], x: int, y: int, wall_type: WallType, present: bool):
        # Only real flips are reported
        if self.grid.set_wall(x, y, wall_type, present):
            changes.append(WallChange(x, y, wall_type))

    def _carve_between(self, changes: List[WallChange], a, b):
        x, y, wall_type = self.grid.wall_between(a, b)
        self._set_wall(changes, x, y, wall_type, False)
