import logging
from enum import Enum
from typing import List, NamedTuple, Optional

from maze_stepper.algo.base import Generator
from maze_stepper.algo.dfs import RecursiveBacktracker
from maze_stepper.algo.division import RecursiveDivision
from maze_stepper.algo.kruskal import KruskalAlgorithm
from maze_stepper.algo.prim import PrimsAlgorithm
from maze_stepper.algo.wilson import WilsonsAlgorithm
from maze_stepper.core.errors import NoActiveGeneration
from maze_stepper.core.grid import CellLayer, GridModel, Point, WallChange, WallType
from maze_stepper.core.rng import RandomSource

logger = logging.getLogger(__name__)


class AlgorithmKind(Enum):
    BACKTRACKING = "backtracking"
    PRIM = "prim"
    KRUSKAL = "kruskal"
    WILSON = "wilson"
    RECURSIVE_DIVISION = "division"

    @property
    def generator_class(self):
        return _GENERATORS[self]

    @property
    def requires_clear_grid(self) -> bool:
        return self.generator_class.requires_clear_grid


_GENERATORS = {
    AlgorithmKind.BACKTRACKING: RecursiveBacktracker,
    AlgorithmKind.PRIM: PrimsAlgorithm,
    AlgorithmKind.KRUSKAL: KruskalAlgorithm,
    AlgorithmKind.WILSON: WilsonsAlgorithm,
    AlgorithmKind.RECURSIVE_DIVISION: RecursiveDivision,
}


class StepResult(NamedTuple):
    is_finished: bool
    changes: List[WallChange]


class MazeGenerator:
    """
    Public entry point: owns the grid and, during a stepwise run, the
    algorithm state.

    Instant mode:   generate_maze(kind)
    Animated mode:  start_generation(kind), then generation_step_with_changes()
                    as often as the caller likes. Pausing is just not calling it.

    Not thread-safe; confine an instance to one thread.
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None,
                 random_source: Optional[RandomSource] = None):
        self.grid = GridModel(width, height)
        self.rng = random_source if random_source is not None else RandomSource(seed)
        self._active: Optional[Generator] = None

    # --- Grid management ---

    def clear_grid(self):
        self._discard_run("clear_grid")
        self.grid.clear_grid()

    def fill_grid(self):
        self._discard_run("fill_grid")
        self.grid.fill_grid()

    def resize_grid(self, new_width: int, new_height: int):
        self._discard_run("resize_grid")
        self.grid.resize_grid(new_width, new_height)
        logger.debug(f"Grid resized to {new_width}x{new_height}")

    def get_grid_width(self) -> int:
        return self.grid.width

    def get_grid_height(self) -> int:
        return self.grid.height

    def has_vertical_wall(self, x: int, y: int) -> bool:
        return self.grid.has_vertical_wall(x, y)

    def has_horizontal_wall(self, x: int, y: int) -> bool:
        return self.grid.has_horizontal_wall(x, y)

    def has_wall(self, x: int, y: int, wall_type: WallType) -> bool:
        return self.grid.has_wall(x, y, wall_type)

    # --- Generation ---

    def generate_maze(self, algorithm: AlgorithmKind):
        """Builds a complete maze synchronously; intermediate diffs are dropped."""
        self._discard_run("generate_maze")
        generator = self._create(algorithm)
        generator.run_all()
        logger.debug(f"{generator.name}: finished in {generator.step_count} steps")

    def start_generation(self, algorithm: AlgorithmKind):
        self._discard_run("start_generation")
        self._active = self._create(algorithm)

    def generation_step(self) -> bool:
        return self.generation_step_with_changes().is_finished

    def generation_step_with_changes(self) -> StepResult:
        try:
            generator = self._require_active()
        except NoActiveGeneration:
            logger.debug("Step requested with no generation in progress")
            return StepResult(False, [])

        finished, changes = generator.step()
        if finished:
            logger.debug(f"{generator.name}: finished in {generator.step_count} steps")
            self._active = None
        return StepResult(finished, changes)

    @property
    def is_generating(self) -> bool:
        return self._active is not None

    @property
    def active_algorithm(self) -> Optional[str]:
        return self._active.name if self._active else None

    def get_cell_layers(self) -> List[List[Point]]:
        return [layer.cells for layer in self.get_named_layers()]

    def get_named_layers(self) -> List[CellLayer]:
        if self._active is None:
            return []
        return self._active.cell_layers()

    # --- Internals ---

    def _create(self, algorithm: AlgorithmKind) -> Generator:
        algorithm = AlgorithmKind(algorithm)
        if algorithm.requires_clear_grid:
            self.grid.clear_grid()
        else:
            self.grid.fill_grid()
        generator = algorithm.generator_class(self.grid, self.rng)
        generator.start()
        logger.debug(f"Starting {generator.name} on {self.grid.width}x{self.grid.height}")
        return generator

    def _require_active(self) -> Generator:
        if self._active is None:
            raise NoActiveGeneration()
        return self._active

    def _discard_run(self, reason: str):
        if self._active is not None:
            logger.debug(f"{reason}: discarding {self._active.name} run after {self._active.step_count} steps")
            self._active = None
