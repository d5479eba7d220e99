from array import array
from typing import List, Tuple

from maze_stepper.algo.base import Generator
from maze_stepper.core.grid import CellLayer, Point, WallChange


class PrimsAlgorithm(Generator):
    """
    Randomized Prim over walls.

    The frontier holds (from_cell, to_cell) candidates: a wall on the edge of
    the maze region and the cell behind it. Picking a candidate whose far cell
    joined the maze in the meantime is a consumed step with no change.
    """

    name = "Prim's Algorithm"

    def start(self):
        self.in_maze = array('B', [0]) * self.grid.cell_count
        self.maze_count = 0
        self.frontier: List[Tuple[Point, Point]] = []

    def _advance(self, changes: List[WallChange]) -> bool:
        if self.maze_count == 0:
            idx = self.rng.randrange(self.grid.cell_count)
            self._add_cell(self.grid.point_at(idx))
            return not self.frontier

        # Pick random candidate, swap remove for O(1)
        i = self.rng.randrange(len(self.frontier))
        src, dst = self.frontier[i]
        self.frontier[i] = self.frontier[-1]
        self.frontier.pop()

        if not self.in_maze[dst.y * self.grid.width + dst.x]:
            self._carve_between(changes, src, dst)
            self._add_cell(dst)

        return not self.frontier

    def _add_cell(self, cell: Point):
        self.in_maze[cell.y * self.grid.width + cell.x] = 1
        self.maze_count += 1
        for n in self.grid.get_neighbors(cell.x, cell.y):
            if not self.in_maze[n.y * self.grid.width + n.x]:
                self.frontier.append((cell, n))

    def cell_layers(self) -> List[CellLayer]:
        maze = [self.grid.point_at(i) for i, v in enumerate(self.in_maze) if v]
        seen = set()
        frontier = []
        for _, dst in self.frontier:
            if dst not in seen and not self.in_maze[dst.y * self.grid.width + dst.x]:
                seen.add(dst)
                frontier.append(dst)
        return [
            CellLayer("maze", maze),
            CellLayer("frontier", frontier),
        ]
