from array import array
from typing import List

from maze_stepper.algo.base import Generator
from maze_stepper.core.grid import CellLayer, Point, WallChange

ABSENT = -1


class WilsonsAlgorithm(Generator):
    """
    Loop-erased random walks.

    A walk starts on a random cell outside the maze and wanders over the full
    grid graph (walls are ignored while walking). Stepping onto a cell already
    in the walk erases the loop by truncating the walk back to that cell.
    Stepping onto a maze cell commits: every edge of the walk is carved and
    its cells join the maze. Walls are only touched on commit.
    """

    name = "Wilson's Algorithm"

    def start(self):
        n = self.grid.cell_count
        self.in_maze = array('B', [0]) * n
        # walk_position[idx] = index of the cell in walk_path, or ABSENT
        self.walk_position = array('l', [ABSENT]) * n
        self.walk_path: List[Point] = []

        # Cells outside the maze, with an index map for O(1) swap removal
        self.remaining: List[int] = list(range(n))
        self.remaining_pos = array('l', range(n))
        self.seeded = False

    def _advance(self, changes: List[WallChange]) -> bool:
        if not self.seeded:
            # First cell of the run joins the maze directly
            self.seeded = True
            self._add_to_maze(self.rng.choice(self.remaining))
            return not self.remaining

        if not self.walk_path:
            if not self.remaining:
                return True
            idx = self.rng.choice(self.remaining)
            self._extend(self.grid.point_at(idx))
            return False

        end = self.walk_path[-1]
        nxt = self.rng.choice(list(self.grid.get_neighbors(end.x, end.y)))
        nxt_idx = nxt.y * self.grid.width + nxt.x

        pos = self.walk_position[nxt_idx]
        if pos != ABSENT:
            self._truncate(pos + 1)
            return False

        if self.in_maze[nxt_idx]:
            self._commit(nxt, changes)
            return not self.remaining

        self._extend(nxt)
        return False

    def _extend(self, cell: Point):
        self.walk_position[cell.y * self.grid.width + cell.x] = len(self.walk_path)
        self.walk_path.append(cell)

    def _truncate(self, length: int):
        """Erase the loop: drop everything after walk_path[length - 1]."""
        w = self.grid.width
        for cell in self.walk_path[length:]:
            self.walk_position[cell.y * w + cell.x] = ABSENT
        del self.walk_path[length:]

    def _commit(self, target: Point, changes: List[WallChange]):
        path = self.walk_path + [target]
        for a, b in zip(path, path[1:]):
            self._carve_between(changes, a, b)

        w = self.grid.width
        for cell in self.walk_path:
            idx = cell.y * w + cell.x
            self.walk_position[idx] = ABSENT
            self._add_to_maze(idx)
        self.walk_path = []

    def _add_to_maze(self, idx: int):
        self.in_maze[idx] = 1
        pos = self.remaining_pos[idx]
        last = self.remaining[-1]
        self.remaining[pos] = last
        self.remaining_pos[last] = pos
        self.remaining.pop()
        self.remaining_pos[idx] = ABSENT

    def cell_layers(self) -> List[CellLayer]:
        maze = [self.grid.point_at(i) for i, v in enumerate(self.in_maze) if v]
        return [
            CellLayer("maze", maze),
            CellLayer("walk", list(self.walk_path)),
        ]
