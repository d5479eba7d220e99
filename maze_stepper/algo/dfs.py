from array import array
from typing import List

from maze_stepper.algo.base import Generator
from maze_stepper.core.grid import CellLayer, Point, WallChange


class RecursiveBacktracker(Generator):
    name = "Recursive Backtracking"

    def start(self):
        self.visited = array('B', [0]) * self.grid.cell_count
        self.visited_count = 0
        # Current path, top of stack = current cell
        self.stack: List[Point] = []
        self.started = False

    def _advance(self, changes: List[WallChange]) -> bool:
        if not self.started:
            # Start at (0,0)
            self.started = True
            self._visit(Point(0, 0))
            return False

        cx, cy = self.stack[-1]

        # Find unvisited neighbors
        neighbors = [n for n in self.grid.get_neighbors(cx, cy)
                     if not self.visited[n.y * self.grid.width + n.x]]

        if neighbors:
            nxt = self.rng.choice(neighbors)
            self._carve_between(changes, (cx, cy), nxt)
            self._visit(nxt)
            return False

        # Backtrack
        self.stack.pop()
        return not self.stack

    def _visit(self, cell: Point):
        self.visited[cell.y * self.grid.width + cell.x] = 1
        self.visited_count += 1
        self.stack.append(cell)

    def cell_layers(self) -> List[CellLayer]:
        visited = [self.grid.point_at(i) for i, v in enumerate(self.visited) if v]
        return [
            CellLayer("visited", visited),
            CellLayer("stack", list(self.stack)),
        ]
