from array import array
from typing import Dict, List, Optional, Tuple

from maze_stepper.algo.base import Generator
from maze_stepper.core.grid import CellLayer, Point, WallChange, WallType


class DisjointSet:
    """Union-find over cell indices (union by rank, path compression)."""

    def __init__(self, size: int):
        self.parent = array('l', range(size))
        self.rank = array('B', [0]) * size
        self.unions = 0

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Compress
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merges the sets of a and b. False if they were already joined."""
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        self.unions += 1
        return True


class KruskalAlgorithm(Generator):
    name = "Kruskal's Algorithm"

    def start(self):
        self.sets = DisjointSet(self.grid.cell_count)
        self.target_unions = self.grid.cell_count - 1
        self.walls: List[Tuple[int, int, WallType]] = list(self.grid.interior_walls())
        self.rng.shuffle(self.walls)
        self.cursor = 0
        self.current: Optional[Tuple[Point, Point]] = None

    def _advance(self, changes: List[WallChange]) -> bool:
        if self.sets.unions >= self.target_unions or self.cursor >= len(self.walls):
            self.current = None
            return True

        x, y, wall_type = self.walls[self.cursor]
        self.cursor += 1

        a = Point(x, y)
        b = Point(x + 1, y) if wall_type == WallType.VERTICAL else Point(x, y + 1)
        self.current = (a, b)

        w = self.grid.width
        if self.sets.union(a.y * w + a.x, b.y * w + b.x):
            self._set_wall(changes, x, y, wall_type, False)

        # Union count is the real completion signal; leftover candidates are all futile
        return self.sets.unions >= self.target_unions or self.cursor >= len(self.walls)

    def cell_layers(self) -> List[CellLayer]:
        groups: Dict[int, List[Point]] = {}
        for i in range(self.grid.cell_count):
            groups.setdefault(self.sets.find(i), []).append(self.grid.point_at(i))

        # Dict keeps insertion order -> components ordered by their lowest cell index
        layers = [CellLayer(f"set-{root}", cells) for root, cells in groups.items() if len(cells) > 1]
        if self.current is not None:
            layers.append(CellLayer("current", list(self.current)))
        return layers
