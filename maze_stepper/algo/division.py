from typing import List, NamedTuple, Optional

from maze_stepper.algo.base import Generator
from maze_stepper.core.grid import CellLayer, Point, WallChange, WallType


class Chamber(NamedTuple):
    # Max bounds are exclusive
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    def cells(self) -> List[Point]:
        return [Point(x, y) for y in range(self.y0, self.y1) for x in range(self.x0, self.x1)]


class RecursiveDivision(Generator):
    """
    Adds walls to an open grid.

    A chamber one cell wide or one cell tall is terminal: its open cells
    already form a path. Larger chambers are split by a full-length wall with
    a single passage, usually across their longer side (3 in 4, coin flip
    when square).
    """

    name = "Recursive Division"
    requires_clear_grid = True

    def start(self):
        self.chambers: List[Chamber] = [Chamber(0, 0, self.grid.width, self.grid.height)]
        self.current: Optional[Chamber] = None

    def _advance(self, changes: List[WallChange]) -> bool:
        if not self.chambers:
            self.current = None
            return True

        chamber = self.chambers.pop()
        self.current = chamber

        if chamber.width < 2 or chamber.height < 2:
            return not self.chambers

        if chamber.width == chamber.height:
            vertical = self.rng.coin()
        else:
            # Across the longer side three times out of four
            across_longer = self.rng.randrange(4) != 0
            vertical = across_longer == (chamber.width > chamber.height)

        if vertical:
            # Wall on the right of column wall_x, passage at row passage_y
            wall_x = chamber.x0 + self.rng.randrange(chamber.width - 1)
            passage_y = chamber.y0 + self.rng.randrange(chamber.height)
            for y in range(chamber.y0, chamber.y1):
                if y != passage_y:
                    self._set_wall(changes, wall_x, y, WallType.VERTICAL, True)
            self.chambers.append(Chamber(chamber.x0, chamber.y0, wall_x + 1, chamber.y1))
            self.chambers.append(Chamber(wall_x + 1, chamber.y0, chamber.x1, chamber.y1))
        else:
            wall_y = chamber.y0 + self.rng.randrange(chamber.height - 1)
            passage_x = chamber.x0 + self.rng.randrange(chamber.width)
            for x in range(chamber.x0, chamber.x1):
                if x != passage_x:
                    self._set_wall(changes, x, wall_y, WallType.HORIZONTAL, True)
            self.chambers.append(Chamber(chamber.x0, chamber.y0, chamber.x1, wall_y + 1))
            self.chambers.append(Chamber(chamber.x0, wall_y + 1, chamber.x1, chamber.y1))

        return False

    def cell_layers(self) -> List[CellLayer]:
        if self.current is None:
            return []
        return [CellLayer("chamber", self.current.cells())]
