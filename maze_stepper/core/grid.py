from array import array
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Tuple

from maze_stepper.core.errors import InvalidDimensions, OutOfRange


class WallType(IntEnum):
    VERTICAL = 0    # Between (x, y) and (x + 1, y)
    HORIZONTAL = 1  # Between (x, y) and (x, y + 1)


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class WallChange:
    x: int
    y: int
    wall_type: WallType


class CellLayer(NamedTuple):
    name: str
    cells: List[Point]


class GridModel:
    """
    Wall storage for a width x height maze.

    Two flat byte arrays hold one bit each per cell:
    - vertical_walls[y*w + x]   -> wall between (x, y) and (x+1, y)
    - horizontal_walls[y*w + x] -> wall between (x, y) and (x, y+1)
    The slots on the right column / bottom row face the outer border, which
    is always closed. They are never queried and never mutated by algorithms.
    """

    __slots__ = ('width', 'height', 'vertical_walls', 'horizontal_walls')

    def __init__(self, width: int, height: int):
        self._check_dimensions(width, height)
        self.width = width
        self.height = height
        self._allocate(filled=True)

    @staticmethod
    def _check_dimensions(width, height):
        for value in (width, height):
            # bool is an int subclass but never a size
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidDimensions(width, height)

    def _allocate(self, filled: bool):
        # 'B' (unsigned char) -> 1 byte per wall slot
        value = 1 if filled else 0
        size = self.width * self.height
        self.vertical_walls = array('B', [value]) * size
        self.horizontal_walls = array('B', [value]) * size

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def fill_grid(self):
        """Every wall present: starting state for the carving algorithms."""
        self._allocate(filled=True)

    def clear_grid(self):
        """No walls at all: starting state for recursive division."""
        self._allocate(filled=False)

    def resize_grid(self, new_width: int, new_height: int):
        self._check_dimensions(new_width, new_height)
        self.width = new_width
        self.height = new_height
        self._allocate(filled=True)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if self.in_bounds(x, y):
            return y * self.width + x
        raise OutOfRange(x, y, self.width, self.height)

    def point_at(self, idx: int) -> Point:
        return Point(idx % self.width, idx // self.width)

    def has_vertical_wall(self, x: int, y: int) -> bool:
        # x == width - 1 would be the right border, which has no stored bit
        if not (0 <= x < self.width - 1 and 0 <= y < self.height):
            raise OutOfRange(x, y, self.width, self.height, what="Vertical wall")
        return self.vertical_walls[y * self.width + x] != 0

    def has_horizontal_wall(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height - 1):
            raise OutOfRange(x, y, self.width, self.height, what="Horizontal wall")
        return self.horizontal_walls[y * self.width + x] != 0

    def has_wall(self, x: int, y: int, wall_type: WallType) -> bool:
        if wall_type == WallType.VERTICAL:
            return self.has_vertical_wall(x, y)
        return self.has_horizontal_wall(x, y)

    def set_vertical_wall(self, x: int, y: int, present: bool) -> bool:
        """Returns True only if the bit actually flipped."""
        idx = y * self.width + x
        value = 1 if present else 0
        if self.vertical_walls[idx] == value:
            return False
        self.vertical_walls[idx] = value
        return True

    def set_horizontal_wall(self, x: int, y: int, present: bool) -> bool:
        idx = y * self.width + x
        value = 1 if present else 0
        if self.horizontal_walls[idx] == value:
            return False
        self.horizontal_walls[idx] = value
        return True

    def set_wall(self, x: int, y: int, wall_type: WallType, present: bool) -> bool:
        if wall_type == WallType.VERTICAL:
            return self.set_vertical_wall(x, y, present)
        return self.set_horizontal_wall(x, y, present)

    @staticmethod
    def wall_between(a: Tuple[int, int], b: Tuple[int, int]) -> Tuple[int, int, WallType]:
        """
        Returns the (x, y, wall_type) slot separating two adjacent cells.
        The slot always belongs to the left / upper cell.
        """
        ax, ay = a
        bx, by = b
        if ay == by and abs(ax - bx) == 1:
            return min(ax, bx), ay, WallType.VERTICAL
        if ax == bx and abs(ay - by) == 1:
            return ax, min(ay, by), WallType.HORIZONTAL
        raise ValueError(f"Cells {a} and {b} are not adjacent")

    def get_neighbors(self, x: int, y: int) -> Iterator[Point]:
        """
        Yields all in-bounds 4-neighbours.
        Does NOT check walls.
        """
        if y > 0:
            yield Point(x, y - 1)
        if y < self.height - 1:
            yield Point(x, y + 1)
        if x < self.width - 1:
            yield Point(x + 1, y)
        if x > 0:
            yield Point(x - 1, y)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Point]:
        """Yields neighbours NOT blocked by a wall."""
        idx = y * self.width + x
        if y > 0 and not self.horizontal_walls[idx - self.width]:
            yield Point(x, y - 1)
        if y < self.height - 1 and not self.horizontal_walls[idx]:
            yield Point(x, y + 1)
        if x < self.width - 1 and not self.vertical_walls[idx]:
            yield Point(x + 1, y)
        if x > 0 and not self.vertical_walls[idx - 1]:
            yield Point(x - 1, y)

    def interior_walls(self) -> Iterator[Tuple[int, int, WallType]]:
        """Every stored (non-border) wall slot, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                if x < self.width - 1:
                    yield x, y, WallType.VERTICAL
                if y < self.height - 1:
                    yield x, y, WallType.HORIZONTAL

    def snapshot(self) -> bytes:
        """Interior wall state as bytes, for bit-identical comparisons."""
        out = bytearray()
        for x, y, wall_type in self.interior_walls():
            out.append(1 if self.has_wall(x, y, wall_type) else 0)
        return bytes(out)
