from typing import Iterable

from maze_stepper.core.grid import GridModel, WallChange


def apply_changes(grid: GridModel, changes: Iterable[WallChange], present: bool) -> int:
    """
    Replays a WallChange stream onto a grid, in order.

    present=False for carving runs (changes open walls), True for recursive
    division (changes add walls). Returns the number of bits that flipped.
    """
    flipped = 0
    for change in changes:
        if grid.set_wall(change.x, change.y, change.wall_type, present):
            flipped += 1
    return flipped
