from typing import List

from maze_stepper.generator import MazeGenerator


def render_ascii(maze: MazeGenerator) -> str:
    """
    Classic +--+ drawing, two characters per cell.

    +--+--+
    |     |
    +--+  +
    """
    w = maze.get_grid_width()
    h = maze.get_grid_height()
    lines: List[str] = ["+" + "--+" * w]
    for y in range(h):
        row = ["|"]
        bottom = ["+"]
        for x in range(w):
            row.append("  ")
            row.append("|" if x == w - 1 or maze.has_vertical_wall(x, y) else " ")
            bottom.append("--" if y == h - 1 or maze.has_horizontal_wall(x, y) else "  ")
            bottom.append("+")
        lines.append("".join(row))
        lines.append("".join(bottom))
    return "\n".join(lines) + "\n"
