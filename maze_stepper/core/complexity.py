from maze_stepper.core.grid import GridModel


class MazeStats:
    @staticmethod
    def count_passages(grid: GridModel) -> int:
        """Number of open interior adjacencies."""
        return sum(1 for x, y, wall_type in grid.interior_walls()
                   if not grid.has_wall(x, y, wall_type))

    @staticmethod
    def is_connected(grid: GridModel) -> bool:
        seen = bytearray(grid.cell_count)
        seen[0] = 1
        stack = [(0, 0)]
        reached = 1
        while stack:
            x, y = stack.pop()
            for nx, ny in grid.get_open_neighbors(x, y):
                idx = ny * grid.width + nx
                if not seen[idx]:
                    seen[idx] = 1
                    reached += 1
                    stack.append((nx, ny))
        return reached == grid.cell_count

    @staticmethod
    def is_perfect(grid: GridModel) -> bool:
        """Connected with exactly cells - 1 passages -> spanning tree."""
        return (MazeStats.count_passages(grid) == grid.cell_count - 1
                and MazeStats.is_connected(grid))

    @staticmethod
    def calculate_stats(grid: GridModel):
        dead_ends = 0
        corridors = 0
        junctions = 0  # 3 or 4 exits

        for y in range(grid.height):
            for x in range(grid.width):
                exits = sum(1 for _ in grid.get_open_neighbors(x, y))
                if exits == 1: dead_ends += 1
                elif exits == 2: corridors += 1
                elif exits >= 3: junctions += 1

        total = grid.cell_count
        return {
            "passages": MazeStats.count_passages(grid),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
            "perfect": MazeStats.is_perfect(grid),
        }
