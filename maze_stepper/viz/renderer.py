import logging
from typing import Iterable, Optional

import pygame

from maze_stepper.config import ANIMATION
from maze_stepper.core.grid import WallChange, WallType
from maze_stepper.generator import AlgorithmKind, MazeGenerator
from maze_stepper.viz.recorder import VideoRecorder
from maze_stepper.viz.scheduler import StepScheduler

logger = logging.getLogger(__name__)

KEY_ALGORITHMS = {
    pygame.K_1: AlgorithmKind.BACKTRACKING,
    pygame.K_2: AlgorithmKind.PRIM,
    pygame.K_3: AlgorithmKind.KRUSKAL,
    pygame.K_4: AlgorithmKind.WILSON,
    pygame.K_5: AlgorithmKind.RECURSIVE_DIVISION,
}


class Renderer:
    """
    Animates a MazeGenerator.

    Walls live on their own transparent surface: it is drawn in full once per
    run and afterwards only patched from WallChange diffs. Cell layers are
    redrawn from a fresh snapshot every frame (later layers on top).
    """

    COLOR_BG = (245, 245, 245)
    COLOR_WALL = (26, 26, 26)
    COLOR_HUD = (40, 40, 40)
    # Rotating palette, indexed by layer priority
    LAYER_COLORS = [
        (120, 170, 230),
        (230, 90, 80),
        (110, 200, 130),
        (240, 190, 70),
        (180, 120, 210),
        (90, 200, 200),
    ]

    def __init__(self, maze: MazeGenerator, algorithm: AlgorithmKind, width=1280, height=720,
                 speed=ANIMATION.default_speed, record=False, output_file=None):
        self.maze = maze
        self.algorithm = algorithm
        self.screen_width = width
        self.screen_height = height
        self.scheduler = StepScheduler(maze, speed=speed)
        self.recorder = VideoRecorder(active=record, output_file=output_file)

        self.cell_size = 20
        self.offset_x = 0
        self.offset_y = 0
        self.wall_width = 2

        self.surface: Optional[pygame.Surface] = None
        self.wall_surface: Optional[pygame.Surface] = None
        self.font = None
        self.clock = None
        self.running = True
        self.gen_finished = False

    def fit_to_screen(self):
        """Integer cell size that fits the whole grid with padding, centred."""
        padding = 40
        available_w = self.screen_width - padding * 2
        available_h = self.screen_height - padding * 2
        self.cell_size = max(2, min(available_w // self.maze.get_grid_width(),
                                    available_h // self.maze.get_grid_height()))
        self.wall_width = max(1, self.cell_size // 8)

        total_w = self.maze.get_grid_width() * self.cell_size
        total_h = self.maze.get_grid_height() * self.cell_size
        self.offset_x = (self.screen_width - total_w) // 2
        self.offset_y = (self.screen_height - total_h) // 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Stepper - {self.maze.get_grid_width()}x{self.maze.get_grid_height()}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()
        self.rebuild_walls()

    # --- Wall surface ---

    def rebuild_walls(self):
        """Full redraw from wall queries (after start, resize, clear, instant)."""
        w = self.maze.get_grid_width()
        h = self.maze.get_grid_height()
        self.wall_surface = pygame.Surface((w * self.cell_size + self.wall_width,
                                            h * self.cell_size + self.wall_width), pygame.SRCALPHA)
        for y in range(h):
            for x in range(w):
                if x < w - 1 and self.maze.has_vertical_wall(x, y):
                    self._draw_wall(x, y, WallType.VERTICAL, self.COLOR_WALL)
                if y < h - 1 and self.maze.has_horizontal_wall(x, y):
                    self._draw_wall(x, y, WallType.HORIZONTAL, self.COLOR_WALL)

    def apply_changes(self, changes: Iterable[WallChange]):
        for change in changes:
            if self.maze.has_wall(change.x, change.y, change.wall_type):
                self._draw_wall(change.x, change.y, change.wall_type, self.COLOR_WALL)
                continue
            # Alpha 0 punches the line back out of the wall surface, corners included
            self._draw_wall(change.x, change.y, change.wall_type, (0, 0, 0, 0))
            for corner in self._wall_corners(change.x, change.y, change.wall_type):
                for x, y, wall_type in self._walls_at_corner(*corner):
                    self._draw_wall(x, y, wall_type, self.COLOR_WALL)

    @staticmethod
    def _wall_corners(x: int, y: int, wall_type: WallType):
        """Grid-line intersections at both ends of a wall."""
        if wall_type == WallType.VERTICAL:
            return (x + 1, y), (x + 1, y + 1)
        return (x, y + 1), (x + 1, y + 1)

    def _walls_at_corner(self, cx: int, cy: int):
        """Interior walls still present that end on corner (cx, cy)."""
        w = self.maze.get_grid_width()
        h = self.maze.get_grid_height()
        for y in (cy - 1, cy):
            if 0 <= cx - 1 < w - 1 and 0 <= y < h and self.maze.has_vertical_wall(cx - 1, y):
                yield cx - 1, y, WallType.VERTICAL
        for x in (cx - 1, cx):
            if 0 <= x < w and 0 <= cy - 1 < h - 1 and self.maze.has_horizontal_wall(x, cy - 1):
                yield x, cy - 1, WallType.HORIZONTAL

    def _draw_wall(self, x: int, y: int, wall_type: WallType, color):
        cs = self.cell_size
        if wall_type == WallType.VERTICAL:
            start = ((x + 1) * cs, y * cs)
            end = ((x + 1) * cs, (y + 1) * cs)
        else:
            start = (x * cs, (y + 1) * cs)
            end = ((x + 1) * cs, (y + 1) * cs)
        pygame.draw.line(self.wall_surface, color, start, end, self.wall_width)

    # --- Controls ---

    def restart(self, algorithm: Optional[AlgorithmKind] = None):
        if algorithm is not None:
            self.algorithm = algorithm
        logger.info(f"Starting {self.algorithm.value} generation")
        self.maze.start_generation(self.algorithm)
        self.scheduler.reset()
        self.gen_finished = False
        self.rebuild_walls()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()
                self.rebuild_walls()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.scheduler.paused = not self.scheduler.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self.scheduler.speed += 5
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self.scheduler.speed -= 5
                elif event.key == pygame.K_r:
                    self.restart()
                elif event.key in KEY_ALGORITHMS:
                    self.restart(KEY_ALGORITHMS[event.key])
                elif event.key == pygame.K_i:
                    self.maze.generate_maze(self.algorithm)
                    self.gen_finished = True
                    self.rebuild_walls()
                elif event.key == pygame.K_c:
                    self.maze.clear_grid()
                    self.gen_finished = False
                    self.rebuild_walls()

    # --- Drawing ---

    def draw(self):
        self.surface.fill(self.COLOR_BG)
        cs = self.cell_size

        for priority, layer in enumerate(self.maze.get_named_layers()):
            color = self.LAYER_COLORS[priority % len(self.LAYER_COLORS)]
            for x, y in layer.cells:
                pygame.draw.rect(self.surface, color,
                                 (self.offset_x + x * cs, self.offset_y + y * cs, cs, cs))

        self.surface.blit(self.wall_surface, (self.offset_x, self.offset_y))

        # Outer border is implicit in the model, always drawn
        border = (self.offset_x, self.offset_y,
                  self.maze.get_grid_width() * cs + self.wall_width,
                  self.maze.get_grid_height() * cs + self.wall_width)
        pygame.draw.rect(self.surface, self.COLOR_WALL, border, self.wall_width)

    def draw_hud(self):
        if self.gen_finished:
            status = "Done"
        elif self.scheduler.paused:
            status = "Paused"
        elif self.maze.is_generating:
            status = "Running"
        else:
            status = "Idle"
        info = [
            f"FPS: {int(self.clock.get_fps())}",
            f"Algorithm: {self.algorithm.value}",
            f"Speed: {self.scheduler.speed}",
            f"Status: {status}",
            "REC" if self.recorder.active else "",
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_HUD)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        self.restart()
        while self.running:
            dt = self.clock.tick(ANIMATION.fps) / 1000.0
            self.handle_input()

            changes, finished = self.scheduler.tick(dt)
            self.apply_changes(changes)
            if finished:
                self.gen_finished = True
                logger.info(f"Generation finished ({self.algorithm.value})")

            self.draw()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

        self.recorder.stop()
        pygame.quit()
