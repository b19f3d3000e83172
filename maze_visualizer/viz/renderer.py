import logging
import pygame
from maze_visualizer.config import (
    MazeConfig, MIN_SIZE, MAX_SIZE,
    MIN_GENERATION_SPEED, MAX_GENERATION_SPEED, MIN_SOLVING_SPEED, MAX_SOLVING_SPEED,
)
from maze_visualizer.core.events import SolveFrame
from maze_visualizer.core.grid import Cell
from maze_visualizer.core.stats import ALGORITHM_NAMES, ASTAR, BFS, DFS
from maze_visualizer.session import MazeSession
from maze_visualizer.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (243, 244, 246)
    COLOR_WALL = (31, 41, 55)
    COLOR_CELL = (255, 255, 255)
    COLOR_START = (16, 185, 129)     # Emerald
    COLOR_END = (239, 68, 68)        # Red
    COLOR_PATH = (96, 165, 250)      # Blue
    COLOR_CURRENT = (251, 146, 60)   # Orange
    COLOR_EXPLORED = (254, 240, 138) # Yellow
    COLOR_QUEUED = (233, 213, 255)   # Purple tint
    COLOR_QUEUED_DOT = (147, 51, 234)
    COLOR_TEXT = (17, 24, 39)

    HUD_WIDTH = 300
    KEY_ALGORITHMS = {pygame.K_1: ASTAR, pygame.K_2: BFS, pygame.K_3: DFS}

    def __init__(self, session: MazeSession, config: MazeConfig):
        self.session = session
        self.config = config
        self.screen_width = config.window_width
        self.screen_height = config.window_height

        # Pending dimensions for the next generation
        self.width = config.width
        self.height = config.height

        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.recorder = VideoRecorder(active=config.record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.next_step_at = 0

    def fit_to_screen(self):
        """Auto-adjust cell size and offset to fit the grid left of the HUD with padding."""
        padding = 40
        available_w = self.screen_width - self.HUD_WIDTH - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        grid = self.session.grid
        self.cell_size = max(1.0, min(available_w / grid.width, available_h / grid.height))

        total_maze_w = grid.width * self.cell_size
        total_maze_h = grid.height * self.cell_size
        self.offset_x = (self.screen_width - self.HUD_WIDTH - total_maze_w) / 2
        self.offset_y = (self.screen_height - total_maze_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption("Maze Visualizer")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    # -------------------- controls --------------------

    def request_generation(self):
        if self.session.begin_generation(self.width, self.height, self.config.generation_speed):
            self.fit_to_screen()
            self.next_step_at = pygame.time.get_ticks()

    def endpoints(self):
        """Configured start/end, or the corners when they fall outside the current maze."""
        if self.config.start_point is None and self.config.end_point is None:
            return None, None
        grid = self.session.grid
        corners = ((0, 0), (grid.width - 1, grid.height - 1))
        start = self.config.start_point or corners[0]
        end = self.config.end_point or corners[1]
        if grid.in_bounds(*start) and grid.in_bounds(*end):
            return start, end
        return corners

    def request_solve(self):
        start, end = self.endpoints()
        if self.session.begin_solve(self.config.algorithm, self.config.solving_speed, start, end):
            self.next_step_at = pygame.time.get_ticks()

    def handle_key(self, key):
        cfg = self.config
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_g and not self.session.busy:
            self.request_generation()
        elif key == pygame.K_s:
            self.request_solve()
        elif key == pygame.K_r:
            self.session.reset()
        elif key in self.KEY_ALGORITHMS and not self.session.is_solving:
            cfg.algorithm = self.KEY_ALGORITHMS[key]
            logger.debug(f"Algorithm set to {cfg.algorithm}")
        elif key == pygame.K_RIGHT:
            self.width = min(MAX_SIZE, self.width + 1)
        elif key == pygame.K_LEFT:
            self.width = max(MIN_SIZE, self.width - 1)
        elif key == pygame.K_DOWN:
            self.height = min(MAX_SIZE, self.height + 1)
        elif key == pygame.K_UP:
            self.height = max(MIN_SIZE, self.height - 1)
        elif key == pygame.K_RIGHTBRACKET:
            cfg.generation_speed = min(MAX_GENERATION_SPEED, cfg.generation_speed + 1)
        elif key == pygame.K_LEFTBRACKET:
            cfg.generation_speed = max(MIN_GENERATION_SPEED, cfg.generation_speed - 1)
        elif key == pygame.K_EQUALS:
            cfg.solving_speed = min(MAX_SOLVING_SPEED, cfg.solving_speed + 5)
        elif key == pygame.K_MINUS:
            cfg.solving_speed = max(MIN_SOLVING_SPEED, cfg.solving_speed - 5)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    # -------------------- stepping --------------------

    def step_session(self):
        if not self.session.busy:
            return

        if self.session.is_generating:
            # One generation frame per display frame; `speed` sets steps per frame
            self.session.advance()
            return

        # Solve frames carry their own pause; catch up if the display lagged
        now = pygame.time.get_ticks()
        max_steps = 64
        while self.session.is_solving and now >= self.next_step_at and max_steps > 0:
            frame = self.session.advance()
            if frame is None:
                break
            if isinstance(frame, SolveFrame):
                self.next_step_at += frame.delay_ms
            max_steps -= 1

    # -------------------- drawing --------------------

    def cell_color(self, cell: Cell):
        if cell.is_start:
            return self.COLOR_START
        if cell.is_end:
            return self.COLOR_END
        if cell.is_path:
            return self.COLOR_PATH
        if cell.is_currently_exploring:
            return self.COLOR_CURRENT
        if cell.is_explored:
            return self.COLOR_EXPLORED
        if cell.is_in_queue:
            return self.COLOR_QUEUED
        return self.COLOR_CELL

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        grid = self.session.grid
        size = int(self.cell_size) + 1
        wall_width = 2 if self.cell_size > 12 else 1

        # 1. Cell backgrounds
        for row in grid:
            for cell in row:
                px = int(cell.x * self.cell_size + self.offset_x)
                py = int(cell.y * self.cell_size + self.offset_y)
                pygame.draw.rect(self.surface, self.cell_color(cell), (px, py, size, size))

                if cell.is_in_queue and self.cell_size > 12:
                    center = (px + size // 2, py + size // 2)
                    pygame.draw.circle(self.surface, self.COLOR_QUEUED_DOT, center, 2)

        # 2. Walls
        for row in grid:
            for cell in row:
                px = int(cell.x * self.cell_size + self.offset_x)
                py = int(cell.y * self.cell_size + self.offset_y)
                walls = cell.walls
                if walls.top:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), wall_width)
                if walls.right:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), wall_width)
                if walls.bottom:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), wall_width)
                if walls.left:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), wall_width)

    def status_text(self) -> str:
        s = self.session
        if s.is_generating:
            return "Generating..."
        if s.is_solving:
            return "Solving..."
        if s.is_solved:
            return "Solved" if s.current_path else "No solution"
        if s.is_generated:
            return "Ready"
        return "Idle"

    def draw_hud(self):
        cfg = self.config
        s = self.session
        info = [
            f"Status: {self.status_text()}",
            f"Next size: {self.width}x{self.height}",
            f"Algorithm: {ALGORITHM_NAMES[cfg.algorithm]}",
            f"Generation speed: {cfg.generation_speed}",
            f"Solving speed: {cfg.solving_speed}",
            f"Explored: {len(s.explored_cells)}  Queued: {len(s.queued_cells)}",
            "",
        ]
        if s.stats:
            info += [
                f"Path length: {s.stats.path_length}",
                f"Explored nodes: {s.stats.explored_nodes}",
                f"Time: {s.stats.execution_time:.2f}ms",
                f"Efficiency: {s.stats.efficiency}%",
                "",
            ]
        info += [
            "G generate  S solve  R reset",
            "1 A*  2 BFS  3 DFS",
            "Arrows: size  [ ]: gen speed",
            "- =: solve speed  Esc: quit",
        ]
        if self.recorder.active:
            info.append("REC")

        x = self.screen_width - self.HUD_WIDTH + 10
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (x, 20 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.step_session()

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(self.config.fps)

        logger.info("Viewer closed")
        self.session.cancel()
        self.recorder.stop()
        pygame.quit()
