import logging
import random
import time
from functools import partial
from typing import Callable, Iterator, List, Optional
from maze_visualizer.core.grid import Cell, Coord, Grid, can_move_between, direction_between
from maze_visualizer.core.errors import MazeContractError
from maze_visualizer.core.events import SolveFrame, PHASE_EXPLORE, PHASE_PATH
from maze_visualizer.core.stats import ASTAR, BFS, DFS, SolverStats, SolveResult
from maze_visualizer.algo.frontiers import FRONTIERS

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Grid, List[Cell], Optional[Cell], List[Cell]], None]


def exploration_delay(speed: int) -> int:
    """Milliseconds between exploration frames; higher speed = shorter pause."""
    return max(1, 101 - speed)


def replay_delay(speed: int) -> int:
    return max(1, 51 - speed)


def reconstruct_path(grid: Grid, start: Cell, end: Cell) -> List[Cell]:
    """Follows parent coordinates from end back to start and returns start..end."""
    path = [end]
    cell = end
    while cell is not start:
        if cell.parent is None:
            raise MazeContractError(f"{cell} has no parent but is not the start cell")
        if not grid.in_bounds(*cell.parent):
            raise MazeContractError(f"{cell} points at out-of-bounds parent {cell.parent}")
        parent = grid[cell.parent[1]][cell.parent[0]]
        if direction_between(cell, parent) is None:
            raise MazeContractError(f"{cell} points at non-adjacent parent {parent}")
        path.append(parent)
        if len(path) > grid.width * grid.height:
            raise MazeContractError("Parent chain loops back on itself")
        cell = parent
    path.reverse()
    return path


class MazeSolver:
    """
    One control loop for every search strategy. The frontier variant picked by
    `algorithm` supplies the open structure, pick order and relaxation rule.

    run() validates its inputs eagerly and returns an iterator of SolveFrames;
    each frame is a suspension point where a host can draw and pause.
    After the iterator is exhausted, `path` and `stats` hold the result.
    """

    def __init__(self, grid: Grid, algorithm: str = ASTAR, speed: int = 50,
                 seed: Optional[int] = None, snapshots: bool = True):
        if algorithm not in FRONTIERS:
            raise ValueError(f"Unknown algorithm '{algorithm}', expected one of {sorted(FRONTIERS)}")
        if speed < 1:
            raise ValueError(f"Solving speed must be a positive integer, got {speed}")
        grid.validate()
        self.grid = grid
        self.algorithm = algorithm
        self.speed = speed
        self.seed = seed
        self.snapshots = snapshots
        self.path: List[Cell] = []
        self.stats: Optional[SolverStats] = None

    def run(self, start: Coord, end: Coord) -> Iterator[SolveFrame]:
        # Out-of-bounds coordinates raise IndexError before the grid is touched
        start_cell = self.grid.get_cell(*start)
        end_cell = self.grid.get_cell(*end)
        return self._search(start_cell, end_cell)

    def _frame(self, explored: List[Cell], current: Optional[Cell], frontier: List[Cell],
               phase: str, delay_ms: int) -> SolveFrame:
        if not self.snapshots:
            return SolveFrame(self.grid, list(explored), current, list(frontier), phase, delay_ms)

        snap = self.grid.snapshot()
        return SolveFrame(
            snap,
            [snap[c.y][c.x] for c in explored],
            snap[current.y][current.x] if current is not None else None,
            [snap[c.y][c.x] for c in frontier],
            phase,
            delay_ms,
        )

    def _search(self, start: Cell, end: Cell) -> Iterator[SolveFrame]:
        grid = self.grid
        grid.reset_search_state()
        self.path = []
        self.stats = None

        logger.debug(f"Solving {grid.width}x{grid.height} with {self.algorithm} "
                     f"from {start.coord} to {end.coord}")

        frontier = FRONTIERS[self.algorithm](end, random.Random(self.seed))
        explored: List[Cell] = []
        order = 0

        # Only time spent inside the algorithm counts, not time suspended at a yield
        elapsed = 0.0
        resumed = time.perf_counter()

        frontier.start(start)

        while len(frontier):
            current = frontier.pop()
            current.is_in_queue = False
            current.is_currently_exploring = True
            current.exploration_order = order
            order += 1

            queued = frontier.cells()
            for cell in queued:
                cell.is_in_queue = True

            elapsed += time.perf_counter() - resumed
            yield self._frame(explored, current, queued, PHASE_EXPLORE, exploration_delay(self.speed))
            resumed = time.perf_counter()

            if current is end:
                current.is_currently_exploring = False
                for cell in queued:
                    cell.is_in_queue = False
                    cell.is_currently_exploring = False

                self.path = reconstruct_path(grid, start, end)
                elapsed += time.perf_counter() - resumed
                # The end cell was popped and processed too
                self.stats = SolverStats.build(len(self.path), len(explored) + 1, elapsed * 1000.0, self.algorithm)
                logger.info(f"{self.algorithm}: path length {self.stats.path_length}, "
                            f"explored {self.stats.explored_nodes}, efficiency {self.stats.efficiency}%")

                for cell in self.path:
                    cell.is_path = True
                    yield self._frame(explored, None, [], PHASE_PATH, replay_delay(self.speed))
                return

            current.is_explored = True
            current.is_currently_exploring = False
            explored.append(current)
            frontier.close(current)

            for neighbor in frontier.order(grid.get_neighbors(current)):
                if not can_move_between(current, neighbor):
                    continue
                frontier.relax(current, neighbor)

        elapsed += time.perf_counter() - resumed
        self.stats = SolverStats.build(0, len(explored), elapsed * 1000.0, self.algorithm)
        logger.info(f"{self.algorithm}: no path after exploring {len(explored)} cells")

    def run_all(self, start: Coord, end: Coord,
                on_progress: Optional[ProgressCallback] = None,
                sleep: Optional[Callable[[float], None]] = None) -> SolveResult:
        """Drives run() to completion, forwarding every frame to on_progress."""
        for frame in self.run(start, end):
            if on_progress:
                on_progress(frame.grid, frame.explored, frame.current, frame.frontier)
            if sleep:
                sleep(frame.delay_ms / 1000.0)
        return SolveResult(self.path, self.stats)


def solve(grid: Grid, start: Coord, end: Coord,
          on_progress: Optional[ProgressCallback] = None, speed: int = 50,
          algorithm: str = ASTAR, seed: Optional[int] = None,
          sleep: Optional[Callable[[float], None]] = None) -> SolveResult:
    """
    Solves `grid` from `start` to `end` with the named algorithm.

    Snapshots are only taken when someone is listening. Pass `sleep=time.sleep`
    to pace the frames in real time; headless callers leave it unset.
    """
    solver = MazeSolver(grid, algorithm, speed, seed, snapshots=on_progress is not None)
    return solver.run_all(start, end, on_progress, sleep)


solve_astar = partial(solve, algorithm=ASTAR)
solve_bfs = partial(solve, algorithm=BFS)
solve_dfs = partial(solve, algorithm=DFS)
