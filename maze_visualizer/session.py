import logging
from typing import Iterator, List, Optional, Union
from maze_visualizer.core.grid import Cell, Coord, Grid, create_empty_grid
from maze_visualizer.core.events import GenerationFrame, SolveFrame
from maze_visualizer.core.stats import ASTAR, SolverStats
from maze_visualizer.algo.dfs import RecursiveBacktracker
from maze_visualizer.algo.solvers import MazeSolver

logger = logging.getLogger(__name__)

Frame = Union[GenerationFrame, SolveFrame]


class MazeSession:
    """
    Holds the UI-visible state of one generate -> solve -> reset cycle and
    sequences the algorithms one frame at a time.

    Hosts either call generate()/solve() to run to completion, or
    begin_generation()/begin_solve() followed by advance() on a timer.
    Requests made while an incompatible operation is active are silently
    dropped and return False.
    """

    def __init__(self, width: int = 25, height: int = 25, seed: Optional[int] = None):
        self.seed = seed
        self.grid: Grid = create_empty_grid(width, height)
        self.width = width
        self.height = height
        self.start: Coord = (0, 0)
        self.end: Coord = (width - 1, height - 1)

        self.is_generating = False
        self.is_solving = False
        self.is_generated = False
        self.is_solved = False

        self.current_path: List[Cell] = []
        self.explored_cells: List[Cell] = []
        self.currently_exploring: Optional[Cell] = None
        self.queued_cells: List[Cell] = []
        self.stats: Optional[SolverStats] = None

        self._frames: Optional[Iterator[Frame]] = None
        self._solver: Optional[MazeSolver] = None

    @property
    def busy(self) -> bool:
        return self.is_generating or self.is_solving

    def _clear_search_view(self):
        self.current_path = []
        self.explored_cells = []
        self.currently_exploring = None
        self.queued_cells = []

    # -------------------- generation --------------------

    def begin_generation(self, width: int, height: int, speed: int = 10) -> bool:
        if self.is_generating:
            logger.debug("Generation already running, request dropped")
            return False

        # Validates before any session state changes
        grid = create_empty_grid(width, height)
        # The host reads self.grid between advance() calls, so frames hand out the live grid
        generator = RecursiveBacktracker(grid, seed=self.seed, speed=speed, snapshots=False)

        self.grid = grid
        self.width = width
        self.height = height
        self.start = (0, 0)
        self.end = (width - 1, height - 1)
        self.is_generating = True
        self.is_solving = False
        self.is_generated = False
        self.is_solved = False
        self._clear_search_view()
        self.stats = None
        self._solver = None
        self._frames = generator.run()

        logger.info(f"Generating {width}x{height} maze (speed={speed})")
        return True

    def generate(self, width: int, height: int, speed: int = 10) -> bool:
        if not self.begin_generation(width, height, speed):
            return False
        while self.advance() is not None:
            pass
        return True

    # -------------------- solving --------------------

    def begin_solve(self, algorithm: str = ASTAR, speed: int = 50,
                    start: Optional[Coord] = None, end: Optional[Coord] = None) -> bool:
        """
        Starts a solve between `start` and `end` (the current roles when omitted)
        and moves the start/end markers there.
        """
        if self.is_solving or not self.is_generated or self.is_solved or self.is_generating:
            logger.debug("Solve not possible right now, request dropped")
            return False

        start = start if start is not None else self.start
        end = end if end is not None else self.end

        # Bad tags, speeds or coordinates raise here, before any state changes
        solver = MazeSolver(self.grid, algorithm, speed, seed=self.seed, snapshots=False)
        frames = solver.run(start, end)

        self.grid.set_roles(start, end)
        self.start = start
        self.end = end
        self.is_solving = True
        self.is_solved = False
        self._clear_search_view()
        self._solver = solver
        self._frames = frames

        logger.info(f"Solving with {algorithm} (speed={speed})")
        return True

    def solve(self, algorithm: str = ASTAR, speed: int = 50,
              start: Optional[Coord] = None, end: Optional[Coord] = None) -> bool:
        if not self.begin_solve(algorithm, speed, start, end):
            return False
        while self.advance() is not None:
            pass
        return True

    # -------------------- stepping --------------------

    def advance(self) -> Optional[Frame]:
        """
        Pulls one frame from the active operation and mirrors it into the
        session state. Returns None when idle or when the operation finished.
        """
        if self._frames is None:
            return None

        try:
            frame = next(self._frames)
        except StopIteration:
            self._finish()
            return None
        except Exception:
            logger.exception("Maze operation failed")
            self._abort()
            raise

        if isinstance(frame, SolveFrame):
            self.explored_cells = frame.explored
            self.currently_exploring = frame.current
            self.queued_cells = frame.frontier
        return frame

    def _finish(self):
        self._frames = None
        if self.is_generating:
            self.is_generating = False
            self.is_generated = True
            logger.info("Generation complete")
        elif self.is_solving:
            solver = self._solver
            self.current_path = solver.path
            self.stats = solver.stats
            self.currently_exploring = None
            self.queued_cells = []
            self.is_solving = False
            self.is_solved = True
            self._solver = None

    def _abort(self):
        self._frames = None
        self._solver = None
        self.is_generating = False
        self.is_solving = False
        self.currently_exploring = None
        self.queued_cells = []

    def cancel(self):
        """Stops advancing the active operation and discards its result."""
        if self.busy:
            logger.info("Operation cancelled")
        self._abort()

    # -------------------- reset --------------------

    def reset(self) -> bool:
        if self.busy:
            logger.debug("Reset while busy, request dropped")
            return False
        self.grid.reset_search_state()
        self.is_solved = False
        self._clear_search_view()
        self.stats = None
        return True
