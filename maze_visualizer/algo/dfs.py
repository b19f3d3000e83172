import logging
import random
from typing import Callable, Iterator, List, Optional
from maze_visualizer.core.grid import Cell, Grid, create_empty_grid, remove_wall_between
from maze_visualizer.core.events import GenerationFrame, PHASE_CARVE, PHASE_GENERATED
from maze_visualizer.algo.base import Generator

logger = logging.getLogger(__name__)


class RecursiveBacktracker(Generator):
    def run(self) -> Iterator[GenerationFrame]:
        rng = random.Random(self.seed)
        grid = self.grid
        logger.debug(f"Carving {grid.width}x{grid.height} maze (seed={self.seed}, speed={self.speed})")

        # Start at (0,0)
        start = grid[0][0]
        start.visited = True

        stack: List[Cell] = [start]

        while stack:
            current = stack[-1]

            # Find unvisited neighbors
            neighbors = [n for n in grid.get_neighbors(current) if not n.visited]

            if neighbors:
                # Choose random neighbor
                neighbor = rng.choice(neighbors)

                remove_wall_between(current, neighbor)
                neighbor.visited = True
                stack.append(neighbor)
            else:
                # Backtrack
                stack.pop()

            self.step_count += 1
            if self.step_count % self.speed == 0:
                yield GenerationFrame(self.frame_grid(), PHASE_CARVE, self.step_count, len(stack))

        grid[0][0].is_start = True
        grid[grid.height - 1][grid.width - 1].is_end = True

        logger.debug(f"Carved maze in {self.step_count} steps")
        yield GenerationFrame(self.frame_grid(), PHASE_GENERATED, self.step_count, 0)


def generate_maze(width: int, height: int, on_update: Optional[Callable[[Grid], None]] = None,
                  speed: int = 10, seed: Optional[int] = None) -> Grid:
    """
    Builds an all-walled grid and carves a perfect maze into it.
    Snapshots are only taken when someone is listening.
    """
    grid = create_empty_grid(width, height)
    generator = RecursiveBacktracker(grid, seed=seed, speed=speed, snapshots=on_update is not None)
    return generator.run_all(on_update)
