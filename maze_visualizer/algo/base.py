from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional
from maze_visualizer.core.grid import Grid
from maze_visualizer.core.events import GenerationFrame


class Generator(ABC):
    def __init__(self, grid: Grid, seed: Optional[int] = None, speed: int = 10, snapshots: bool = True):
        if speed < 1:
            raise ValueError(f"Generation speed must be a positive integer, got {speed}")
        grid.validate()
        self.grid = grid
        self.seed = seed
        self.speed = speed
        self.snapshots = snapshots
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[GenerationFrame]:
        """
        Yields a GenerationFrame every `speed` steps and once after completion.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def frame_grid(self) -> Grid:
        return self.grid.snapshot() if self.snapshots else self.grid

    def run_all(self, on_update: Optional[Callable[[Grid], None]] = None) -> Grid:
        """Helper to run the generator to completion."""
        for frame in self.run():
            if on_update:
                on_update(frame.grid)
        return self.grid
