from dataclasses import dataclass, field
from typing import List, Optional
from maze_visualizer.core.grid import Cell, Grid

# Frame phases
PHASE_CARVE = "carve"
PHASE_GENERATED = "generated"
PHASE_EXPLORE = "explore"
PHASE_PATH = "path"


@dataclass
class GenerationFrame:
    """One progress report from a maze generator."""
    grid: Grid
    phase: str = PHASE_CARVE
    step: int = 0
    stack_depth: int = 0


@dataclass
class SolveFrame:
    """
    One progress report from a solver.

    `explored` holds cells fully processed before this frame (the current
    cell is not in it yet); `frontier` is the open set / queue / stack.
    During path replay `current` is None and `frontier` is empty.
    `delay_ms` is the animation pause a host should insert after drawing.
    """
    grid: Grid
    explored: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    frontier: List[Cell] = field(default_factory=list)
    phase: str = PHASE_EXPLORE
    delay_ms: int = 1
