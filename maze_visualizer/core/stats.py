import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List
from maze_visualizer.core.grid import Cell

ASTAR = "astar"
BFS = "bfs"
DFS = "dfs"
ALGORITHMS = (ASTAR, BFS, DFS)

ALGORITHM_NAMES = {
    ASTAR: "A* Search",
    BFS: "Breadth-First Search",
    DFS: "Depth-First Search",
}


@dataclass
class SolverStats:
    path_length: int
    explored_nodes: int
    # Milliseconds of wall-clock time spent inside the search. Time the host keeps
    # the solver suspended at a frame (drawing, animation pauses) is not counted,
    # nor is the path replay, so paced and headless runs report the same cost.
    execution_time: float
    algorithm: str
    efficiency: int

    @classmethod
    def build(cls, path_length: int, explored_nodes: int, execution_time: float, algorithm: str) -> "SolverStats":
        efficiency = 0
        if path_length > 0 and explored_nodes > 0:
            # Half-up, not banker's rounding
            efficiency = int(math.floor(path_length / explored_nodes * 100 + 0.5))
        return cls(path_length, explored_nodes, execution_time, algorithm, efficiency)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SolveResult:
    path: List[Cell]
    stats: SolverStats

    @property
    def found(self) -> bool:
        return len(self.path) > 0
