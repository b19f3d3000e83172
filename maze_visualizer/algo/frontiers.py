"""
Frontier variants for the shared solver loop.

Each frontier owns its open structure and its visited guard, and decides how
a wall-free neighbour is relaxed into it. The loop in solvers.py only ever
talks to: start(), pop(), close(), order(), relax(), cells() and len().
"""
import random
from collections import deque
from typing import Deque, List, Optional, Set
from maze_visualizer.core.grid import Cell, manhattan
from maze_visualizer.core.stats import ASTAR, BFS, DFS


class PriorityFrontier:
    """A*: open list ordered by distance + heuristic, closed set of finished cells."""

    def __init__(self, end: Cell, rng: Optional[random.Random] = None):
        self.end = end
        self.open: List[Cell] = []
        self.open_members: Set[Cell] = set()
        self.closed: Set[Cell] = set()

    def start(self, cell: Cell):
        cell.distance = 0
        cell.heuristic = manhattan(cell, self.end)
        self._push(cell)

    def _push(self, cell: Cell):
        self.open.append(cell)
        self.open_members.add(cell)
        cell.is_in_queue = True

    def pop(self) -> Cell:
        # Stable sort: equal f-scores keep insertion order
        self.open.sort(key=lambda c: c.distance + c.heuristic)
        cell = self.open.pop(0)
        self.open_members.discard(cell)
        return cell

    def close(self, cell: Cell):
        self.closed.add(cell)

    def order(self, neighbors: List[Cell]) -> List[Cell]:
        return neighbors

    def relax(self, current: Cell, neighbor: Cell):
        if neighbor in self.closed:
            return

        tentative = current.distance + 1
        if neighbor not in self.open_members:
            self._push(neighbor)
        elif tentative >= neighbor.distance:
            return

        neighbor.parent = current.coord
        neighbor.distance = tentative
        neighbor.heuristic = manhattan(neighbor, self.end)

    def cells(self) -> List[Cell]:
        return list(self.open)

    def __len__(self):
        return len(self.open)


class QueueFrontier:
    """BFS: strict FIFO, cells marked seen when enqueued."""

    def __init__(self, end: Cell, rng: Optional[random.Random] = None):
        self.end = end
        self.queue: Deque[Cell] = deque()
        self.seen: Set[Cell] = set()

    def start(self, cell: Cell):
        cell.distance = 0
        self._push(cell)

    def _push(self, cell: Cell):
        self.queue.append(cell)
        self.seen.add(cell)
        cell.is_in_queue = True

    def pop(self) -> Cell:
        return self.queue.popleft()

    def close(self, cell: Cell):
        pass

    def order(self, neighbors: List[Cell]) -> List[Cell]:
        return neighbors

    def relax(self, current: Cell, neighbor: Cell):
        if neighbor in self.seen:
            return
        neighbor.parent = current.coord
        neighbor.distance = current.distance + 1
        self._push(neighbor)

    def cells(self) -> List[Cell]:
        return list(self.queue)

    def __len__(self):
        return len(self.queue)


class StackFrontier(QueueFrontier):
    """DFS: LIFO stack with neighbours shuffled before they are pushed."""

    def __init__(self, end: Cell, rng: Optional[random.Random] = None):
        super().__init__(end, rng)
        self.rng = rng or random.Random()

    def pop(self) -> Cell:
        return self.queue.pop()

    def order(self, neighbors: List[Cell]) -> List[Cell]:
        shuffled = list(neighbors)
        self.rng.shuffle(shuffled)
        return shuffled


FRONTIERS = {
    ASTAR: PriorityFrontier,
    BFS: QueueFrontier,
    DFS: StackFrontier,
}
