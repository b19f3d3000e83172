import math
from typing import Iterator, List, Optional, Tuple

Coord = Tuple[int, int]


class Walls:
    __slots__ = ('top', 'right', 'bottom', 'left')

    # Direction Helpers
    DIRECTIONS = ('top', 'right', 'bottom', 'left')
    DX = {'top': 0, 'right': 1, 'bottom': 0, 'left': -1}
    DY = {'top': -1, 'right': 0, 'bottom': 1, 'left': 0}
    OPPOSITE = {'top': 'bottom', 'bottom': 'top', 'right': 'left', 'left': 'right'}

    def __init__(self, top=True, right=True, bottom=True, left=True):
        self.top = top
        self.right = right
        self.bottom = bottom
        self.left = left

    def copy(self) -> "Walls":
        return Walls(self.top, self.right, self.bottom, self.left)

    def count(self) -> int:
        return sum(1 for d in self.DIRECTIONS if getattr(self, d))

    def __eq__(self, other):
        if not isinstance(other, Walls):
            return NotImplemented
        return all(getattr(self, d) == getattr(other, d) for d in self.DIRECTIONS)

    def __repr__(self):
        return "Walls(" + ", ".join(f"{d}={getattr(self, d)}" for d in self.DIRECTIONS) + ")"


class Cell:
    __slots__ = ('x', 'y', 'walls', 'visited', 'is_start', 'is_end',
                 'distance', 'heuristic', 'parent',
                 'is_explored', 'is_currently_exploring', 'is_in_queue', 'is_path',
                 'exploration_order')

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.walls = Walls()
        self.visited = False
        self.is_start = False
        self.is_end = False
        self.reset_search_state()

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    def reset_search_state(self):
        """Restores every field a solve writes to its initial value."""
        self.distance = math.inf
        self.heuristic = 0
        # Non-owning back-reference: (x, y) of the predecessor, resolved via the grid
        self.parent: Optional[Coord] = None
        self.is_explored = False
        self.is_currently_exploring = False
        self.is_in_queue = False
        self.is_path = False
        self.exploration_order: Optional[int] = None

    def copy(self) -> "Cell":
        clone = Cell.__new__(Cell)
        for name in Cell.__slots__:
            setattr(clone, name, getattr(self, name))
        clone.walls = self.walls.copy()
        return clone

    def __repr__(self):
        return f"Cell({self.x}, {self.y})"


class Grid:
    """
    Row-major 2-D array of Cells, indexed grid[y][x].
    Shared (and mutated in place) by the generator and the solvers.
    """

    __slots__ = ('width', 'height', 'rows')

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # All walls present by default
        self.rows: List[List[Cell]] = [[Cell(x, y) for x in range(width)] for y in range(height)]

    def __getitem__(self, y: int) -> List[Cell]:
        return self.rows[y]

    def __iter__(self) -> Iterator[List[Cell]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Cell:
        if self.in_bounds(x, y):
            return self.rows[y][x]
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def cells(self) -> Iterator[Cell]:
        for row in self.rows:
            yield from row

    def get_neighbors(self, cell: Cell) -> List[Cell]:
        """
        Returns the in-bounds grid neighbours in fixed order: top, right, bottom, left.
        Does NOT check walls (that's for pathfinding).
        """
        x, y = cell.x, cell.y
        neighbors = []
        if y > 0:
            neighbors.append(self.rows[y - 1][x])
        if x < self.width - 1:
            neighbors.append(self.rows[y][x + 1])
        if y < self.height - 1:
            neighbors.append(self.rows[y + 1][x])
        if x > 0:
            neighbors.append(self.rows[y][x - 1])
        return neighbors

    def get_open_neighbors(self, cell: Cell) -> List[Cell]:
        return [n for n in self.get_neighbors(cell) if can_move_between(cell, n)]

    def validate(self):
        """Raises ValueError unless every row is full width and every cell sits at its own (x, y)."""
        if len(self.rows) != self.height or self.height < 1 or self.width < 1:
            raise ValueError(f"Malformed grid: expected {self.height} rows of {self.width} cells")
        for y, row in enumerate(self.rows):
            if len(row) != self.width:
                raise ValueError(f"Malformed grid: row {y} has {len(row)} cells, expected {self.width}")
            for x, cell in enumerate(row):
                if cell.x != x or cell.y != y:
                    raise ValueError(f"Malformed grid: cell at ({x}, {y}) reports ({cell.x}, {cell.y})")

    def reset_search_state(self):
        for cell in self.cells():
            cell.reset_search_state()

    def set_roles(self, start: Coord, end: Coord):
        """Moves the start/end markers; raises IndexError before touching anything."""
        start_cell = self.get_cell(*start)
        end_cell = self.get_cell(*end)
        for cell in self.cells():
            cell.is_start = cell is start_cell
            cell.is_end = cell is end_cell

    def snapshot(self) -> "Grid":
        """Independent copy, safe to read while the original keeps mutating."""
        clone = Grid.__new__(Grid)
        clone.width = self.width
        clone.height = self.height
        clone.rows = [[cell.copy() for cell in row] for row in self.rows]
        return clone

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"


def direction_between(a: Cell, b: Cell) -> Optional[str]:
    """Side of `a` that faces `b`, or None when the cells are not axis-adjacent."""
    dx = b.x - a.x
    dy = b.y - a.y
    if dx == 1 and dy == 0:
        return 'right'
    if dx == -1 and dy == 0:
        return 'left'
    if dy == 1 and dx == 0:
        return 'bottom'
    if dy == -1 and dx == 0:
        return 'top'
    return None


def create_empty_grid(width: int, height: int) -> Grid:
    return Grid(width, height)


def get_neighbors(cell: Cell, grid: Grid) -> List[Cell]:
    return grid.get_neighbors(cell)


def remove_wall_between(a: Cell, b: Cell):
    """
    Removes the wall between two adjacent cells.
    Also removes the OPPOSITE wall from the neighbour.
    """
    side = direction_between(a, b)
    if side is None:
        return  # Cannot carve between non-adjacent cells
    setattr(a.walls, side, False)
    setattr(b.walls, Walls.OPPOSITE[side], False)


def can_move_between(a: Cell, b: Cell) -> bool:
    side = direction_between(a, b)
    if side is None:
        return False
    return not getattr(a.walls, side)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)
