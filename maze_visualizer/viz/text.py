from typing import List
from maze_visualizer.core.grid import Cell, Grid


def cell_glyph(cell: Cell) -> str:
    # Same priority order the viewer uses for colours
    if cell.is_start:
        return "S"
    if cell.is_end:
        return "E"
    if cell.is_path:
        return "*"
    if cell.is_currently_exploring:
        return "@"
    if cell.is_explored:
        return "."
    if cell.is_in_queue:
        return "o"
    return " "


def render_text(grid: Grid) -> str:
    """
    Renders the maze as ASCII, one text row for each cell row plus one for
    the walls below it:

        +---+---+
        | S     |
        +---+   +
        |     E |
        +---+---+
    """
    lines: List[str] = []

    top = "+"
    for cell in grid[0]:
        top += ("---" if cell.walls.top else "   ") + "+"
    lines.append(top)

    for row in grid:
        body = "|" if row[0].walls.left else " "
        below = "+"
        for cell in row:
            body += f" {cell_glyph(cell)} "
            body += "|" if cell.walls.right else " "
            below += ("---" if cell.walls.bottom else "   ") + "+"
        lines.append(body)
        lines.append(below)

    return "\n".join(lines)
