"""ASCII rendering of a maze's wall set."""

from typing import AbstractSet, List, TextIO

from mazebuilder.core.models import Maze, Wall

CORNER = "+"
HORIZONTAL_WALL = "-"
VERTICAL_WALL = "|"
GAP = " "


def render_lines(knockdowns: AbstractSet[Wall], height: int, width: int) -> List[str]:
    """Render a wall set as text lines.

    Each row yields a line of corners and top walls followed by a line of
    left walls and cell interiors. A closing fence forms the bottom border.
    The entrance (left of the first cell) and the exit (right of the last
    row) are always open whatever ``knockdowns`` contains.

    Args:
        knockdowns: Walls that have been removed
        height: Number of rows
        width: Number of columns

    Returns:
        2 * height + 1 lines without trailing newlines
    """
    lines = []
    for row in range(height):
        top = []
        middle = []
        for col in range(width):
            cell = row * width + col
            above_open = Wall.horizontal(cell) in knockdowns
            top.append(CORNER + (GAP if above_open else HORIZONTAL_WALL))

            left_open = cell == 0 or Wall.vertical(cell) in knockdowns
            middle.append((GAP if left_open else VERTICAL_WALL) + GAP)

        lines.append("".join(top) + CORNER)
        # Last row leaves its right side open as the exit
        lines.append("".join(middle) + (VERTICAL_WALL if row < height - 1 else ""))

    lines.append((CORNER + HORIZONTAL_WALL) * width + CORNER)
    return lines


def render_maze(maze: Maze) -> str:
    """Render a maze as newline-terminated text."""
    return "".join(line + "\n" for line in render_lines(maze.knockdowns, maze.height, maze.width))


def write_maze(stream: TextIO, maze: Maze) -> None:
    """Write the rendered maze to an open text stream."""
    stream.write(render_maze(maze))
