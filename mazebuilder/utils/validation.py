"""Input validation utilities."""

import os
import re
from pathlib import Path
from typing import Union

from mazebuilder.core.models import Maze
from mazebuilder.utils.logger import get_logger
from mazebuilder.utils.union_find import UnionFind

logger = get_logger(__name__)

_DECIMAL = re.compile(r"[0-9]+")


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


def validate_dimension(value: Union[int, str], name: str = "dimension") -> int:
    """Validate a maze dimension.
    
    Args:
        value: Integer or decimal string given by the user
        name: Label used in error messages
        
    Returns:
        The dimension as a positive int
        
    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError(f"Maze {name} must be a positive integer, got {value!r}")
    
    if isinstance(value, str):
        text = value.strip()
        # Plain ASCII digits only: no sign, underscores or other scripts
        if not _DECIMAL.fullmatch(text):
            raise ValidationError(f"Maze {name} must be a positive integer, got {value!r}")
        value = int(text)
    
    if not isinstance(value, int):
        raise ValidationError(f"Maze {name} must be a positive integer, got {value!r}")
    
    if value <= 0:
        raise ValidationError(f"Maze {name} must be a positive integer (0 not allowed), got {value}")
    
    return value


def validate_output_file(output_path: str) -> Path:
    """Validate that the output file can be created.
    
    Args:
        output_path: Path of the file to write
        
    Returns:
        Validated Path object
        
    Raises:
        ValidationError: If the path is empty, a directory, or has no parent directory
    """
    if not output_path:
        raise ValidationError("Output file cannot be empty")
    
    path = Path(output_path)
    
    if path.is_dir():
        raise ValidationError(f"{output_path} not writeable: it is a directory")
    
    parent = path.parent if str(path.parent) else Path(".")
    if not parent.is_dir():
        raise ValidationError(f"{output_path} not writeable: directory {parent} does not exist")
    
    if path.exists() and not os.access(path, os.W_OK):
        raise ValidationError(f"{output_path} not writeable.")
    
    return path


def validate_maze(maze: Maze) -> None:
    """Check that a maze's knockdowns form a spanning tree of its grid.
    
    Replays the knockdowns through a fresh union-find: every wall must be
    internal, no wall may join cells that are already connected, and one
    set must remain at the end.
    
    Raises:
        ValidationError: If the maze has a cycle, an outside wall or an unreachable cell
    """
    expected = maze.cell_count - 1
    if len(maze.knockdowns) != expected:
        raise ValidationError(
            f"Expected {expected} knocked-down walls, found {len(maze.knockdowns)}"
        )
    
    sets = UnionFind(maze.cell_count)
    for wall in maze.knockdowns:
        if not wall.is_internal(maze.height, maze.width):
            raise ValidationError(f"Wall {wall} lies outside the {maze.height}x{maze.width} grid")
        a, b = wall.cells(maze.width)
        if not sets.union(a, b):
            raise ValidationError(f"Wall {wall} closes a cycle between cells {a} and {b}")
    
    if sets.num_sets() != 1:
        raise ValidationError(f"Maze has {sets.num_sets()} disconnected regions")
    
    logger.debug(f"Verified {maze.height}x{maze.width} maze is a spanning tree")
