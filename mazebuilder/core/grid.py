"""Adjacency queries over a row-major height x width grid of cells."""

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Neighbors:
    """Grid neighbors of a cell; a side is None when it falls outside the grid."""
    above: Optional[int] = None
    below: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None
    
    def present(self) -> List[int]:
        """Existing neighbors in the order above, below, right, left."""
        return [n for n in (self.above, self.below, self.right, self.left) if n is not None]


def cell_index(row: int, col: int, width: int) -> int:
    """Row-major index of the cell at (row, col)."""
    return row * width + col


def cell_position(cell: int, width: int) -> Tuple[int, int]:
    """(row, col) of a row-major cell index."""
    return divmod(cell, width)


def neighbors_of(cell: int, height: int, width: int) -> Neighbors:
    """Return the in-bounds neighbors of ``cell``.
    
    Boundaries come from the cell's row and column, so the first row never
    has an ``above`` neighbor and a row's last column never wraps onto the
    next row's first column.
    
    Args:
        cell: Row-major cell index in [0, height * width)
        height: Number of rows
        width: Number of columns
        
    Returns:
        Neighbors with absent sides set to None
    """
    row, col = cell_position(cell, width)
    return Neighbors(
        above=cell - width if row > 0 else None,
        below=cell + width if row < height - 1 else None,
        left=cell - 1 if col > 0 else None,
        right=cell + 1 if col < width - 1 else None,
    )


def are_adjacent(a: int, b: int, height: int, width: int) -> bool:
    """Check whether two cells share a wall."""
    total = height * width
    if not (0 <= a < total and 0 <= b < total):
        return False
    return b in neighbors_of(a, height, width).present()
