"""Data models for maze generation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Tuple

from mazebuilder.core.grid import cell_position


class Axis(Enum):
    """Orientation of a wall, named after the cell it is keyed on."""
    HORIZONTAL = "horizontal"  # wall above the cell
    VERTICAL = "vertical"  # wall left of the cell


@dataclass(frozen=True)
class Wall:
    """A removable wall between two grid-adjacent cells.
    
    Horizontal walls are keyed on the cell below them and vertical walls
    on the cell to their right, so each internal wall has exactly one Wall.
    """
    axis: Axis
    cell: int
    
    @classmethod
    def horizontal(cls, cell: int) -> 'Wall':
        """Wall between ``cell`` and the cell directly above it."""
        return cls(Axis.HORIZONTAL, cell)
    
    @classmethod
    def vertical(cls, cell: int) -> 'Wall':
        """Wall between ``cell`` and the cell directly left of it."""
        return cls(Axis.VERTICAL, cell)
    
    @classmethod
    def between(cls, a: int, b: int, width: int) -> 'Wall':
        """Wall separating two adjacent cells.
        
        Args:
            a: First cell index
            b: Second cell index
            width: Grid width
            
        Returns:
            The wall keyed on the larger of the two cells
            
        Raises:
            ValueError: If the cells do not share a wall
        """
        low, high = min(a, b), max(a, b)
        if high - low == width:
            return cls.horizontal(high)
        if high - low == 1 and high % width != 0:
            return cls.vertical(high)
        raise ValueError(f"Cells {a} and {b} are not adjacent in a grid of width {width}")
    
    @classmethod
    def from_identifier(cls, identifier: int) -> 'Wall':
        """Decode a signed wall identifier (negative means horizontal)."""
        if identifier < 0:
            return cls.horizontal(-identifier)
        return cls.vertical(identifier)
    
    @property
    def identifier(self) -> int:
        """Signed integer form: ``cell`` for vertical walls, ``-cell`` for horizontal."""
        return -self.cell if self.axis is Axis.HORIZONTAL else self.cell
    
    def cells(self, width: int) -> Tuple[int, int]:
        """The (smaller, larger) pair of cells this wall separates."""
        if self.axis is Axis.HORIZONTAL:
            return self.cell - width, self.cell
        return self.cell - 1, self.cell
    
    def is_internal(self, height: int, width: int) -> bool:
        """Check that both sides of the wall lie inside the grid."""
        if not 0 <= self.cell < height * width:
            return False
        row, col = cell_position(self.cell, width)
        if self.axis is Axis.HORIZONTAL:
            return row > 0
        return col > 0


def iter_internal_walls(height: int, width: int) -> Iterator[Wall]:
    """Yield every wall between two cells of a height x width grid."""
    for cell in range(height * width):
        row, col = cell_position(cell, width)
        if row > 0:
            yield Wall.horizontal(cell)
        if col > 0:
            yield Wall.vertical(cell)


@dataclass
class GenerationStats:
    """Statistics for a single maze generation run."""
    iterations: int = 0
    wasted_iterations: int = 0
    knockdowns: int = 0
    generation_time: float = 0.0
    
    @property
    def efficiency(self) -> float:
        """Fraction of drawn cells that produced a knockdown."""
        return self.knockdowns / self.iterations if self.iterations > 0 else 1.0


@dataclass
class Maze:
    """A generated maze: grid dimensions plus the set of knocked-down walls."""
    height: int
    width: int
    knockdowns: FrozenSet[Wall]
    stats: GenerationStats = field(default_factory=GenerationStats)
    
    @property
    def cell_count(self) -> int:
        return self.height * self.width
    
    def is_open(self, wall: Wall) -> bool:
        """Check whether a passage exists through ``wall``."""
        return wall in self.knockdowns
    
    def knockdown_identifiers(self) -> List[int]:
        """Signed identifiers of the knocked-down walls, sorted."""
        return sorted(wall.identifier for wall in self.knockdowns)
    
    def passages(self) -> List[Tuple[int, int]]:
        """Pairs of connected cells, one per knocked-down wall, sorted."""
        return sorted(wall.cells(self.width) for wall in self.knockdowns)
