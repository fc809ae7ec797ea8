"""Maze generation by random unions of initially disjoint cells."""

import random
import time
from typing import Callable, List, Optional, Set

from mazebuilder.core.grid import neighbors_of
from mazebuilder.core.models import GenerationStats, Maze, Wall
from mazebuilder.utils.config import MazeConfig
from mazebuilder.utils.logger import get_logger, log_context, performance_timer
from mazebuilder.utils.union_find import DisjointSets, UnionFind

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]
SetsFactory = Callable[[int], DisjointSets]


def path_exists(a: int, b: int, sets: DisjointSets) -> bool:
    """Check whether cells ``a`` and ``b`` are already connected."""
    return sets.find(a) == sets.find(b)


class MazeGenerator:
    """Generates perfect mazes: every cell reachable, no cycles.

    Each cell starts as its own set. A random cell is drawn, one of its
    neighbors from a different set is picked at random, the wall between
    them is knocked down and the two sets are merged. Generation stops once
    a single set remains. A wall is only removed between cells that were
    not yet connected, so no cycle can form.
    """

    def __init__(self, config: Optional[MazeConfig] = None,
                 rng: Optional[random.Random] = None,
                 sets_factory: SetsFactory = UnionFind) -> None:
        self.config = config or MazeConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.sets_factory = sets_factory

    def disjoint_neighbors(self, cell: int, height: int, width: int,
                           sets: DisjointSets) -> List[int]:
        """Neighbors of ``cell`` that are not yet reachable from it.

        Args:
            cell: Cell index
            height: Grid height
            width: Grid width
            sets: Current connectivity of the grid

        Returns:
            Neighbor cells in a different set, ordered above, below, right, left
        """
        return [
            neighbor for neighbor in neighbors_of(cell, height, width).present()
            if not path_exists(cell, neighbor, sets)
        ]

    @performance_timer()
    def generate(self, height: int, width: int,
                 progress_callback: Optional[ProgressCallback] = None) -> Maze:
        """Generate a maze of the given size.

        Args:
            height: Number of rows, at least 1
            width: Number of columns, at least 1
            progress_callback: Called as ``(knocked_down, total_needed)`` after each knockdown

        Returns:
            Maze whose knockdowns form a spanning tree of the grid
        """
        cell_count = height * width
        needed = cell_count - 1
        sets = self.sets_factory(cell_count)
        if sets.count != cell_count or sets.num_sets() != cell_count:
            raise ValueError(f"Disjoint sets must start as {cell_count} singletons")
        knockdowns: Set[Wall] = set()
        stats = GenerationStats()
        start_time = time.perf_counter()

        with log_context(height=height, width=width, seed=self.config.seed):
            logger.debug(f"Generating {height}x{width} maze ({needed} walls to knock down)")

            while sets.num_sets() > 1:
                cell = self.rng.randrange(cell_count)
                stats.iterations += 1

                candidates = self.disjoint_neighbors(cell, height, width, sets)
                if not candidates:
                    stats.wasted_iterations += 1
                    continue

                target = self.rng.choice(candidates)
                knockdowns.add(Wall.between(cell, target, width))
                sets.union(cell, target)
                stats.knockdowns += 1

                if progress_callback:
                    progress_callback(stats.knockdowns, needed)

            stats.generation_time = time.perf_counter() - start_time
            logger.info(
                f"Generated {height}x{width} maze: {stats.knockdowns} knockdowns in "
                f"{stats.iterations} iterations ({stats.wasted_iterations} wasted, "
                f"{stats.generation_time:.3f}s)"
            )

        return Maze(height=height, width=width, knockdowns=frozenset(knockdowns), stats=stats)


def generate_maze(height: int, width: int, rng: Optional[random.Random] = None) -> Maze:
    """Generate a maze with default settings."""
    return MazeGenerator(rng=rng).generate(height, width)
