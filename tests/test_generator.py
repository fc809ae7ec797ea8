import random

import pytest

from mazebuilder.core.generator import MazeGenerator, generate_maze, path_exists
from mazebuilder.core.models import Wall, iter_internal_walls
from mazebuilder.utils.config import MazeConfig
from mazebuilder.utils.union_find import UnionFind


def reachable_cells(maze):
    """Cells reachable from cell 0 by walking through knocked-down walls."""
    adjacency = {cell: [] for cell in range(maze.cell_count)}
    for a, b in maze.passages():
        adjacency[a].append(b)
        adjacency[b].append(a)
    seen = {0}
    stack = [0]
    while stack:
        for neighbor in adjacency[stack.pop()]:
            if neighbor not in seen:
                seen.add(neighbor)
                stack.append(neighbor)
    return seen


@pytest.mark.parametrize("height,width", [(1, 1), (1, 2), (2, 1), (2, 2), (1, 9), (9, 1), (5, 7), (12, 12)])
def test_generates_spanning_tree(height, width, rng):
    maze = MazeGenerator(rng=rng).generate(height, width)

    assert len(maze.knockdowns) == height * width - 1
    assert len(reachable_cells(maze)) == height * width

    internal = set(iter_internal_walls(height, width))
    assert maze.knockdowns <= internal

    # an independent pass must never find a knockdown joining connected cells
    sets = UnionFind(height * width)
    for a, b in maze.passages():
        assert sets.union(a, b)
    assert sets.num_sets() == 1


@pytest.mark.parametrize("seed", range(20))
def test_many_seeds_stay_acyclic_and_connected(seed):
    maze = generate_maze(6, 4, rng=random.Random(seed))
    assert len(maze.knockdowns) == 23
    assert len(reachable_cells(maze)) == 24


def test_single_cell_needs_no_draws(scripted_random):
    maze = MazeGenerator(rng=scripted_random([])).generate(1, 1)
    assert maze.knockdowns == frozenset()
    assert maze.stats.iterations == 0
    assert maze.stats.knockdowns == 0


def test_two_by_two_knocks_down_three_of_four_walls(rng):
    maze = MazeGenerator(rng=rng).generate(2, 2)
    assert len(maze.knockdowns) == 3
    assert maze.knockdowns < set(iter_internal_walls(2, 2))
    assert len(reachable_cells(maze)) == 4


def test_draws_without_disjoint_neighbors_are_wasted(scripted_random):
    # 1x3: join 0-1, redraw 0 (nothing left to join), then join 2-1
    generator = MazeGenerator(rng=scripted_random([0, 0, 2]))
    maze = generator.generate(1, 3)

    assert maze.knockdowns == frozenset({Wall.vertical(1), Wall.vertical(2)})
    assert maze.stats.iterations == 3
    assert maze.stats.wasted_iterations == 1
    assert maze.stats.knockdowns == 2


def test_vertical_neighbor_produces_horizontal_wall(scripted_random):
    maze = MazeGenerator(rng=scripted_random([1])).generate(2, 1)
    assert maze.knockdowns == frozenset({Wall.horizontal(1)})


def test_disjoint_neighbors_excludes_connected_cells():
    generator = MazeGenerator(rng=random.Random(0))
    sets = UnionFind(9)
    assert generator.disjoint_neighbors(4, 3, 3, sets) == [1, 7, 5, 3]

    sets.union(4, 1)
    sets.union(4, 5)
    assert generator.disjoint_neighbors(4, 3, 3, sets) == [7, 3]
    assert path_exists(1, 5, sets)


def test_disjoint_neighbors_empty_when_fully_connected():
    generator = MazeGenerator(rng=random.Random(0))
    sets = UnionFind(4)
    for cell in range(1, 4):
        sets.union(0, cell)
    assert generator.disjoint_neighbors(0, 2, 2, sets) == []


def test_same_seed_gives_same_maze():
    first = MazeGenerator(MazeConfig(seed=99)).generate(8, 8)
    second = MazeGenerator(MazeConfig(seed=99)).generate(8, 8)
    assert first.knockdowns == second.knockdowns


def test_progress_callback_reports_each_knockdown(rng):
    calls = []
    MazeGenerator(rng=rng).generate(3, 3, progress_callback=lambda done, total: calls.append((done, total)))
    assert calls == [(i, 8) for i in range(1, 9)]


def test_stats_are_consistent(rng):
    maze = MazeGenerator(rng=rng).generate(10, 10)
    stats = maze.stats
    assert stats.knockdowns == 99
    assert stats.iterations == stats.knockdowns + stats.wasted_iterations
    assert stats.generation_time >= 0


def test_every_two_by_two_spanning_tree_appears():
    seen = set()
    rng = random.Random(2024)
    for _ in range(200):
        seen.add(MazeGenerator(rng=rng).generate(2, 2).knockdowns)
    # a 2x2 grid is a 4-cycle; leaving out any one of its walls gives a tree
    assert len(seen) == 4


class ListSets:
    """Quick-find disjoint sets: every element stores its set label directly."""

    def __init__(self, size):
        self.labels = list(range(size))

    @property
    def count(self):
        return len(self.labels)

    def num_sets(self):
        return len(set(self.labels))

    def find(self, x):
        return self.labels[x]

    def union(self, x, y):
        old, new = self.labels[y], self.labels[x]
        if old == new:
            return False
        self.labels = [new if label == old else label for label in self.labels]
        return True


def test_works_with_any_disjoint_set_implementation():
    maze = MazeGenerator(rng=random.Random(8), sets_factory=ListSets).generate(5, 6)
    assert len(maze.knockdowns) == 29
    assert len(reachable_cells(maze)) == 30


def test_same_seed_same_maze_across_set_implementations():
    quick_find = MazeGenerator(rng=random.Random(21), sets_factory=ListSets).generate(6, 6)
    union_find = MazeGenerator(rng=random.Random(21)).generate(6, 6)
    assert quick_find.knockdowns == union_find.knockdowns


def test_rejects_sets_that_do_not_start_as_singletons():
    def merged(size):
        sets = UnionFind(size)
        sets.union(0, 1)
        return sets

    with pytest.raises(ValueError, match="singletons"):
        MazeGenerator(rng=random.Random(0), sets_factory=merged).generate(2, 2)
