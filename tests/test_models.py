import pytest

from mazebuilder.core.models import (
    Axis, GenerationStats, Maze, Wall, iter_internal_walls,
)


def test_between_keys_on_larger_cell():
    assert Wall.between(0, 1, 3) == Wall.vertical(1)
    assert Wall.between(1, 0, 3) == Wall.vertical(1)
    assert Wall.between(1, 4, 3) == Wall.horizontal(4)
    assert Wall.between(4, 1, 3) == Wall.horizontal(4)


@pytest.mark.parametrize("a,b", [(2, 3), (0, 4), (0, 0), (0, 2)])
def test_between_rejects_non_adjacent_cells(a, b):
    # (2, 3) is a row wrap in a 3-wide grid
    with pytest.raises(ValueError):
        Wall.between(a, b, 3)


def test_cells_reverses_between():
    width = 4
    for a, b in [(0, 1), (5, 6), (2, 6), (7, 11)]:
        assert Wall.between(a, b, width).cells(width) == (a, b)


def test_signed_identifier_encoding():
    assert Wall.vertical(5).identifier == 5
    assert Wall.horizontal(5).identifier == -5
    assert Wall.from_identifier(-7) == Wall.horizontal(7)
    assert Wall.from_identifier(7) == Wall.vertical(7)


def test_identifiers_unique_and_reversible():
    walls = list(iter_internal_walls(4, 5))
    identifiers = [wall.identifier for wall in walls]
    assert len(set(identifiers)) == len(walls)
    assert [Wall.from_identifier(i) for i in identifiers] == walls


@pytest.mark.parametrize("height,width", [(1, 1), (1, 4), (3, 1), (3, 4)])
def test_internal_wall_count(height, width):
    walls = list(iter_internal_walls(height, width))
    assert len(walls) == height * (width - 1) + (height - 1) * width
    assert all(wall.is_internal(height, width) for wall in walls)


def test_boundary_walls_are_not_internal():
    assert not Wall.horizontal(2).is_internal(3, 3)
    assert not Wall.vertical(3).is_internal(3, 3)
    assert not Wall.vertical(9).is_internal(3, 3)
    assert Wall.horizontal(3).axis is Axis.HORIZONTAL


def test_maze_helpers():
    maze = Maze(2, 2, frozenset({Wall.vertical(1), Wall.horizontal(2), Wall.horizontal(3)}))
    assert maze.cell_count == 4
    assert maze.is_open(Wall.vertical(1))
    assert not maze.is_open(Wall.vertical(3))
    assert maze.knockdown_identifiers() == [-3, -2, 1]
    assert maze.passages() == [(0, 1), (0, 2), (1, 3)]


def test_stats_efficiency():
    assert GenerationStats(iterations=10, knockdowns=5).efficiency == 0.5
    assert GenerationStats().efficiency == 1.0
