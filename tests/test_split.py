import numpy
import pytest

from rectindex.envelope import Rect, bounds
from rectindex.core.split import (
    distribute, enlargement, pick_seeds, split_entries)


@pytest.fixture
def boxes():
    return [Rect(0, 0, 10, 10), Rect(20, 20, 10, 10), Rect(40, 0, 10, 10),
            Rect(0, 40, 10, 10), Rect(50, 50, 10, 10)]


def random_boxes(rng, n):
    xy = rng.uniform(0, 100, size=(n, 2))
    wh = rng.uniform(0, 20, size=(n, 2))
    return [Rect(*map(float, p), *map(float, s)) for p, s in zip(xy, wh)]


def test_pick_seeds_farthest_centers(boxes):
    assert pick_seeds(boxes) == (0, 4)


def test_pick_seeds_first_pair_wins_ties():
    same = [Rect(0, 0, 1, 1)] * 4
    assert pick_seeds(same) == (0, 1)
    # (0, 2) and (1, 3) are equally far apart, the first one is kept.
    square = [Rect(0, 0, 0, 0), Rect(10, 0, 0, 0), Rect(10, 10, 0, 0),
              Rect(0, 10, 0, 0)]
    assert pick_seeds(square) == (0, 2)


def test_pick_seeds_needs_two_boxes():
    with pytest.raises(ValueError):
        pick_seeds([Rect(0, 0, 1, 1)])


def test_enlargement():
    assert enlargement((0, 0, 10, 10), (2, 2, 3, 3)) == 0
    assert enlargement((0, 0, 10, 10), (0, 0, 20, 10)) == 100


def test_distribute(boxes):
    entry_bounds = [bounds(b) for b in boxes]
    assert distribute(entry_bounds, (0, 4)) == ([0, 1, 2, 3], [4])


def test_distribute_ties_go_to_first_group():
    same = [(0, 0, 1, 1)] * 5
    assert distribute(same, (0, 1)) == ([0, 2, 3, 4], [1])


@pytest.mark.parametrize("n", [3, 5, 9, 17])
def test_split_is_a_partition(n):
    rng = numpy.random.default_rng(n)
    for _ in range(20):
        group1, group2 = split_entries(random_boxes(rng, n))
        assert group1 and group2
        assert sorted(group1 + group2) == list(range(n))


def test_split_uses_exact_bounds():
    # Approximate boxes for seeding, exact bounds for distribution.
    boxes = [Rect(0, 0, 1, 1), Rect(100, 0, 1, 1), Rect(10, 0, 1, 1)]
    exact = [bounds(b) for b in boxes]
    assert split_entries(boxes, exact) == split_entries(boxes)
    assert split_entries(boxes) == ([0, 2], [1])
