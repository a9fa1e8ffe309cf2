"""
Tests for puzzlegeom.interval

These tests focus on:
- split / overlap partitions reconstructing the original range
- combine merging, ordering and not mutating its input
- Range2D construction and containment
"""

from __future__ import annotations

import pytest

from puzzlegeom.errors import EmptyInputError
from puzzlegeom.interval import Range, Range2D
from puzzlegeom.vector import Vector2D


def _points(*ranges):
    """
    Helper: the set of integer points covered by the non-None ranges.
    """
    covered = []
    for r in ranges:
        if r is not None:
            covered.extend(range(int(r.start), int(r.end) + 1))
    return covered


# ---------------------------------------------------------------------------
# Range basics
# ---------------------------------------------------------------------------

def test_length_counts_integer_points():
    assert Range(1, 5).length == 5
    assert Range(3, 3).length == 1


def test_contains_is_inclusive():
    r = Range(2, 4)
    assert r.contains(2)
    assert 4 in r
    assert not r.contains(1)
    assert 5 not in r


def test_clone_returns_equal_range():
    r = Range(-3, 9)
    assert r.clone() == r


# ---------------------------------------------------------------------------
# split
# ---------------------------------------------------------------------------

def test_split_examples():
    assert Range(1, 10).split(5) == (Range(1, 4), Range(5, 10))
    assert Range(1, 10).split(1) == (None, Range(1, 10))
    assert Range(1, 10).split(-4) == (None, Range(1, 10))
    assert Range(1, 10).split(11) == (Range(1, 10), None)
    assert Range(1, 10).split(10) == (Range(1, 9), Range(10, 10))


@pytest.mark.parametrize("value", range(-2, 14))
def test_split_partitions_integer_range(value):
    r = Range(1, 10)
    left, right = r.split(value)

    # Disjoint, in order, covering r exactly
    assert _points(left, right) == _points(r)
    if left is not None:
        assert all(p < value for p in _points(left))
    if right is not None:
        assert all(p >= value for p in _points(right))


# ---------------------------------------------------------------------------
# overlap
# ---------------------------------------------------------------------------

def test_overlap_examples():
    r = Range(1, 10)
    assert r.overlap(Range(4, 6)) == (Range(1, 3), Range(4, 6), Range(7, 10))
    assert r.overlap(Range(20, 30)) == (Range(1, 10), None, None)
    assert r.overlap(Range(-5, 0)) == (None, None, Range(1, 10))
    assert r.overlap(Range(0, 20)) == (None, Range(1, 10), None)
    assert r.overlap(Range(5, 20)) == (Range(1, 4), Range(5, 10), None)
    assert r.overlap(Range(-5, 3)) == (None, Range(1, 3), Range(4, 10))


@pytest.mark.parametrize(
    "target",
    [Range(s, e) for s in range(-1, 13, 3) for e in range(s, 14, 4)],
)
def test_overlap_parts_reconstruct_range(target):
    r = Range(2, 9)
    before, inside, after = r.overlap(target)

    assert _points(before, inside, after) == _points(r)
    target_points = set(_points(target))
    if inside is not None:
        assert set(_points(inside)) <= target_points
    if before is not None:
        assert all(p < target.start for p in _points(before))
    if after is not None:
        assert all(p > target.end for p in _points(after))


# ---------------------------------------------------------------------------
# combine
# ---------------------------------------------------------------------------

def test_combine_merges_overlaps_and_sorts():
    ranges = [Range(10, 12), Range(2, 5), Range(1, 3)]
    assert Range.combine(ranges) == [Range(1, 5), Range(10, 12)]


def test_combine_does_not_mutate_input():
    ranges = [Range(1, 3), Range(2, 5), Range(10, 12)]
    snapshot = list(ranges)
    Range.combine(ranges)
    assert ranges == snapshot


def test_combine_contained_range_is_absorbed():
    assert Range.combine([Range(1, 10), Range(3, 4)]) == [Range(1, 10)]


def test_combine_single_range():
    assert Range.combine([Range(4, 8)]) == [Range(4, 8)]


def test_combine_adjacent_ranges():
    ranges = [Range(1, 3), Range(4, 6)]
    assert Range.combine(ranges) == [Range(1, 3), Range(4, 6)]
    assert Range.combine(ranges, merge_adjacent=True) == [Range(1, 6)]


def test_combine_empty_raises():
    with pytest.raises(EmptyInputError):
        Range.combine([])


def test_combine_result_is_disjoint_and_covers_input():
    ranges = [Range(5, 9), Range(0, 2), Range(8, 15), Range(1, 1), Range(20, 21)]
    merged = Range.combine(ranges)

    for a, b in zip(merged, merged[1:]):
        assert a.end < b.start
    assert set(_points(*merged)) == set(_points(*ranges))


# ---------------------------------------------------------------------------
# Range2D
# ---------------------------------------------------------------------------

def test_range2d_from_bounds_and_contains():
    box = Range2D.from_bounds(0, 4, -2, 2)
    assert box.x == Range(0, 4)
    assert box.y == Range(-2, 2)
    assert box.contains(Vector2D(4, -2))
    assert Vector2D(1, 1) in box
    assert not box.contains(Vector2D(5, 0))
    assert not box.contains(Vector2D(0, 3))


def test_range2d_bounding_box():
    pts = [Vector2D(3, 1), Vector2D(-1, 4), Vector2D(2, -5)]
    box = Range2D.bounding(pts)
    assert box == Range2D.from_bounds(-1, 3, -5, 4)
    assert all(box.contains(p) for p in pts)


def test_range2d_bounding_empty_raises():
    with pytest.raises(EmptyInputError):
        Range2D.bounding([])


def test_range2d_clone():
    box = Range2D.from_bounds(1, 2, 3, 4)
    assert box.clone() == box
