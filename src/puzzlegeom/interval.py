"""
Closed interval ("range") arithmetic for the puzzlegeom toolkit.

This module defines:

- `Range`: a closed interval [start, end] (inclusive on both ends).
- `Range2D`: an axis-aligned box made of an x range and a y range.

Most puzzles that need ranges work on **discrete** coordinates (seed
numbers, IP addresses, brick positions, ...). The split / overlap helpers
therefore place boundaries one unit apart:

    Range(1, 10).split(5)      -> (Range(1, 4), Range(5, 10))
    Range(1, 10).overlap(Range(4, 6))
                               -> (Range(1, 3), Range(4, 6), Range(7, 10))

Using them on continuous values silently drops the unit interval around
each boundary.

`start <= end` is not enforced; methods assume well-formed input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .errors import EmptyInputError
from .vector import Vector2D


RangeParts2 = Tuple[Optional["Range"], Optional["Range"]]
RangeParts3 = Tuple[Optional["Range"], Optional["Range"], Optional["Range"]]


# ---------------------------------------------------------------------------
# 1D range
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Range:
    """
    Closed interval [start, end].
    """

    start: float
    end: float

    def clone(self) -> "Range":
        return Range(self.start, self.end)

    @property
    def length(self) -> float:
        """
        Number of integer points covered, `end - start + 1`.
        """
        return self.end - self.start + 1

    def contains(self, value: float) -> bool:
        """
        Return True if `start <= value <= end`.
        """
        return self.start <= value <= self.end

    def __contains__(self, value: float) -> bool:
        return self.contains(value)

    def split(self, value: float) -> RangeParts2:
        """
        Split the range into the parts left and right of `value`.

        The right part includes `value`.

        Returns
        -------
        (left, right)
            - `(None, self)` if `value <= start` (everything is "right").
            - `(self, None)` if `value > end` (everything is "left").
            - `(Range(start, value - 1), Range(value, end))` otherwise.
        """
        if value <= self.start:
            return None, self.clone()
        if value > self.end:
            return self.clone(), None
        return Range(self.start, value - 1), Range(value, self.end)

    def overlap(self, target: "Range") -> RangeParts3:
        """
        Decompose this range relative to `target`.

        Returns
        -------
        (before, inside, after)
            - before: the part strictly before `target.start`, ending at
              `target.start - 1`.
            - inside: the part overlapping `target`, clipped to
              `[max(start, target.start), min(end, target.end)]`.
            - after: the part strictly after `target.end`, starting at
              `target.end + 1`.
            Empty parts are None. For integer ranges the non-None parts
            are pairwise disjoint and together cover this range exactly.
        """
        # Wholly before or wholly after the target
        if target.start > self.end:
            return self.clone(), None, None
        if target.end < self.start:
            return None, None, self.clone()

        before = Range(self.start, target.start - 1) if target.start > self.start else None
        inside = Range(max(self.start, target.start), min(self.end, target.end))
        after = Range(target.end + 1, self.end) if target.end < self.end else None
        return before, inside, after

    @staticmethod
    def combine(ranges: Iterable["Range"], merge_adjacent: bool = False) -> List["Range"]:
        """
        Merge ranges into a sorted list of disjoint ranges covering the same points.

        Algorithm: sort ascending by `start`, then sweep, extending the last
        output range whenever the next range starts inside it.

        Parameters
        ----------
        ranges:
            Unordered, possibly overlapping ranges. Not modified.
        merge_adjacent:
            If True, also merge ranges that merely touch on an integer
            domain (`next.start == last.end + 1`). By default only
            overlapping ranges are merged.

        Returns
        -------
        List[Range]
            Sorted, non-overlapping ranges.

        Raises
        ------
        EmptyInputError
            If `ranges` is empty.
        """
        ordered = sorted(ranges, key=lambda r: r.start)
        if not ordered:
            raise EmptyInputError("Range.combine needs at least one range.")

        gap = 1 if merge_adjacent else 0
        merged: List[Range] = [ordered[0]]
        for current in ordered[1:]:
            last = merged[-1]
            if current.start <= last.end + gap:
                if current.end > last.end:
                    merged[-1] = Range(last.start, current.end)
            else:
                merged.append(current)
        return merged


# ---------------------------------------------------------------------------
# 2D range box
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Range2D:
    """
    Axis-aligned box made of an x range and a y range (both closed).
    """

    x: Range
    y: Range

    @classmethod
    def from_bounds(cls, x_from: float, x_to: float, y_from: float, y_to: float) -> "Range2D":
        """
        Create a box from its four bounds.
        """
        return cls(Range(x_from, x_to), Range(y_from, y_to))

    @classmethod
    def bounding(cls, points: Iterable[Vector2D]) -> "Range2D":
        """
        Smallest box containing every point in `points`.

        Raises
        ------
        EmptyInputError
            If `points` is empty.
        """
        pts = list(points)
        if not pts:
            raise EmptyInputError("Range2D.bounding needs at least one point.")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls.from_bounds(min(xs), max(xs), min(ys), max(ys))

    def clone(self) -> "Range2D":
        return Range2D(self.x.clone(), self.y.clone())

    def contains(self, vector: Vector2D) -> bool:
        """
        Return True if both coordinates of `vector` lie inside the box.
        """
        return self.x.contains(vector.x) and self.y.contains(vector.y)

    def __contains__(self, vector: Vector2D) -> bool:
        return self.contains(vector)


__all__ = [
    "Range",
    "Range2D",
]
