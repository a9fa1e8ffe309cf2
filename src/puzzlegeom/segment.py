"""
2D line segments and their intersection.

`LineSegment2D.find_intersection` uses the standard determinant form of
the line-line intersection. Writing the segments as

    P(t) = p1 + t * (p2 - p1)      (this segment)
    Q(u) = p3 + u * (p4 - p3)      (the other segment)

the infinite lines cross at

    t = ((p1.x - p3.x)(p3.y - p4.y) - (p1.y - p3.y)(p3.x - p4.x)) / D
    u = -((p1.x - p2.x)(p1.y - p3.y) - (p1.y - p2.y)(p1.x - p3.x)) / D
    D = (p1.x - p2.x)(p3.y - p4.y) - (p1.y - p2.y)(p3.x - p4.x)

D == 0 means the segments are parallel or colinear and no single
intersection point exists.

Which parameters must lie in [0, 1] is an explicit policy, see
`IntersectionPolicy`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .config import DEFAULT_INTERSECTION_POLICY
from .vector import Vector2D


class IntersectionPolicy(Enum):
    """
    Bound checks applied by `LineSegment2D.find_intersection`.

    - ONE_SIDED_BOUND:
        Only require the crossing to lie on *this* segment (0 <= t <= 1).
        The other segment is treated as an infinite line.
    - BOTH_BOUNDED:
        Require the crossing to lie on both segments.
    """

    ONE_SIDED_BOUND = "one_sided_bound"
    BOTH_BOUNDED = "both_bounded"


PolicyLike = Union[IntersectionPolicy, str]


def resolve_policy(policy: Optional[PolicyLike] = None) -> IntersectionPolicy:
    """
    Turn a policy given as an enum member, a member name or a value into
    an `IntersectionPolicy`. None selects the configured default.
    """
    if policy is None:
        policy = DEFAULT_INTERSECTION_POLICY
    if isinstance(policy, IntersectionPolicy):
        return policy
    key = str(policy).strip()
    if key.upper() in IntersectionPolicy.__members__:
        return IntersectionPolicy[key.upper()]
    try:
        return IntersectionPolicy(key.lower())
    except ValueError:
        raise ValueError(
            f"Unknown intersection policy {policy!r}. "
            f"Expected one of {[p.name for p in IntersectionPolicy]}."
        ) from None


@dataclass(frozen=True)
class LineSegment2D:
    """
    Segment from `point1` to `point2`.

    Intersection is undirected, but the parameter `t` runs from point1
    (t = 0) to point2 (t = 1).
    """

    point1: Vector2D
    point2: Vector2D

    def length(self) -> float:
        return self.point2.subtract(self.point1).length()

    def point_at(self, t: float) -> Vector2D:
        """
        Point at parameter `t` along the segment.
        """
        p1, p2 = self.point1, self.point2
        return Vector2D(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))

    def find_intersection(
        self,
        other: "LineSegment2D",
        policy: Optional[PolicyLike] = None,
    ) -> Optional[Vector2D]:
        """
        Find where this segment crosses `other`.

        Parameters
        ----------
        other:
            Segment to intersect with.
        policy:
            Bound policy. If None, uses `DEFAULT_INTERSECTION_POLICY`
            from config.

        Returns
        -------
        Vector2D or None
            The crossing point, or None when the segments are parallel /
            colinear or the crossing falls outside the bounds required by
            `policy`.
        """
        mode = resolve_policy(policy)

        p1, p2 = self.point1, self.point2
        p3, p4 = other.point1, other.point2

        denominator = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
        if denominator == 0:
            return None

        t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / denominator
        if t < 0.0 or t > 1.0:
            return None

        if mode is IntersectionPolicy.BOTH_BOUNDED:
            u = -((p1.x - p2.x) * (p1.y - p3.y) - (p1.y - p2.y) * (p1.x - p3.x)) / denominator
            if u < 0.0 or u > 1.0:
                return None

        return self.point_at(t)


__all__ = [
    "IntersectionPolicy",
    "resolve_policy",
    "LineSegment2D",
]
