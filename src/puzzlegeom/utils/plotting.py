"""
Visualization helpers for puzzlegeom primitives.

These helpers are thin convenience wrappers around matplotlib for:
- Plotting a set of 1D ranges as horizontal bars (e.g. before / after
  `Range.combine`).
- Plotting `Range2D` boxes and points.
- Plotting 2D line segments and their pairwise intersections.
- Plotting a `PixelMap` grid.

All functions accept an optional matplotlib Axes and return it.

Typical usage in a notebook
---------------------------

    import matplotlib.pyplot as plt
    from puzzlegeom import Range
    from puzzlegeom.utils.plotting import plot_ranges

    ranges = [Range(1, 3), Range(2, 5), Range(10, 12)]
    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True)
    plot_ranges(ranges, ax=ax1, title="input")
    plot_ranges(Range.combine(ranges), ax=ax2, title="combined")

You remain in control of figure creation and display.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from ..interval import Range, Range2D
from ..render.pixel_map import PixelMap
from ..segment import LineSegment2D, PolicyLike
from ..vector import Vector2D


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _new_axes(ax, figsize):
    if ax is None:
        _, ax = plt.subplots(figsize=figsize)
    return ax


def find_all_intersections(
    segments: Sequence[LineSegment2D],
    policy: Optional[PolicyLike] = None,
) -> List[Vector2D]:
    """
    Pairwise intersections of `segments` (each unordered pair once).

    With a one-sided policy the pair (a, b) is tested as
    `a.find_intersection(b)`, i.e. bounded on the earlier segment.
    """
    points: List[Vector2D] = []
    for i, seg_a in enumerate(segments):
        for seg_b in segments[i + 1:]:
            hit = seg_a.find_intersection(seg_b, policy=policy)
            if hit is not None:
                points.append(hit)
    return points


# ---------------------------------------------------------------------------
# Public plotting helpers
# ---------------------------------------------------------------------------

def plot_ranges(
    ranges: Sequence[Range],
    ax=None,
    title: Optional[str] = None,
    height: float = 0.6,
):
    """
    Plot 1D ranges as horizontal bars, one row per range.

    Ranges are closed on integer domains, so a bar spans
    [start - 0.5, end + 0.5] to show every covered integer.
    """
    if not ranges:
        raise ValueError("plot_ranges called with an empty list of ranges.")

    ax = _new_axes(ax, (6, 0.5 + 0.4 * len(ranges)))

    for row, r in enumerate(ranges):
        ax.broken_barh([(r.start - 0.5, r.end - r.start + 1)], (row - height / 2.0, height), alpha=0.6)

    ax.set_yticks(range(len(ranges)))
    ax.set_yticklabels([f"[{r.start}, {r.end}]" for r in ranges])
    ax.invert_yaxis()
    if title is not None:
        ax.set_title(title)
    return ax


def plot_range2d(
    boxes: Sequence[Range2D],
    points: Sequence[Vector2D] = (),
    ax=None,
    title: Optional[str] = None,
    padding: float = 1.0,
):
    """
    Plot axis-aligned `Range2D` boxes and optional points.

    Points inside at least one box are drawn filled, others hollow.
    """
    if not boxes:
        raise ValueError("plot_range2d called with an empty list of boxes.")

    ax = _new_axes(ax, (6, 6))

    for box in boxes:
        ax.add_patch(
            plt.Rectangle(
                (box.x.start, box.y.start),
                box.x.end - box.x.start,
                box.y.end - box.y.start,
                fill=False,
                linewidth=1.5,
            )
        )

    for p in points:
        inside = any(box.contains(p) for box in boxes)
        ax.plot([p.x], [p.y], marker="o", fillstyle="full" if inside else "none", linestyle="none")

    extent = Range2D.bounding(
        [Vector2D(b.x.start, b.y.start) for b in boxes]
        + [Vector2D(b.x.end, b.y.end) for b in boxes]
        + list(points)
    )
    ax.set_xlim(extent.x.start - padding, extent.x.end + padding)
    ax.set_ylim(extent.y.start - padding, extent.y.end + padding)
    ax.set_aspect("equal", adjustable="box")
    if title is not None:
        ax.set_title(title)
    return ax


def plot_segments(
    segments: Sequence[LineSegment2D],
    ax=None,
    title: Optional[str] = None,
    show_intersections: bool = True,
    policy: Optional[PolicyLike] = None,
):
    """
    Plot 2D line segments, optionally marking their pairwise intersections.

    Parameters
    ----------
    segments:
        Segments to draw.
    ax:
        Optional matplotlib Axes. If None, a new figure and axes are created.
    title:
        Optional plot title.
    show_intersections:
        If True, mark every pairwise intersection found with `policy`.
    policy:
        Intersection policy passed to `find_intersection`.
    """
    if not segments:
        raise ValueError("plot_segments called with an empty list of segments.")

    ax = _new_axes(ax, (6, 6))

    for seg in segments:
        ax.plot([seg.point1.x, seg.point2.x], [seg.point1.y, seg.point2.y], linewidth=1.2)

    if show_intersections:
        hits = find_all_intersections(segments, policy=policy)
        if hits:
            ax.plot([h.x for h in hits], [h.y for h in hits], marker="x", linestyle="none", markersize=8)

    ax.set_aspect("equal", adjustable="datalim")
    if title is not None:
        ax.set_title(title)
    return ax


def plot_pixel_map(
    pixel_map: PixelMap,
    ax=None,
    title: Optional[str] = None,
):
    """
    Draw a pixel map with one axes unit per map pixel.

    Index 0 pixels stay transparent, so whatever is behind the axes shows
    through. The y axis points down, matching the map's row order.
    """
    ax = _new_axes(ax, (6, 6 * pixel_map.height / pixel_map.width))

    ax.imshow(
        pixel_map.to_rgba(scaled=False),
        interpolation="nearest",
        extent=(0, pixel_map.width, pixel_map.height, 0),
    )
    ax.set_aspect("equal")
    if title is not None:
        ax.set_title(title)
    return ax


__all__ = [
    "find_all_intersections",
    "plot_ranges",
    "plot_range2d",
    "plot_segments",
    "plot_pixel_map",
]
