"""
puzzlegeom - geometry and rendering toolkit for puzzle solutions

This package contains the shared vector, interval, segment, graph and
numeric primitives used by puzzle solvers, plus a small 3D renderer and
pixel maps for visualizations. See the `render` and `utils` subpackages
for the pipeline and helpers.
"""

from .errors import (
    DegenerateVectorError,
    EmptyInputError,
    GraphLookupError,
    InvalidSceneObjectError,
    PathNotFoundError,
    PuzzleGeomError,
    SingularSystemError,
    SurfaceError,
)
from .graph import Graph, PriorityQueue
from .interval import Range, Range2D
from .numeric import greatest_common_divisor, least_common_multiple, linear_system_solution
from .segment import IntersectionPolicy, LineSegment2D
from .vector import Vector2D, Vector3D

__all__ = [
    "DegenerateVectorError",
    "EmptyInputError",
    "GraphLookupError",
    "InvalidSceneObjectError",
    "PathNotFoundError",
    "PuzzleGeomError",
    "SingularSystemError",
    "SurfaceError",
    "Graph",
    "PriorityQueue",
    "Range",
    "Range2D",
    "greatest_common_divisor",
    "least_common_multiple",
    "linear_system_solution",
    "IntersectionPolicy",
    "LineSegment2D",
    "Vector2D",
    "Vector3D",
]

__version__ = "0.1.0"
