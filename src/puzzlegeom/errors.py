"""
Typed exceptions raised by the puzzlegeom toolkit.

Every error derives from `PuzzleGeomError` and also from the builtin
exception a caller would reach for first: `ValueError` for bad input,
`LookupError` for missing graph nodes and `RuntimeError` for surface
problems.
"""

from __future__ import annotations


class PuzzleGeomError(Exception):
    """Base error for the toolkit."""


class DegenerateVectorError(PuzzleGeomError, ValueError):
    """A zero-length vector was normalized."""


class EmptyInputError(PuzzleGeomError, ValueError):
    """An operation that needs at least one element received none."""


class InvalidSceneObjectError(PuzzleGeomError, ValueError):
    """A renderer object violates its geometry or color invariants."""


class SingularSystemError(PuzzleGeomError, ValueError):
    """A linear system has no unique solution or is malformed."""


class SurfaceError(PuzzleGeomError, RuntimeError):
    """A drawing surface could not be created or was used before setup."""


class GraphLookupError(PuzzleGeomError, LookupError):
    """A graph node or edge was not found."""


class PathNotFoundError(GraphLookupError):
    """No path connects the requested graph nodes."""


__all__ = [
    "PuzzleGeomError",
    "DegenerateVectorError",
    "EmptyInputError",
    "InvalidSceneObjectError",
    "SingularSystemError",
    "SurfaceError",
    "GraphLookupError",
    "PathNotFoundError",
]
