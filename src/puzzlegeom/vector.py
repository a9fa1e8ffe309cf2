"""
2D / 3D vector values for the puzzlegeom toolkit.

Vectors are **immutable**: every algebraic operation returns a new
instance and leaves its operands untouched, so chained expressions like

    direction = target.subtract(position).normalize()

never modify `target` or `position`. Both the named methods (`add`,
`subtract`, `multiply`, `divide`, ...) and the usual operators
(`+`, `-`, `*`, `/`, unary `-`) are available.

Equality is exact floating-point comparison, which is what grid-based
puzzle code wants (integer coordinates stored as floats compare exactly).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import math

import numpy as np

from .errors import DegenerateVectorError


# ---------------------------------------------------------------------------
# 2D vector
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Vector2D:
    """
    A 2D vector / point with coordinates (x, y).
    """

    x: float
    y: float

    def clone(self) -> "Vector2D":
        """
        Return an equal, independent copy of the vector.
        """
        return Vector2D(self.x, self.y)

    def length(self) -> float:
        """
        Euclidean length of the vector.
        """
        return math.hypot(self.x, self.y)

    def manhattan_length(self) -> float:
        """
        Manhattan length |x| + |y|.
        """
        return abs(self.x) + abs(self.y)

    def normalize(self) -> "Vector2D":
        """
        Return the unit vector pointing in the same direction.

        Raises
        ------
        DegenerateVectorError
            If the vector has zero length.
        """
        length = self.length()
        if length == 0.0:
            raise DegenerateVectorError("Cannot normalize a zero-length Vector2D.")
        return Vector2D(self.x / length, self.y / length)

    def add(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def multiply(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x * scalar, self.y * scalar)

    def divide(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x / scalar, self.y / scalar)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    # Operator forms of the named methods
    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __rmul__ = multiply
    __truediv__ = divide

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def __abs__(self) -> float:
        return self.length()

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


# ---------------------------------------------------------------------------
# 3D vector
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Vector3D:
    """
    A 3D vector / point with coordinates (x, y, z).

    Same contract as `Vector2D`, plus the cross product.
    """

    x: float
    y: float
    z: float

    def clone(self) -> "Vector3D":
        return Vector3D(self.x, self.y, self.z)

    def length(self) -> float:
        return math.hypot(self.x, self.y, self.z)

    def manhattan_length(self) -> float:
        return abs(self.x) + abs(self.y) + abs(self.z)

    def normalize(self) -> "Vector3D":
        """
        Return the unit vector pointing in the same direction.

        Raises
        ------
        DegenerateVectorError
            If the vector has zero length.
        """
        length = self.length()
        if length == 0.0:
            raise DegenerateVectorError("Cannot normalize a zero-length Vector3D.")
        return Vector3D(self.x / length, self.y / length, self.z / length)

    def add(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply(self, scalar: float) -> "Vector3D":
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def divide(self, scalar: float) -> "Vector3D":
        return Vector3D(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: "Vector3D") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3D") -> "Vector3D":
        """
        Right-handed cross product `self × other`.
        """
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __rmul__ = multiply
    __truediv__ = divide

    def __neg__(self) -> "Vector3D":
        return Vector3D(-self.x, -self.y, -self.z)

    def __abs__(self) -> float:
        return self.length()

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z


__all__ = [
    "Vector2D",
    "Vector3D",
]
