"""
Scene objects for the puzzlegeom renderer.

A scene object is a flat triangle list (three vertices per triangle, no
index buffer) with one normal per triangle vertex, a single flat color and
a translation `origin`. There is no per-object rotation or scale: objects
bake those into their vertex list. `origin` can be reassigned between
frames to move an object.

`RendererCuboid` is the one concrete shape puzzles need: an axis-aligned
box with its minimum corner at the local origin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..errors import InvalidSceneObjectError
from ..vector import Vector3D


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RendererColor:
    """
    Flat RGB color with components in [0, 1].
    """

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidSceneObjectError(
                    f"Color component {name}={value} outside [0, 1]."
                )

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.red, self.green, self.blue)


# ---------------------------------------------------------------------------
# Generic object
# ---------------------------------------------------------------------------

@dataclass
class RendererObject:
    """
    Renderable triangle list.

    - vertices: flat triangle list, len(vertices) % 3 == 0
    - normals: one normal per vertex, same order as `vertices`
    - color: single flat color replicated to every vertex
    - origin: translation added to every vertex at render time

    `vertices` and `normals` are stored as tuples. The counts are checked
    on construction and again by `flatten_objects` on every frame.
    """

    vertices: Sequence[Vector3D]
    normals: Sequence[Vector3D]
    color: RendererColor
    origin: Vector3D = field(default_factory=lambda: Vector3D(0.0, 0.0, 0.0))

    def __post_init__(self) -> None:
        self.vertices = tuple(self.vertices)
        self.normals = tuple(self.normals)
        self.validate()

    def validate(self) -> None:
        """
        Check the triangle-list invariants.

        Raises
        ------
        InvalidSceneObjectError
            If the vertex count is not a multiple of 3 or the normal count
            differs from the vertex count.
        """
        if len(self.vertices) % 3 != 0:
            raise InvalidSceneObjectError(
                f"Triangle list needs a multiple of 3 vertices, got {len(self.vertices)}."
            )
        if len(self.normals) != len(self.vertices):
            raise InvalidSceneObjectError(
                "Expected exactly one normal per vertex: "
                f"{len(self.vertices)} vertices, {len(self.normals)} normals."
            )

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // 3


# ---------------------------------------------------------------------------
# Cuboid
# ---------------------------------------------------------------------------

# Corner indices of each face (two triangles per face) and the outward
# face normal. Corners are numbered
#   0 (0,0,0)  1 (x,0,0)  2 (x,y,0)  3 (0,y,0)
#   4 (0,0,z)  5 (x,0,z)  6 (x,y,z)  7 (0,y,z)
_CUBOID_FACES: Sequence[Tuple[Tuple[int, ...], Tuple[float, float, float]]] = (
    ((0, 2, 1, 0, 3, 2), (0.0, 0.0, -1.0)),  # bottom
    ((0, 1, 5, 0, 5, 4), (0.0, -1.0, 0.0)),  # front
    ((1, 2, 6, 1, 6, 5), (1.0, 0.0, 0.0)),   # right
    ((2, 3, 7, 2, 7, 6), (0.0, 1.0, 0.0)),   # back
    ((0, 7, 3, 0, 4, 7), (-1.0, 0.0, 0.0)),  # left
    ((4, 5, 6, 4, 6, 7), (0.0, 0.0, 1.0)),   # top
)


class RendererCuboid(RendererObject):
    """
    Axis-aligned box of size (x_size, y_size, z_size) with a flat color.

    Builds 12 triangles (36 vertices) and repeats each of the 6 face
    normals for the 6 vertices of its face.
    """

    def __init__(self, x_size: float, y_size: float, z_size: float, color: RendererColor) -> None:
        corners = [
            Vector3D(0.0, 0.0, 0.0),
            Vector3D(x_size, 0.0, 0.0),
            Vector3D(x_size, y_size, 0.0),
            Vector3D(0.0, y_size, 0.0),
            Vector3D(0.0, 0.0, z_size),
            Vector3D(x_size, 0.0, z_size),
            Vector3D(x_size, y_size, z_size),
            Vector3D(0.0, y_size, z_size),
        ]

        vertices: List[Vector3D] = []
        normals: List[Vector3D] = []
        for indices, normal in _CUBOID_FACES:
            vertices.extend(corners[i] for i in indices)
            normals.extend(Vector3D(*normal) for _ in indices)

        super().__init__(vertices=vertices, normals=normals, color=color)
        self.size = Vector3D(x_size, y_size, z_size)


__all__ = [
    "RendererColor",
    "RendererObject",
    "RendererCuboid",
]
