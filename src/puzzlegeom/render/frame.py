"""
Per-frame data passed from the renderer to a drawing surface.

- `FrameUniforms`: matrices and light/view vectors, constant per frame.
- `FrameBuffers`: the three parallel float32 vertex streams (positions,
  normals, colors), each a flat array of 3 floats per vertex.
- `flatten_objects`: builds `FrameBuffers` from scene objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .scene import RendererObject


@dataclass(frozen=True)
class FrameUniforms:
    """
    Uniform values for one frame.

    projection, model_view:
        (4, 4) float64 matrices, row-major math convention.
    view, light:
        (3,) unit vectors.
    width, height:
        Viewport size in pixels.
    """

    projection: np.ndarray
    model_view: np.ndarray
    view: np.ndarray
    light: np.ndarray
    width: int
    height: int


@dataclass(frozen=True)
class FrameBuffers:
    """
    Flat float32 vertex streams uploaded for one frame.

    All three arrays have length 3 * vertex_count and share vertex order.
    """

    vertices: np.ndarray
    normals: np.ndarray
    colors: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.size // 3)

    @property
    def triangle_count(self) -> int:
        return self.vertex_count // 3

    @classmethod
    def empty(cls) -> "FrameBuffers":
        return cls(
            vertices=np.zeros(0, dtype=np.float32),
            normals=np.zeros(0, dtype=np.float32),
            colors=np.zeros(0, dtype=np.float32),
        )


def flatten_objects(objects: Sequence[RendererObject]) -> FrameBuffers:
    """
    Flatten scene objects into parallel vertex / normal / color buffers.

    Objects are visited in order. Each vertex is translated by its object's
    `origin`; the object's single color is repeated for every vertex.

    Raises
    ------
    InvalidSceneObjectError
        If an object's vertex or normal list was reassigned to a length
        that breaks its triangle-list invariants.
    """
    if not objects:
        return FrameBuffers.empty()

    positions = []
    normals = []
    colors = []
    for obj in objects:
        obj.validate()
        if not obj.vertices:
            continue
        verts = np.array([[v.x, v.y, v.z] for v in obj.vertices], dtype=float)
        verts += obj.origin.to_array()
        positions.append(verts)
        normals.append(np.array([[n.x, n.y, n.z] for n in obj.normals], dtype=float))
        colors.append(np.tile(obj.color.as_tuple(), (len(obj.vertices), 1)))

    if not positions:
        return FrameBuffers.empty()

    return FrameBuffers(
        vertices=np.concatenate(positions).astype(np.float32).ravel(),
        normals=np.concatenate(normals).astype(np.float32).ravel(),
        colors=np.concatenate(colors).astype(np.float32).ravel(),
    )


__all__ = [
    "FrameUniforms",
    "FrameBuffers",
    "flatten_objects",
]
