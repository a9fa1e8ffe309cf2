"""
Camera model and transform math for the puzzlegeom renderer.

Matrices are 4x4 float64 NumPy arrays in **row-major math convention**:
a point p is transformed as `M @ [x, y, z, 1]`. GPU surfaces transpose
them on upload (OpenGL expects column-major data).

Conventions follow classic OpenGL / gluLookAt:

- View space looks down -Z, +Y is up.
- `perspective` maps view space to clip space with w = -z_view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import math

import numpy as np

from ..config import (
    DEFAULT_CAMERA_POSITION,
    DEFAULT_CAMERA_TARGET,
    DEFAULT_CAMERA_UP,
    FAR_PLANE,
    FIELD_OF_VIEW_DEG,
    NEAR_PLANE,
)
from ..vector import Vector3D


# ---------------------------------------------------------------------------
# Matrix builders
# ---------------------------------------------------------------------------

def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """
    Perspective projection matrix.

    Parameters
    ----------
    fov_y:
        Vertical field of view in radians.
    aspect:
        Viewport width / height.
    near, far:
        Positive distances to the clip planes.
    """
    f = 1.0 / math.tan(fov_y / 2.0)
    m = np.zeros((4, 4), dtype=float)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def look_at(eye: Vector3D, target: Vector3D, up: Vector3D) -> np.ndarray:
    """
    View matrix for a camera at `eye` looking at `target`.

    If `eye` and `target` coincide the identity is returned. If `up` is
    parallel to the viewing direction the side axis collapses to zero
    (same behavior as gl-matrix); pick a different up vector.
    """
    e = eye.to_array()
    forward = target.to_array() - e
    forward_len = np.linalg.norm(forward)
    if forward_len == 0.0:
        return np.identity(4)
    forward /= forward_len

    side = np.cross(forward, up.to_array())
    side_len = np.linalg.norm(side)
    if side_len > 0.0:
        side /= side_len

    true_up = np.cross(side, forward)

    m = np.identity(4)
    m[0, :3] = side
    m[1, :3] = true_up
    m[2, :3] = -forward
    m[0, 3] = -np.dot(side, e)
    m[1, 3] = -np.dot(true_up, e)
    m[2, 3] = np.dot(forward, e)
    return m


def light_direction(view: Vector3D, up: Vector3D) -> Vector3D:
    """
    Direction of the single directional light, derived from the camera.

        light = normalize(view + up - view x up)

    Raises
    ------
    DegenerateVectorError
        If the combination cancels out to zero.
    """
    return view.add(up).subtract(view.cross(up)).normalize()


# ---------------------------------------------------------------------------
# Camera
# ---------------------------------------------------------------------------

def _default_up() -> Vector3D:
    return Vector3D(*DEFAULT_CAMERA_UP).normalize()


@dataclass
class Camera:
    """
    Camera placement: position, look-at target and up direction.

    Fields can be reassigned between frames; matrices are recomputed on
    every render.
    """

    position: Vector3D = field(default_factory=lambda: Vector3D(*DEFAULT_CAMERA_POSITION))
    target: Vector3D = field(default_factory=lambda: Vector3D(*DEFAULT_CAMERA_TARGET))
    up: Vector3D = field(default_factory=_default_up)
    fov_deg: float = FIELD_OF_VIEW_DEG
    near: float = NEAR_PLANE
    far: float = FAR_PLANE

    def view_direction(self) -> Vector3D:
        """
        Unit vector from the camera position toward the target.
        """
        return self.target.subtract(self.position).normalize()

    def light_direction(self) -> Vector3D:
        return light_direction(self.view_direction(), self.up)

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target, self.up)

    def projection_matrix(self, aspect: float) -> np.ndarray:
        return perspective(math.radians(self.fov_deg), aspect, self.near, self.far)

    def matrices(self, aspect: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Return (projection, view) for a viewport with the given aspect.
        """
        return self.projection_matrix(aspect), self.view_matrix()


__all__ = [
    "perspective",
    "look_at",
    "light_direction",
    "Camera",
]
