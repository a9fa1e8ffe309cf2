"""
Global configuration for the puzzlegeom toolkit.

This module centralizes:

- Project-root and output paths
- Projection and camera defaults used by the renderer
- Shading coefficients shared by the GPU and software surfaces
- The on-screen size limit for pixel maps
- The default bound policy for segment intersection

All of these are kept in one place so that puzzle visualizations render
the same way everywhere and changing a constant doesn't require hunting
through multiple files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

# This file lives in: <repo>/src/puzzlegeom/config.py
# Project root is therefore two levels up from here.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

OUTPUT_DIR: Path = PROJECT_ROOT / "output"
FRAMES_DIR: Path = OUTPUT_DIR / "frames"


# ---------------------------------------------------------------------------
# Projection / viewport
# ---------------------------------------------------------------------------

# Vertical field of view of the perspective projection, in degrees.
FIELD_OF_VIEW_DEG: float = 45.0

# Clip planes. The far plane is large because puzzle scenes are built in
# raw puzzle coordinates (grids of a few thousand cells are common).
NEAR_PLANE: float = 0.1
FAR_PLANE: float = 50_000.0

# Viewport used when no drawing surface is bound (width, height).
DEFAULT_VIEWPORT: Tuple[int, int] = (300, 150)

# Clear values applied at the start of every frame.
CLEAR_COLOR: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
CLEAR_DEPTH: float = 1.0


# ---------------------------------------------------------------------------
# Camera defaults
# ---------------------------------------------------------------------------

DEFAULT_CAMERA_POSITION: Tuple[float, float, float] = (1.0, 1.0, 1.0)
DEFAULT_CAMERA_TARGET: Tuple[float, float, float] = (0.0, 0.0, 0.0)
# Normalized by the camera on construction.
DEFAULT_CAMERA_UP: Tuple[float, float, float] = (-1.0, -1.0, 1.0)


# ---------------------------------------------------------------------------
# Shading model
# ---------------------------------------------------------------------------

# Weights of the ambient / diffuse / specular terms. They sum to 1 so a
# fully lit, fully specular fragment never exceeds the base color.
AMBIENT_WEIGHT: float = 0.2
DIFFUSE_WEIGHT: float = 0.6
SPECULAR_WEIGHT: float = 0.2
SPECULAR_EXPONENT: float = 20.0


# ---------------------------------------------------------------------------
# Pixel maps
# ---------------------------------------------------------------------------

# Largest on-screen size (width, height) a pixel map is scaled up to. Each
# map pixel becomes a square block of `pixel_size` screen pixels.
PIXEL_MAP_MAX_SCREEN: Tuple[int, int] = (460, 600)


# ---------------------------------------------------------------------------
# Segment intersection
# ---------------------------------------------------------------------------

# Name of an `IntersectionPolicy` member (see puzzlegeom.segment).
# Stored as a string so this module stays import-free.
DEFAULT_INTERSECTION_POLICY: str = "BOTH_BOUNDED"


def viewport_aspect(width: int, height: int) -> float:
    """
    Aspect ratio (width / height) used by the perspective projection.

    A surface that has not been laid out yet can report a zero height;
    in that case we fall back to a square aspect instead of dividing by
    zero.

    Parameters
    ----------
    width, height:
        Viewport size in pixels.

    Returns
    -------
    float
        width / height, or 1.0 when height is not positive.
    """
    if height <= 0:
        return 1.0
    return float(width) / float(height)


__all__ = [
    # Paths
    "PROJECT_ROOT",
    "OUTPUT_DIR",
    "FRAMES_DIR",
    # Projection / viewport
    "FIELD_OF_VIEW_DEG",
    "NEAR_PLANE",
    "FAR_PLANE",
    "DEFAULT_VIEWPORT",
    "CLEAR_COLOR",
    "CLEAR_DEPTH",
    # Camera
    "DEFAULT_CAMERA_POSITION",
    "DEFAULT_CAMERA_TARGET",
    "DEFAULT_CAMERA_UP",
    # Shading
    "AMBIENT_WEIGHT",
    "DIFFUSE_WEIGHT",
    "SPECULAR_WEIGHT",
    "SPECULAR_EXPONENT",
    # Pixel maps
    "PIXEL_MAP_MAX_SCREEN",
    # Segment intersection
    "DEFAULT_INTERSECTION_POLICY",
    "viewport_aspect",
]
