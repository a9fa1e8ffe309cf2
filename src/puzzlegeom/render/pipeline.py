"""
Immediate-mode 3D renderer for puzzle visualizations.

Typical usage
-------------

    from puzzlegeom.render import (
        MatplotlibSurface, Renderer, RendererColor, RendererCuboid,
    )
    from puzzlegeom.vector import Vector3D

    renderer = Renderer(surface=MatplotlibSurface(400, 300))
    cube = RendererCuboid(1, 1, 1, RendererColor(0.0, 0.66, 0.0))
    cube.origin = Vector3D(2, 0, 0)
    renderer.add_object(cube)
    renderer.camera.position = Vector3D(6, 6, 6)
    renderer.render()
    image = renderer.surface.read_pixels()

Each `render()` call:

1. Resizes the viewport to the surface's current size and clears it.
2. Recomputes the projection (fixed vertical FOV and clip planes from
   config) and the look-at view matrix.
3. Recomputes the view and light directions from the camera.
4. Flattens every object into vertex / normal / color buffers.
5. Uploads the buffers and issues a single triangle-list draw.

Without a surface the renderer still computes steps 2-4 (so tests and
headless puzzle runs can inspect `last_frame`), it just draws nothing.
"""

from __future__ import annotations

from typing import List, Optional

import logging

from ..config import DEFAULT_VIEWPORT, viewport_aspect
from .camera import Camera
from .frame import FrameBuffers, FrameUniforms, flatten_objects
from .scene import RendererObject
from .shaders import FRAGMENT_SHADER, VERTEX_SHADER
from .surfaces import RenderSurface

logger = logging.getLogger(__name__)


class Renderer:
    """
    Scene of renderer objects drawn through an optional surface.

    Parameters
    ----------
    surface:
        Drawing surface. The renderer initializes it (acquires the context
        and compiles the shading program) on construction. None gives an
        inert renderer.
    camera:
        Camera placement. Defaults to `Camera()`, see config for values.
    """

    def __init__(self, surface: Optional[RenderSurface] = None, camera: Optional[Camera] = None) -> None:
        self.surface = surface
        self.camera = camera if camera is not None else Camera()
        self.objects: List[RendererObject] = []
        self.last_frame: FrameBuffers = FrameBuffers.empty()
        self.last_uniforms: Optional[FrameUniforms] = None

        if surface is not None:
            surface.initialize(VERTEX_SHADER, FRAGMENT_SHADER)
            logger.debug("Renderer bound to %s.", type(surface).__name__)
        else:
            logger.debug("Renderer created without a surface; render() will not draw.")

    @property
    def is_inert(self) -> bool:
        return self.surface is None

    def add_object(self, obj: RendererObject) -> None:
        """
        Add an object to the scene. Objects cannot be removed.
        """
        self.objects.append(obj)

    def frame_uniforms(self, width: int, height: int) -> FrameUniforms:
        """
        Compute the per-frame uniforms for a viewport of the given size.
        """
        projection, model_view = self.camera.matrices(viewport_aspect(width, height))
        view = self.camera.view_direction()
        light = self.camera.light_direction()
        return FrameUniforms(
            projection=projection,
            model_view=model_view,
            view=view.to_array(),
            light=light.to_array(),
            width=width,
            height=height,
        )

    def render(self) -> FrameBuffers:
        """
        Render one frame.

        Returns
        -------
        FrameBuffers
            The buffers uploaded for this frame (also kept as `last_frame`).

        Raises
        ------
        DegenerateVectorError
            If the camera position equals its target.
        """
        width, height = self.surface.size() if self.surface is not None else DEFAULT_VIEWPORT

        if self.surface is not None:
            self.surface.begin_frame(width, height)

        uniforms = self.frame_uniforms(width, height)
        buffers = flatten_objects(self.objects)
        self.last_uniforms = uniforms
        self.last_frame = buffers

        if self.surface is None:
            logger.debug("Inert render: %d vertices computed, nothing drawn.", buffers.vertex_count)
            return buffers

        self.surface.draw_triangles(uniforms, buffers)
        logger.debug(
            "Rendered %d objects / %d triangles at %dx%d.",
            len(self.objects), buffers.triangle_count, width, height,
        )
        return buffers


__all__ = [
    "Renderer",
]
