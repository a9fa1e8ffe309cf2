"""
Drawing surfaces for the puzzlegeom renderer.

A surface is the capability the renderer draws into. It is injected into
`Renderer(surface=...)`; a renderer without one is valid and simply does
not draw, which is how tests and headless puzzle runs use it.

Two providers are available:

- `ModernGLSurface`:
    Offscreen OpenGL framebuffer through moderngl. Compiles the GLSL
    program from `puzzlegeom.render.shaders`, owns the vertex / normal /
    color GPU buffers and rewrites them completely every frame.
- `MatplotlibSurface`:
    Software path on a matplotlib Agg canvas. Applies the same matrices,
    shades each triangle with `shaders.shade` and draws the triangles back
    to front (painter's algorithm). Needs no GPU.

Both render into an RGBA image that `read_pixels` returns as a
(height, width, 4) uint8 array, top row first.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import logging

import numpy as np

from ..config import CLEAR_COLOR, CLEAR_DEPTH, DEFAULT_VIEWPORT
from ..errors import SurfaceError
from .frame import FrameBuffers, FrameUniforms
from .shaders import (
    ATTRIBUTE_COLOR,
    ATTRIBUTE_NORMAL,
    ATTRIBUTE_VERTEX,
    UNIFORM_LIGHT,
    UNIFORM_MODEL_VIEW,
    UNIFORM_PROJECTION,
    UNIFORM_VIEW,
    shade,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Capability
# ---------------------------------------------------------------------------

class RenderSurface(ABC):
    """
    Abstract drawing surface.

    Lifecycle: construct, `initialize` once (done by the renderer), then per
    frame `begin_frame` followed by `draw_triangles`.
    """

    def __init__(self, width: int = DEFAULT_VIEWPORT[0], height: int = DEFAULT_VIEWPORT[1]) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}.")
        self.width = int(width)
        self.height = int(height)
        self.ready = False
        self.frames_drawn = 0
        self.last_vertex_count = 0

    def size(self) -> Tuple[int, int]:
        """
        Current target size (width, height) in pixels.
        """
        return self.width, self.height

    def resize(self, width: int, height: int) -> None:
        """
        Change the target size; takes effect at the next `begin_frame`.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}.")
        self.width = int(width)
        self.height = int(height)

    def _require_ready(self) -> None:
        if not self.ready:
            raise SurfaceError(f"{type(self).__name__} used before initialize().")

    @abstractmethod
    def initialize(self, vertex_shader: str, fragment_shader: str) -> None:
        """
        Acquire the drawing context and compile the shading program.
        """

    @abstractmethod
    def begin_frame(self, width: int, height: int) -> None:
        """
        Resize the viewport to (width, height) and clear color and depth.
        """

    @abstractmethod
    def draw_triangles(self, uniforms: FrameUniforms, buffers: FrameBuffers) -> None:
        """
        Upload `buffers` and draw them as one triangle list.
        """

    @abstractmethod
    def read_pixels(self) -> np.ndarray:
        """
        Return the last frame as a (height, width, 4) uint8 RGBA array.
        """


# ---------------------------------------------------------------------------
# GPU surface
# ---------------------------------------------------------------------------

class ModernGLSurface(RenderSurface):
    """
    Offscreen OpenGL surface backed by moderngl.

    Parameters
    ----------
    width, height:
        Framebuffer size in pixels.
    ctx:
        Optional existing `moderngl.Context` (e.g. from a window). If None,
        a standalone context is created on `initialize`.
    """

    def __init__(
        self,
        width: int = DEFAULT_VIEWPORT[0],
        height: int = DEFAULT_VIEWPORT[1],
        ctx=None,
    ) -> None:
        super().__init__(width, height)
        self.ctx = ctx
        self._program = None
        self._vertex_buffer = None
        self._normal_buffer = None
        self._color_buffer = None
        self._vao = None
        self._fbo = None
        self._fbo_size: Optional[Tuple[int, int]] = None

    def initialize(self, vertex_shader: str, fragment_shader: str) -> None:
        # Imported here so the rest of the package works without an OpenGL stack.
        import moderngl

        if self.ctx is None:
            try:
                self.ctx = moderngl.create_standalone_context()
            except Exception as exc:
                raise SurfaceError("Could not create a standalone OpenGL context.") from exc

        ctx = self.ctx
        self._program = ctx.program(vertex_shader=vertex_shader, fragment_shader=fragment_shader)

        # Start with one vertex worth of storage; buffers are orphaned and
        # rewritten at their real size every frame.
        self._vertex_buffer = ctx.buffer(reserve=12)
        self._normal_buffer = ctx.buffer(reserve=12)
        self._color_buffer = ctx.buffer(reserve=12)
        self._vao = ctx.vertex_array(
            self._program,
            [
                (self._vertex_buffer, "3f", ATTRIBUTE_VERTEX),
                (self._normal_buffer, "3f", ATTRIBUTE_NORMAL),
                (self._color_buffer, "3f", ATTRIBUTE_COLOR),
            ],
        )

        ctx.enable(moderngl.DEPTH_TEST)
        ctx.depth_func = "<="
        self._ensure_framebuffer(self.width, self.height)

        self.ready = True
        logger.debug("ModernGL surface ready (%dx%d, %s).", self.width, self.height, ctx.info.get("GL_RENDERER"))

    def _ensure_framebuffer(self, width: int, height: int) -> None:
        if self._fbo is not None and self._fbo_size == (width, height):
            return
        if self._fbo is not None:
            self._fbo.release()
        self._fbo = self.ctx.simple_framebuffer((width, height), components=4)
        self._fbo_size = (width, height)

    def begin_frame(self, width: int, height: int) -> None:
        self._require_ready()
        self._ensure_framebuffer(width, height)
        self._fbo.use()
        self.ctx.viewport = (0, 0, width, height)
        self._fbo.clear(*CLEAR_COLOR, depth=CLEAR_DEPTH)

    def draw_triangles(self, uniforms: FrameUniforms, buffers: FrameBuffers) -> None:
        self._require_ready()

        program = self._program
        # OpenGL expects column-major matrices
        program[UNIFORM_PROJECTION].write(uniforms.projection.T.astype("f4").tobytes())
        program[UNIFORM_MODEL_VIEW].write(uniforms.model_view.T.astype("f4").tobytes())
        program[UNIFORM_VIEW].value = tuple(float(c) for c in uniforms.view)
        program[UNIFORM_LIGHT].value = tuple(float(c) for c in uniforms.light)

        count = buffers.vertex_count
        self.last_vertex_count = count
        self.frames_drawn += 1
        if count == 0:
            return

        for gpu_buffer, data in (
            (self._vertex_buffer, buffers.vertices),
            (self._normal_buffer, buffers.normals),
            (self._color_buffer, buffers.colors),
        ):
            payload = np.ascontiguousarray(data, dtype="f4").tobytes()
            gpu_buffer.orphan(len(payload))
            gpu_buffer.write(payload)

        import moderngl

        self._vao.render(moderngl.TRIANGLES, vertices=count)

    def read_pixels(self) -> np.ndarray:
        self._require_ready()
        width, height = self._fbo_size
        raw = self._fbo.read(components=4, alignment=1)
        image = np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 4)
        # OpenGL rows start at the bottom
        return image[::-1].copy()

    def release(self) -> None:
        """
        Free GPU resources. The surface must be re-initialized before reuse.
        """
        for resource in (self._vao, self._vertex_buffer, self._normal_buffer,
                         self._color_buffer, self._program, self._fbo):
            if resource is not None:
                resource.release()
        self._vao = self._program = self._fbo = None
        self._vertex_buffer = self._normal_buffer = self._color_buffer = None
        self._fbo_size = None
        self.ready = False


# ---------------------------------------------------------------------------
# Software surface
# ---------------------------------------------------------------------------

class MatplotlibSurface(RenderSurface):
    """
    Software surface drawing shaded triangles on a matplotlib Agg canvas.

    Shading is flat per triangle (mean of its vertex normals and colors).
    Triangles with any vertex behind the camera are skipped instead of
    being clipped against the near plane.

    Parameters
    ----------
    width, height:
        Canvas size in pixels.
    dpi:
        Resolution used to convert the pixel size into figure inches.
    """

    def __init__(
        self,
        width: int = DEFAULT_VIEWPORT[0],
        height: int = DEFAULT_VIEWPORT[1],
        dpi: float = 100.0,
    ) -> None:
        super().__init__(width, height)
        self.dpi = float(dpi)
        self.figure = None
        self.ax = None
        self._canvas = None

    def initialize(self, vertex_shader: str, fragment_shader: str) -> None:
        from matplotlib.backends.backend_agg import FigureCanvasAgg
        from matplotlib.figure import Figure

        # The GLSL sources are not compiled here; `shaders.shade` implements
        # the same fragment program.
        self.figure = Figure(figsize=(self.width / self.dpi, self.height / self.dpi), dpi=self.dpi)
        self._canvas = FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ready = True
        logger.debug("Matplotlib surface ready (%dx%d @ %.0f dpi).", self.width, self.height, self.dpi)

    def begin_frame(self, width: int, height: int) -> None:
        self._require_ready()
        self.figure.set_size_inches(width / self.dpi, height / self.dpi)

        ax = self.ax
        ax.clear()
        ax.set_xlim(0, width)
        ax.set_ylim(0, height)
        ax.set_axis_off()
        ax.patch.set_facecolor(CLEAR_COLOR)
        self.figure.patch.set_facecolor(CLEAR_COLOR)

    def project(self, uniforms: FrameUniforms, buffers: FrameBuffers) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Project every triangle to screen space.

        Returns
        -------
        (screen, depth, visible)
            screen: (T, 3, 2) pixel coordinates, origin bottom-left.
            depth: (T,) mean NDC depth of each triangle.
            visible: (T,) bool, False for triangles reaching behind the camera.
        """
        positions = buffers.vertices.reshape(-1, 3).astype(float)
        homogeneous = np.hstack([positions, np.ones((positions.shape[0], 1))])
        clip = homogeneous @ (uniforms.projection @ uniforms.model_view).T
        clip = clip.reshape(-1, 3, 4)

        w = clip[..., 3]
        visible = np.all(w > 0.0, axis=1)
        safe_w = np.where(w > 0.0, w, 1.0)
        ndc = clip[..., :3] / safe_w[..., None]

        screen = np.empty(ndc.shape[:2] + (2,), dtype=float)
        screen[..., 0] = (ndc[..., 0] * 0.5 + 0.5) * uniforms.width
        screen[..., 1] = (ndc[..., 1] * 0.5 + 0.5) * uniforms.height
        depth = ndc[..., 2].mean(axis=1)
        return screen, depth, visible

    def draw_triangles(self, uniforms: FrameUniforms, buffers: FrameBuffers) -> None:
        from matplotlib.collections import PolyCollection

        self._require_ready()
        count = buffers.vertex_count
        self.last_vertex_count = count
        self.frames_drawn += 1
        if count == 0:
            return

        screen, depth, visible = self.project(uniforms, buffers)

        normals = buffers.normals.reshape(-1, 3, 3).astype(float).mean(axis=1)
        colors = buffers.colors.reshape(-1, 3, 3).astype(float).mean(axis=1)
        rgba = shade(normals, colors, uniforms.view, uniforms.light)

        # Far triangles first (larger NDC depth is farther away)
        order = np.argsort(-depth[visible], kind="stable")
        polygons = screen[visible][order]
        facecolors = rgba[visible][order]

        self.ax.add_collection(
            PolyCollection(polygons, facecolors=facecolors, edgecolors="none", antialiased=False)
        )
        logger.debug("Software surface drew %d of %d triangles.", len(polygons), len(screen))

    def read_pixels(self) -> np.ndarray:
        self._require_ready()
        self._canvas.draw()
        return np.asarray(self._canvas.buffer_rgba()).copy()


__all__ = [
    "RenderSurface",
    "ModernGLSurface",
    "MatplotlibSurface",
]
