"""
Minimal 3D rendering pipeline for puzzle visualizations.

- Scene objects and colors (`scene.py`)
- Camera and transform math (`camera.py`)
- Shading program (`shaders.py`)
- Drawing surfaces: moderngl GPU and matplotlib software (`surfaces.py`)
- Per-frame buffers and the `Renderer` itself (`frame.py`, `pipeline.py`)
- Palette-indexed 2D pixel grids (`pixel_map.py`)
"""

from .camera import Camera, light_direction, look_at, perspective
from .frame import FrameBuffers, FrameUniforms, flatten_objects
from .pipeline import Renderer
from .pixel_map import PixelMap
from .scene import RendererColor, RendererCuboid, RendererObject
from .surfaces import MatplotlibSurface, ModernGLSurface, RenderSurface

__all__ = [
    "Camera",
    "light_direction",
    "look_at",
    "perspective",
    "FrameBuffers",
    "FrameUniforms",
    "flatten_objects",
    "Renderer",
    "PixelMap",
    "RendererColor",
    "RendererCuboid",
    "RendererObject",
    "MatplotlibSurface",
    "ModernGLSurface",
    "RenderSurface",
]
