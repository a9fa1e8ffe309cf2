"""
Tests for puzzlegeom.render

These tests focus on:
- Scene object validation and cuboid geometry
- Camera / projection / light math
- The renderer's per-frame buffers, with and without a surface
- The matplotlib software surface producing an image
- The moderngl surface (integration, skipped without an OpenGL context)
"""

from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np
import pytest

from puzzlegeom.config import DEFAULT_VIEWPORT
from puzzlegeom.errors import DegenerateVectorError, InvalidSceneObjectError, SurfaceError
from puzzlegeom.render import (
    Camera,
    FrameBuffers,
    FrameUniforms,
    MatplotlibSurface,
    Renderer,
    RendererColor,
    RendererCuboid,
    RendererObject,
    RenderSurface,
    flatten_objects,
    light_direction,
    look_at,
    perspective,
)
from puzzlegeom.render.shaders import FRAGMENT_SHADER, VERTEX_SHADER, shade
from puzzlegeom.vector import Vector3D


GREEN = RendererColor(0.0, 0.66, 0.0)


class RecordingSurface(RenderSurface):
    """
    Helper: a surface that records every call instead of drawing.
    """

    def __init__(self, width: int = 64, height: int = 32) -> None:
        super().__init__(width, height)
        self.shaders: Tuple[str, str] = ("", "")
        self.frames: List[Tuple[int, int]] = []
        self.draws: List[Tuple[FrameUniforms, FrameBuffers]] = []

    def initialize(self, vertex_shader: str, fragment_shader: str) -> None:
        self.shaders = (vertex_shader, fragment_shader)
        self.ready = True

    def begin_frame(self, width: int, height: int) -> None:
        self._require_ready()
        self.frames.append((width, height))

    def draw_triangles(self, uniforms: FrameUniforms, buffers: FrameBuffers) -> None:
        self._require_ready()
        self.draws.append((uniforms, buffers))
        self.last_vertex_count = buffers.vertex_count
        self.frames_drawn += 1

    def read_pixels(self) -> np.ndarray:
        return np.zeros((self.height, self.width, 4), dtype=np.uint8)


def _outside_camera() -> Camera:
    return Camera(
        position=Vector3D(4.0, 3.0, 5.0),
        target=Vector3D(0.5, 0.5, 0.5),
        up=Vector3D(0.0, 0.0, 1.0),
    )


# ---------------------------------------------------------------------------
# Scene objects
# ---------------------------------------------------------------------------

def test_color_components_must_be_in_unit_range():
    assert GREEN.as_tuple() == (0.0, 0.66, 0.0)
    with pytest.raises(InvalidSceneObjectError):
        RendererColor(1.5, 0.0, 0.0)
    with pytest.raises(InvalidSceneObjectError):
        RendererColor(0.0, -0.1, 0.0)


def test_object_vertex_count_must_be_multiple_of_three():
    v = Vector3D(0.0, 0.0, 0.0)
    with pytest.raises(InvalidSceneObjectError):
        RendererObject(vertices=[v] * 4, normals=[v] * 4, color=GREEN)


def test_object_needs_one_normal_per_vertex():
    v = Vector3D(0.0, 0.0, 1.0)
    with pytest.raises(InvalidSceneObjectError):
        RendererObject(vertices=[v] * 3, normals=[v], color=GREEN)


def test_object_vertex_lists_cannot_be_extended_in_place():
    cube = RendererCuboid(1.0, 1.0, 1.0, GREEN)
    assert isinstance(cube.vertices, tuple)
    assert isinstance(cube.normals, tuple)
    with pytest.raises(AttributeError):
        cube.vertices.extend([Vector3D(0.0, 0.0, 0.0)] * 3)


def test_reassigned_vertices_rejected_at_render():
    cube = RendererCuboid(1.0, 1.0, 1.0, GREEN)
    # Still a multiple of 3, but one triangle more than there are normals
    cube.vertices = list(cube.vertices) + [Vector3D(0.0, 0.0, 0.0)] * 3

    renderer = Renderer()
    renderer.add_object(cube)
    with pytest.raises(InvalidSceneObjectError):
        renderer.render()
    with pytest.raises(InvalidSceneObjectError):
        flatten_objects([cube])


def test_cuboid_has_twelve_triangles():
    cube = RendererCuboid(1.0, 2.0, 3.0, GREEN)
    assert len(cube.vertices) == 36
    assert len(cube.normals) == 36
    assert cube.triangle_count == 12
    assert cube.size == Vector3D(1.0, 2.0, 3.0)
    assert cube.origin == Vector3D(0.0, 0.0, 0.0)


def test_cuboid_triangles_wind_toward_their_normals():
    cube = RendererCuboid(2.0, 3.0, 4.0, GREEN)
    centre = np.array([1.0, 1.5, 2.0])

    for i in range(0, 36, 3):
        a, b, c = (cube.vertices[i + k].to_array() for k in range(3))
        normal = cube.normals[i].to_array()

        # Same normal on all three vertices of a triangle
        assert cube.normals[i] == cube.normals[i + 1] == cube.normals[i + 2]
        # Counter-clockwise seen from outside
        assert np.dot(np.cross(b - a, c - a), normal) > 0
        # Outward facing
        assert np.dot((a + b + c) / 3.0 - centre, normal) > 0


def test_cuboid_covers_every_face_twice():
    cube = RendererCuboid(1.0, 1.0, 1.0, GREEN)
    normals = [tuple(n) for n in cube.normals]
    for axis_normal in [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]:
        assert normals.count(tuple(float(c) for c in axis_normal)) == 6


# ---------------------------------------------------------------------------
# Camera math
# ---------------------------------------------------------------------------

def test_perspective_matrix_entries():
    m = perspective(math.radians(90.0), 2.0, 1.0, 10.0)
    assert m[0, 0] == pytest.approx(0.5)
    assert m[1, 1] == pytest.approx(1.0)
    assert m[2, 2] == pytest.approx(-11.0 / 9.0)
    assert m[2, 3] == pytest.approx(-20.0 / 9.0)
    assert m[3, 2] == -1.0
    assert m[3, 3] == 0.0


def test_perspective_maps_clip_planes_to_ndc_bounds():
    near, far = 0.5, 20.0
    m = perspective(math.radians(45.0), 1.0, near, far)
    for z, expected in ((-near, -1.0), (-far, 1.0)):
        clip = m @ np.array([0.0, 0.0, z, 1.0])
        assert clip[2] / clip[3] == pytest.approx(expected)


def test_look_at_places_target_on_negative_z():
    eye = Vector3D(3.0, -2.0, 5.0)
    target = Vector3D(1.0, 1.0, 1.0)
    m = look_at(eye, target, Vector3D(0.0, 0.0, 1.0))

    eye_view = m @ np.array([3.0, -2.0, 5.0, 1.0])
    target_view = m @ np.array([1.0, 1.0, 1.0, 1.0])
    distance = target.subtract(eye).length()

    assert np.allclose(eye_view[:3], 0.0)
    assert np.allclose(target_view[:3], [0.0, 0.0, -distance])
    # Rotation part is orthonormal
    assert np.allclose(m[:3, :3] @ m[:3, :3].T, np.identity(3))


def test_look_at_same_eye_and_target_is_identity():
    p = Vector3D(2.0, 2.0, 2.0)
    assert np.array_equal(look_at(p, p, Vector3D(0.0, 0.0, 1.0)), np.identity(4))


def test_light_direction_formula():
    view = Vector3D(0.0, 0.0, -1.0)
    up = Vector3D(0.0, 1.0, 0.0)
    light = light_direction(view, up)
    # view + up - view x up = (0, 1, -1) - (1, 0, 0)
    expected = Vector3D(-1.0, 1.0, -1.0).normalize()
    assert np.allclose(light.to_array(), expected.to_array())
    assert light.length() == pytest.approx(1.0)


def test_default_camera():
    camera = Camera()
    view = camera.view_direction()
    assert np.allclose(view.to_array(), -np.ones(3) / math.sqrt(3.0))
    assert camera.up.length() == pytest.approx(1.0)
    assert camera.light_direction().length() == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# Shading
# ---------------------------------------------------------------------------

def test_shade_lit_face_brighter_than_ambient():
    light = np.array([0.0, 0.0, -1.0])
    view = np.array([0.0, 0.0, -1.0])
    normals = np.array([[0.0, 0.0, 1.0], [0.0, 0.0, -1.0]])
    colors = np.array([[1.0, 1.0, 1.0], [1.0, 1.0, 1.0]])

    rgba = shade(normals, colors, view, light)
    assert rgba.shape == (2, 4)
    assert np.allclose(rgba[:, 3], 1.0)
    # Facing the light: ambient + full diffuse + full specular
    assert np.allclose(rgba[0, :3], 1.0)
    # Facing away: ambient only
    assert np.allclose(rgba[1, :3], 0.2)


def test_shader_sources_use_attribute_names():
    for name in ("vertex", "normal", "color", "projectionMatrix", "modelViewMatrix"):
        assert name in VERTEX_SHADER
    for name in ("view", "light"):
        assert name in FRAGMENT_SHADER


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

def test_flatten_objects_applies_origin_and_color():
    cube = RendererCuboid(1.0, 1.0, 1.0, GREEN)
    cube.origin = Vector3D(10.0, 0.0, -5.0)
    buffers = flatten_objects([cube])

    positions = buffers.vertices.reshape(-1, 3)
    assert buffers.vertex_count == 36
    assert positions[:, 0].min() == pytest.approx(10.0)
    assert positions[:, 2].max() == pytest.approx(-4.0)
    assert np.allclose(buffers.colors.reshape(-1, 3), [0.0, 0.66, 0.0])
    assert buffers.vertices.dtype == np.float32


def test_inert_renderer_computes_buffers_without_drawing():
    renderer = Renderer()
    assert renderer.is_inert
    renderer.add_object(RendererCuboid(1.0, 1.0, 1.0, GREEN))

    buffers = renderer.render()
    assert buffers.vertices.size == 108
    assert buffers.normals.size == 108
    assert buffers.colors.size == 108
    assert renderer.last_frame is buffers
    assert renderer.last_uniforms.width == DEFAULT_VIEWPORT[0]


def test_empty_scene_renders_nothing():
    surface = RecordingSurface()
    renderer = Renderer(surface=surface)
    buffers = renderer.render()
    assert buffers.vertex_count == 0
    assert surface.last_vertex_count == 0
    assert surface.frames == [(64, 32)]


def test_renderer_initializes_surface_and_draws_vertex_count():
    surface = RecordingSurface(80, 40)
    renderer = Renderer(surface=surface)
    assert surface.shaders == (VERTEX_SHADER, FRAGMENT_SHADER)

    renderer.add_object(RendererCuboid(1.0, 1.0, 1.0, GREEN))
    second = RendererCuboid(1.0, 2.0, 1.0, RendererColor(1.0, 0.0, 0.0))
    second.origin = Vector3D(3.0, 0.0, 0.0)
    renderer.add_object(second)

    renderer.render()
    uniforms, buffers = surface.draws[-1]

    assert surface.last_vertex_count == 72
    assert buffers.triangle_count == 24
    assert (uniforms.width, uniforms.height) == (80, 40)
    # Aspect ratio 2 in the projection
    assert uniforms.projection[1, 1] / uniforms.projection[0, 0] == pytest.approx(2.0)


def test_renderer_follows_surface_resize_and_camera_moves():
    surface = RecordingSurface(50, 50)
    renderer = Renderer(surface=surface, camera=_outside_camera())
    renderer.add_object(RendererCuboid(1.0, 1.0, 1.0, GREEN))

    renderer.render()
    first_view = renderer.last_uniforms.model_view.copy()

    surface.resize(100, 25)
    renderer.camera.position = Vector3D(-4.0, 3.0, 5.0)
    renderer.render()

    assert surface.frames == [(50, 50), (100, 25)]
    assert not np.allclose(first_view, renderer.last_uniforms.model_view)
    assert surface.frames_drawn == 2


def test_camera_on_target_raises():
    renderer = Renderer(camera=Camera(position=Vector3D(1.0, 1.0, 1.0), target=Vector3D(1.0, 1.0, 1.0)))
    with pytest.raises(DegenerateVectorError):
        renderer.render()


# ---------------------------------------------------------------------------
# Surfaces
# ---------------------------------------------------------------------------

def test_surface_rejects_bad_size():
    with pytest.raises(ValueError):
        MatplotlibSurface(0, 10)
    surface = MatplotlibSurface(10, 10)
    with pytest.raises(ValueError):
        surface.resize(10, -1)


def test_surface_used_before_initialize_raises():
    surface = MatplotlibSurface(20, 20)
    with pytest.raises(SurfaceError):
        surface.begin_frame(20, 20)


def test_matplotlib_surface_draws_cube():
    surface = MatplotlibSurface(200, 150)
    renderer = Renderer(surface=surface, camera=_outside_camera())
    renderer.add_object(RendererCuboid(1.0, 1.0, 1.0, GREEN))
    renderer.render()

    pixels = surface.read_pixels()
    assert pixels.shape == (150, 200, 4)
    assert pixels.dtype == np.uint8

    # Camera looks at the cube centre: middle pixel is cube, corner is background
    centre = pixels[75, 100]
    assert centre[3] == 255
    assert centre[1] > centre[0]
    assert pixels[0, 0, 3] == 0


def test_matplotlib_project_skips_triangles_behind_camera():
    surface = MatplotlibSurface(100, 100)
    renderer = Renderer(surface=surface, camera=_outside_camera())
    behind = RendererCuboid(1.0, 1.0, 1.0, GREEN)
    behind.origin = Vector3D(8.0, 6.0, 10.0)
    renderer.add_object(behind)
    renderer.add_object(RendererCuboid(1.0, 1.0, 1.0, GREEN))

    buffers = flatten_objects(renderer.objects)
    uniforms = renderer.frame_uniforms(100, 100)
    screen, depth, visible = surface.project(uniforms, buffers)

    assert screen.shape == (24, 3, 2)
    assert depth.shape == (24,)
    assert not visible[:12].any()
    assert visible[12:].all()


@pytest.mark.integration
def test_moderngl_surface_draws_cube():
    pytest.importorskip("moderngl")
    from puzzlegeom.render import ModernGLSurface

    surface = ModernGLSurface(64, 48)
    try:
        renderer = Renderer(surface=surface, camera=_outside_camera())
    except SurfaceError as exc:
        pytest.skip(f"No OpenGL context available: {exc}")

    try:
        renderer.add_object(RendererCuboid(1.0, 1.0, 1.0, GREEN))
        renderer.render()
        pixels = surface.read_pixels()

        assert pixels.shape == (48, 64, 4)
        assert surface.last_vertex_count == 36
        assert pixels[24, 32, 3] == 255
        assert pixels[24, 32, 1] > pixels[24, 32, 0]
        assert pixels[0, 0, 3] == 0
    finally:
        surface.release()
