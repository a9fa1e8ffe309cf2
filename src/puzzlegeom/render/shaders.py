"""
Shading program for the puzzlegeom renderer.

One fixed model, ambient + diffuse + specular with a single directional
light:

    d = clamp(dot(-light, n), 0, 1)
    h = normalize(-light - view)
    s = clamp(dot(n, h), 0, 1) ** SPECULAR_EXPONENT
    out = clamp(color * (AMBIENT + DIFFUSE * d + SPECULAR * s), 0, 1)

`VERTEX_SHADER` / `FRAGMENT_SHADER` are the GLSL sources compiled by GPU
surfaces. `shade` is the NumPy twin used by the software surface; both are
generated from the same constants in `puzzlegeom.config`.
"""

from __future__ import annotations

import numpy as np

from ..config import (
    AMBIENT_WEIGHT,
    DIFFUSE_WEIGHT,
    SPECULAR_EXPONENT,
    SPECULAR_WEIGHT,
)


# Attribute and uniform names shared by the GLSL program and the surfaces.
ATTRIBUTE_VERTEX = "vertex"
ATTRIBUTE_NORMAL = "normal"
ATTRIBUTE_COLOR = "color"
UNIFORM_PROJECTION = "projectionMatrix"
UNIFORM_MODEL_VIEW = "modelViewMatrix"
UNIFORM_VIEW = "view"
UNIFORM_LIGHT = "light"


VERTEX_SHADER = f"""
#version 330

in vec3 {ATTRIBUTE_VERTEX};
in vec3 {ATTRIBUTE_NORMAL};
in vec3 {ATTRIBUTE_COLOR};

uniform mat4 {UNIFORM_MODEL_VIEW};
uniform mat4 {UNIFORM_PROJECTION};

out vec3 vNormal;
out vec3 vColor;

void main() {{
    vNormal = {ATTRIBUTE_NORMAL};
    vColor = {ATTRIBUTE_COLOR};
    gl_Position = {UNIFORM_PROJECTION} * {UNIFORM_MODEL_VIEW} * vec4({ATTRIBUTE_VERTEX}, 1.0);
}}
"""


FRAGMENT_SHADER = f"""
#version 330

uniform vec3 {UNIFORM_VIEW};
uniform vec3 {UNIFORM_LIGHT};

in vec3 vNormal;
in vec3 vColor;

out vec4 fragColor;

void main() {{
    float d = clamp(dot(-{UNIFORM_LIGHT}, vNormal), 0.0, 1.0);
    vec3 h = normalize(-{UNIFORM_LIGHT} - {UNIFORM_VIEW});
    float s = pow(clamp(dot(vNormal, h), 0.0, 1.0), {SPECULAR_EXPONENT:.1f});
    vec3 aColor = vColor * {AMBIENT_WEIGHT:.4f};
    vec3 dColor = vColor * d * {DIFFUSE_WEIGHT:.4f};
    vec3 sColor = vColor * s * {SPECULAR_WEIGHT:.4f};
    fragColor = vec4(clamp(aColor + dColor + sColor, 0.0, 1.0), 1.0);
}}
"""


def shade(
    normals: np.ndarray,
    colors: np.ndarray,
    view: np.ndarray,
    light: np.ndarray,
) -> np.ndarray:
    """
    Evaluate the fragment shader for a batch of fragments.

    Parameters
    ----------
    normals:
        (N, 3) surface normals.
    colors:
        (N, 3) base colors in [0, 1].
    view, light:
        (3,) unit view and light directions.

    Returns
    -------
    np.ndarray
        (N, 4) RGBA colors; alpha is always 1.
    """
    normals = np.atleast_2d(np.asarray(normals, dtype=float))
    colors = np.atleast_2d(np.asarray(colors, dtype=float))
    light = np.asarray(light, dtype=float)
    view = np.asarray(view, dtype=float)

    diffuse = np.clip(normals @ -light, 0.0, 1.0)

    half = -light - view
    half_len = np.linalg.norm(half)
    if half_len > 0.0:
        half = half / half_len
    specular = np.clip(normals @ half, 0.0, 1.0) ** SPECULAR_EXPONENT

    weight = AMBIENT_WEIGHT + DIFFUSE_WEIGHT * diffuse + SPECULAR_WEIGHT * specular
    rgb = np.clip(colors * weight[:, None], 0.0, 1.0)
    alpha = np.ones((rgb.shape[0], 1), dtype=float)
    return np.hstack([rgb, alpha])


__all__ = [
    "ATTRIBUTE_VERTEX",
    "ATTRIBUTE_NORMAL",
    "ATTRIBUTE_COLOR",
    "UNIFORM_PROJECTION",
    "UNIFORM_MODEL_VIEW",
    "UNIFORM_VIEW",
    "UNIFORM_LIGHT",
    "VERTEX_SHADER",
    "FRAGMENT_SHADER",
    "shade",
]
