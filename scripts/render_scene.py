#!/usr/bin/env python
"""
CLI helper to render a demo scene of cuboids and save it as PNG.

This script is a thin wrapper around the library entry points:

- puzzlegeom.render.Renderer
- puzzlegeom.utils.io.save_frame

Typical usage from the project root
-----------------------------------

    python scripts/render_scene.py
    # or
    python scripts/render_scene.py --grid 5
    python scripts/render_scene.py --surface moderngl --width 800 --height 600
    python scripts/render_scene.py --output output/frames/demo.png

The script automatically adds `src/` to PYTHONPATH so that it can import the
`puzzlegeom` package without requiring installation.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import logging
import sys
from typing import Optional, List


def _ensure_src_on_path() -> Path:
    """
    Ensure that <project_root>/src is on sys.path and return project_root.

    Assumes this file lives in <project_root>/scripts/render_scene.py.
    """
    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))
    return project_root


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a grid of shaded cuboids with the puzzlegeom renderer.",
    )
    parser.add_argument(
        "--surface",
        choices=("matplotlib", "moderngl"),
        default="matplotlib",
        help="Drawing surface: matplotlib (software, always available) or moderngl (headless GPU).",
    )
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels.")
    parser.add_argument("--height", type=int, default=300, help="Image height in pixels.")
    parser.add_argument(
        "--grid",
        type=int,
        default=3,
        help="Number of cuboids along each side of the square grid.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help=(
            "Optional output path for the PNG. "
            "If omitted, a timestamped name will be created under output/frames/."
        ),
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    project_root = _ensure_src_on_path()

    # Imports done after path configuration
    from puzzlegeom.render import (
        MatplotlibSurface,
        ModernGLSurface,
        Renderer,
        RendererColor,
        RendererCuboid,
    )
    from puzzlegeom.errors import SurfaceError
    from puzzlegeom.utils.io import save_frame
    from puzzlegeom.utils.log import setup_logging
    from puzzlegeom.vector import Vector3D

    args = _parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.grid < 1:
        raise SystemExit("--grid must be at least 1")

    if args.surface == "moderngl":
        surface = ModernGLSurface(args.width, args.height)
    else:
        surface = MatplotlibSurface(args.width, args.height)

    logger.info("Project root: %s", project_root)
    logger.info("Surface: %s (%dx%d)", args.surface, args.width, args.height)

    try:
        renderer = Renderer(surface=surface)
    except SurfaceError as exc:
        raise SystemExit(f"[render_scene] {exc} Try --surface matplotlib.") from exc

    n = args.grid
    for i in range(n):
        for j in range(n):
            height = 1.0 + (i + j) % 3
            color = RendererColor(
                0.2 + 0.6 * i / max(n - 1, 1),
                0.66,
                0.2 + 0.6 * j / max(n - 1, 1),
            )
            cube = RendererCuboid(0.8, 0.8, height, color)
            cube.origin = Vector3D(float(i), float(j), 0.0)
            renderer.add_object(cube)

    centre = (n - 1) / 2.0
    renderer.camera.target = Vector3D(centre, centre, 1.0)
    renderer.camera.position = Vector3D(centre + 1.5 * n, centre - 1.5 * n, 1.2 * n + 2.0)
    renderer.camera.up = Vector3D(0.0, 0.0, 1.0)

    buffers = renderer.render()
    logger.info("Drew %d triangles from %d objects.", buffers.triangle_count, len(renderer.objects))

    output_path = Path(args.output) if args.output is not None else None
    png_path = save_frame(surface, path=output_path, prefix="scene")
    logger.info("Frame written to: %s", png_path)

    if isinstance(surface, ModernGLSurface):
        surface.release()


if __name__ == "__main__":
    main()
