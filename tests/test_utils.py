"""
Tests for puzzlegeom.utils (io, log, plotting).
"""

from __future__ import annotations

import logging

import matplotlib.pyplot as plt
import numpy as np
import pytest

from puzzlegeom.interval import Range, Range2D
from puzzlegeom.render import MatplotlibSurface, Renderer, RendererColor, RendererCuboid
from puzzlegeom.segment import LineSegment2D
from puzzlegeom.utils.io import get_timestamped_frame_path, save_frame, save_image
from puzzlegeom.utils.log import PACKAGE_LOGGER, setup_logging
from puzzlegeom.utils.plotting import (
    find_all_intersections,
    plot_range2d,
    plot_ranges,
    plot_segments,
)
from puzzlegeom.vector import Vector2D


# ---------------------------------------------------------------------------
# io
# ---------------------------------------------------------------------------

def test_timestamped_frame_path_lands_in_frames_dir(output_tmp):
    path = get_timestamped_frame_path(prefix="scene")
    assert path.parent == output_tmp
    assert path.name.startswith("scene_")
    assert path.suffix == ".png"
    assert output_tmp.is_dir()


def test_save_image_writes_png(tmp_path):
    pixels = np.zeros((8, 12, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[2:6, 3:9, 1] = 200

    out = save_image(pixels, path=tmp_path / "nested" / "img.png")
    assert out.exists()

    loaded = plt.imread(out)
    assert loaded.shape[:2] == (8, 12)


def test_save_image_rejects_bad_shape(tmp_path):
    with pytest.raises(ValueError):
        save_image(np.zeros((4, 4)), path=tmp_path / "bad.png")


def test_save_frame_uses_timestamped_default(output_tmp):
    surface = MatplotlibSurface(40, 30)
    renderer = Renderer(surface=surface)
    renderer.add_object(RendererCuboid(0.2, 0.2, 0.2, RendererColor(1.0, 0.0, 0.0)))
    renderer.render()

    out = save_frame(surface, prefix="cube")
    assert out.parent == output_tmp
    assert out.name.startswith("cube_")
    assert out.exists()


# ---------------------------------------------------------------------------
# log
# ---------------------------------------------------------------------------

def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logging(logging.DEBUG, log_file=log_file)
    logger = setup_logging(logging.DEBUG, log_file=log_file)

    assert logger.name == PACKAGE_LOGGER
    assert len(logger.handlers) == 2

    logging.getLogger("puzzlegeom.render.pipeline").debug("hello from the renderer")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the renderer" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


# ---------------------------------------------------------------------------
# plotting
# ---------------------------------------------------------------------------

def test_find_all_intersections():
    segments = [
        LineSegment2D(Vector2D(0, 0), Vector2D(2, 2)),
        LineSegment2D(Vector2D(0, 2), Vector2D(2, 0)),
        LineSegment2D(Vector2D(5, 5), Vector2D(6, 5)),
    ]
    hits = find_all_intersections(segments)
    assert len(hits) == 1
    assert hits[0].x == pytest.approx(1.0)
    assert hits[0].y == pytest.approx(1.0)


def test_plot_helpers_return_axes():
    ranges = [Range(1, 3), Range(2, 5), Range(10, 12)]
    ax = plot_ranges(ranges, title="input")
    assert len(ax.get_yticks()) == 3
    assert ax.get_title() == "input"

    ax = plot_range2d(
        [Range2D.from_bounds(0, 2, 0, 2)],
        points=[Vector2D(1, 1), Vector2D(3, 3)],
    )
    assert len(ax.patches) == 1
    assert len(ax.lines) == 2

    ax = plot_segments(
        [
            LineSegment2D(Vector2D(0, 0), Vector2D(2, 2)),
            LineSegment2D(Vector2D(0, 2), Vector2D(2, 0)),
        ]
    )
    # Two segments plus one intersection marker line
    assert len(ax.lines) == 3
    plt.close("all")


@pytest.mark.parametrize("fn", [plot_ranges, plot_range2d, plot_segments])
def test_plot_helpers_reject_empty_input(fn):
    with pytest.raises(ValueError):
        fn([])
