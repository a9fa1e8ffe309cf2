"""
I/O utilities for puzzlegeom visualizations.

This module centralizes output paths so that:
- Scripts and notebooks do *not* hard-code paths.
- Rendered frames end up in one place with consistent names.

Typical usage
-------------

    from puzzlegeom.utils.io import ensure_output_dirs, save_frame

    ensure_output_dirs()
    renderer.render()
    png_path = save_frame(renderer.surface)
    print("Wrote frame to:", png_path)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import datetime as dt
import logging

import numpy as np
from matplotlib import image as mpimg

from ..config import FRAMES_DIR, OUTPUT_DIR
from ..render.pixel_map import PixelMap
from ..render.surfaces import RenderSurface

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Directory helpers
# ---------------------------------------------------------------------------

def ensure_output_dirs() -> None:
    """
    Ensure that the output directories exist:

    - output/
    - output/frames/

    It is safe to call this repeatedly.
    """
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    FRAMES_DIR.mkdir(parents=True, exist_ok=True)


def get_frames_dir() -> Path:
    """
    Return the frames directory path (`output/frames/`), creating it if needed.
    """
    FRAMES_DIR.mkdir(parents=True, exist_ok=True)
    return FRAMES_DIR


def get_timestamped_frame_path(prefix: str = "frame", suffix: str = ".png") -> Path:
    """
    Build a timestamped frame path under `output/frames/`.

    Example output filename:
        frame_20261018_153045_123456.png
    """
    get_frames_dir()
    timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
    return FRAMES_DIR / f"{prefix}_{timestamp}{suffix}"


# ---------------------------------------------------------------------------
# Saving helpers
# ---------------------------------------------------------------------------

def save_image(pixels: np.ndarray, path: Optional[PathLike] = None, prefix: str = "frame") -> Path:
    """
    Save an RGBA / RGB pixel array (top row first) as PNG.

    Parameters
    ----------
    pixels:
        (H, W, 3) or (H, W, 4) uint8 array.
    path:
        Optional explicit output path. If None, a timestamped filename is
        created under `output/frames/`.
    prefix:
        Filename prefix when generating a timestamped path.

    Returns
    -------
    Path
        The path to the written PNG.
    """
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3|4) pixel array, got shape {arr.shape}.")

    if path is None:
        out_path = get_timestamped_frame_path(prefix=prefix)
    else:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)

    mpimg.imsave(out_path, arr)
    logger.info("Saved %dx%d image to %s", arr.shape[1], arr.shape[0], out_path)
    return out_path


def save_frame(surface: RenderSurface, path: Optional[PathLike] = None, prefix: str = "frame") -> Path:
    """
    Read the last frame from `surface` and save it as PNG.

    See `save_image` for the meaning of `path` and `prefix`.
    """
    return save_image(surface.read_pixels(), path=path, prefix=prefix)


def save_pixel_map(pixel_map: PixelMap, path: Optional[PathLike] = None, prefix: str = "pixelmap") -> Path:
    """
    Save a pixel map, scaled by its `pixel_size`, as PNG.

    See `save_image` for the meaning of `path` and `prefix`.
    """
    return save_image(pixel_map.to_rgba(scaled=True), path=path, prefix=prefix)


__all__ = [
    "ensure_output_dirs",
    "get_frames_dir",
    "get_timestamped_frame_path",
    "save_image",
    "save_frame",
    "save_pixel_map",
]
