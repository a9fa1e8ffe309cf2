"""
Palette-indexed pixel grids for 2D puzzle visualizations.

A `PixelMap` is a (height, width) grid of integer color indexes. Index 0
is always transparent; every other index looks up a color in `palette`.
Maps are headless: they hold the index grid only and produce an RGBA image
on request, which the caller can save (`puzzlegeom.utils.io.save_pixel_map`)
or draw (`puzzlegeom.utils.plotting.plot_pixel_map`).

Typical usage
-------------

    pmap = PixelMap(10, 6, palette=["black", "tab:orange"])
    for x in range(10):
        pmap.draw_pixel(x, 0, 1)
        pmap.draw_pixel(x, 5, 1)
    pmap.fill(4, 3, 2)
    rgba = pmap.to_rgba()
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Sequence, Tuple

import numpy as np
from matplotlib import colors as mcolors

from ..config import PIXEL_MAP_MAX_SCREEN


class PixelMap:
    """
    Grid of palette indexes with a fixed size.

    Parameters
    ----------
    width, height:
        Grid size in map pixels.
    palette:
        Colors for indexes 1, 2, ... in any format matplotlib accepts
        ("red", "#ff8800", (0.2, 0.4, 0.6), ...).

    Attributes
    ----------
    image:
        (height, width) int array of color indexes.
    pixel_size:
        Screen pixels per map pixel, the largest integer that keeps the
        map within `PIXEL_MAP_MAX_SCREEN` (at least 1).
    """

    def __init__(self, width: int, height: int, palette: Optional[Sequence] = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Pixel map size must be positive, got {width}x{height}.")
        self.width = int(width)
        self.height = int(height)
        self.palette = list(palette) if palette is not None else []
        self.image = np.zeros((self.height, self.width), dtype=int)

        max_w, max_h = PIXEL_MAP_MAX_SCREEN
        self.pixel_size = max(1, min(max_w // self.width, max_h // self.height))

    def clear(self) -> None:
        """
        Reset every pixel to index 0.
        """
        self.image.fill(0)

    def draw(self, image) -> None:
        """
        Replace the whole grid.

        Parameters
        ----------
        image:
            Sequence of rows (top row first), each a sequence of color
            indexes, or an equivalent (height, width) array.
        """
        arr = np.asarray(image, dtype=int)
        if arr.shape != self.image.shape:
            raise ValueError(
                f"Expected a {self.height}x{self.width} image, got shape {arr.shape}."
            )
        self.image[...] = arr

    def draw_pixel(self, x: int, y: int, color_index: int) -> None:
        self._require_inside(x, y)
        self.image[y, x] = color_index

    def fill(self, x: int, y: int, color_index: int) -> int:
        """
        Flood-fill the 4-connected region of equal color around (x, y).

        Returns
        -------
        int
            Number of pixels recolored.
        """
        self._require_inside(x, y)
        old_index = self.image[y, x]
        if old_index == color_index:
            return 0

        queue: Deque[Tuple[int, int]] = deque([(x, y)])
        self.image[y, x] = color_index
        count = 1
        while queue:
            cx, cy = queue.popleft()
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nx = cx + dx
                ny = cy + dy
                if nx < 0 or ny < 0 or nx >= self.width or ny >= self.height:
                    continue
                if self.image[ny, nx] != old_index:
                    continue
                self.image[ny, nx] = color_index
                count += 1
                queue.append((nx, ny))
        return count

    def count(self, color_index: int) -> int:
        return int(np.count_nonzero(self.image == color_index))

    def to_rgba(self, scaled: bool = True) -> np.ndarray:
        """
        Render the grid as a uint8 RGBA image, top row first.

        Parameters
        ----------
        scaled:
            If True, each map pixel becomes a `pixel_size` square block.

        Raises
        ------
        ValueError
            If the grid uses an index the palette has no color for.
        """
        used = int(self.image.max()) if self.image.size else 0
        if int(self.image.min()) < 0 or used > len(self.palette):
            raise ValueError(
                f"Pixel map uses color indexes up to {used}, "
                f"palette only defines {len(self.palette)}."
            )

        lookup = np.zeros((len(self.palette) + 1, 4), dtype=np.uint8)
        if self.palette:
            lookup[1:] = np.round(mcolors.to_rgba_array(self.palette) * 255).astype(np.uint8)

        rgba = lookup[self.image]
        if scaled and self.pixel_size > 1:
            rgba = np.repeat(np.repeat(rgba, self.pixel_size, axis=0), self.pixel_size, axis=1)
        return rgba

    def _require_inside(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} map.")


__all__ = [
    "PixelMap",
]
