"""
Utility helpers for the puzzlegeom toolkit.

This package holds small helpers that don't naturally belong in the
geometry modules or the renderer:

- Logging setup for scripts (`log.py`)
- Output paths and PNG saving for frames and pixel maps (`io.py`)
- matplotlib plots of ranges, boxes, segments and pixel maps (`plotting.py`)

Keeping them here avoids cluttering the main modules and keeps imports tidy.
"""

__all__ = []
