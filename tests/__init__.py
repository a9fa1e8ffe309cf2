"""
Test package for the puzzlegeom toolkit.

This directory collects unit and integration tests for the core modules:

- Vectors (`test_vector.py`)
- Ranges and range boxes (`test_interval.py`)
- Segment intersection (`test_segment.py`)
- GCD / LCM / linear systems (`test_numeric.py`)
- Renderer, camera and surfaces (`test_renderer.py`)
- Output and plotting helpers (`test_utils.py`)

You can run tests with:

    pytest
    # or
    python -m pytest

from the project root. Tests marked `integration` need an OpenGL context
and are skipped when none can be created.
"""

__all__ = []
