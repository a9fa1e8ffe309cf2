"""
Shared pytest configuration.

Forces the non-interactive Agg backend so plotting and the software
surface work on headless machines.
"""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def output_tmp(tmp_path, monkeypatch):
    """
    Redirect the output/frames directories into a temporary directory.
    """
    from puzzlegeom.utils import io

    frames = tmp_path / "output" / "frames"
    monkeypatch.setattr(io, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(io, "FRAMES_DIR", frames)
    return frames
