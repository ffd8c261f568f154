# src/bifview/render/__init__.py
from __future__ import annotations

from .raster import Scheme, FILL_COLORS, POINT_WIDTH, ColorState, PointRecorder, RasterSink
from .kernels import configure_kernels
from .scheduler import (
    SweepStatus, RUNNING, DONE, SweepState, SweepScheduler,
    advance, batch_size_for, curated_restart, RestartFn,
)

__all__ = [
    "Scheme", "FILL_COLORS", "POINT_WIDTH", "ColorState", "PointRecorder", "RasterSink",
    "configure_kernels",
    "SweepStatus", "RUNNING", "DONE", "SweepState", "SweepScheduler",
    "advance", "batch_size_for", "curated_restart", "RestartFn",
]
