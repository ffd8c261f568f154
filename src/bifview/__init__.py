# src/bifview/__init__.py
from __future__ import annotations

from .errors import BifviewError, ConfigError, ViewportError, UnknownMapError
from .config import RenderConfig, load_config
from .maps import MapSpec, register, get_map, registry
from .runtime import orbit, Viewport, choose_viewport
from .render import (
    SweepStatus, RUNNING, DONE, SweepState, SweepScheduler, advance,
    RasterSink, ColorState, PointRecorder,
)
from .utils.scaling import scale
from ._setup import setup

__all__ = [
    # Core entry points
    "setup", "SweepScheduler", "RasterSink",
    # Building blocks
    "orbit", "scale", "Viewport", "choose_viewport", "SweepState", "advance",
    "ColorState", "PointRecorder",
    # Status codes
    "SweepStatus", "RUNNING", "DONE",
    # Maps
    "MapSpec", "register", "get_map", "registry",
    # Config / errors
    "RenderConfig", "load_config",
    "BifviewError", "ConfigError", "ViewportError", "UnknownMapError",
]
