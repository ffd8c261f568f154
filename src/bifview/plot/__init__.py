# src/bifview/plot/__init__.py
from __future__ import annotations

from . import _theme as theme
from . import _export as export
from .animation import bifurcation_animate, BifurcationAnimation

__all__ = [
    "theme",
    "export",
    "bifurcation_animate",
    "BifurcationAnimation",
]
