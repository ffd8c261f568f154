# src/bifview/runtime/__init__.py
from __future__ import annotations

from .sampler import orbit, orbit_length, INITIAL_STATE, TRANSIENT_LENGTH, OBSERVED_LENGTH
from .viewport import Viewport, derive_step, choose_viewport

__all__ = [
    "orbit", "orbit_length", "INITIAL_STATE", "TRANSIENT_LENGTH", "OBSERVED_LENGTH",
    "Viewport", "derive_step", "choose_viewport",
]
