# src/bifview/maps/__init__.py
from __future__ import annotations

from .base import MapFn, MapSpec
from .registry import register, get_map, registry, canonical_names
from .builtin import logistic, sine, tent, LOGISTIC, SINE, TENT

__all__ = [
    "MapFn", "MapSpec",
    "register", "get_map", "registry", "canonical_names",
    "logistic", "sine", "tent", "LOGISTIC", "SINE", "TENT",
]
