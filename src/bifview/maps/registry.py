# src/bifview/maps/registry.py
from __future__ import annotations
from typing import Dict

from bifview.errors import UnknownMapError
from .base import MapSpec

__all__ = ["register", "get_map", "registry", "canonical_names"]

# name -> spec instance
_registry: Dict[str, MapSpec] = {}

def register(spec: MapSpec) -> None:
    """
    Register a map spec by its name and aliases.
    Enforces uniqueness of the canonical name; aliases may overlap only
    if they point to the same spec instance.
    """
    name = spec.name
    if name in _registry and _registry[name] is not spec:
        raise ValueError(f"Map '{name}' already registered with a different spec.")
    _registry[name] = spec

    for alias in spec.aliases:
        if alias in _registry and _registry[alias] is not spec:
            raise ValueError(f"Alias '{alias}' already registered for a different spec.")
        _registry[alias] = spec

def get_map(name: str | MapSpec) -> MapSpec:
    """
    Return the registered spec for 'name' or raise UnknownMapError.
    A MapSpec passes through unchanged.
    """
    if isinstance(name, MapSpec):
        return name
    try:
        return _registry[name]
    except KeyError:
        raise UnknownMapError(name, canonical_names()) from None

def canonical_names() -> list[str]:
    return sorted({spec.name for spec in _registry.values()})

def registry() -> Dict[str, MapSpec]:
    """
    Read-only-ish view (do not mutate externally).
    """
    return dict(_registry)
