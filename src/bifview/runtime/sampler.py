# src/bifview/runtime/sampler.py
"""
Orbit sampling for a single parameter value.

The full trajectory is yielded, transient included: early iterates
paint as faint streaks leading into the attractor. Pass
``skip_transient=True`` to drop them (conventional diagram).
"""

from __future__ import annotations
from typing import Iterator

from bifview.maps.base import MapFn

__all__ = ["orbit", "orbit_length", "INITIAL_STATE", "TRANSIENT_LENGTH", "OBSERVED_LENGTH"]

INITIAL_STATE = 0.5
TRANSIENT_LENGTH = 50
OBSERVED_LENGTH = 10


def orbit_length(transient: int = TRANSIENT_LENGTH, observed: int = OBSERVED_LENGTH, *, skip_transient: bool = False) -> int:
    """Number of values `orbit` yields for the given lengths."""
    return observed if skip_transient else transient + observed


def orbit(
    fn: MapFn,
    r: float,
    x0: float = INITIAL_STATE,
    *,
    transient: int = TRANSIENT_LENGTH,
    observed: int = OBSERVED_LENGTH,
    skip_transient: bool = False,
) -> Iterator[float]:
    """
    Lazily iterate x_{n+1} = fn(r, x_n) starting from x0.

    Yields x_1 .. x_N with N = transient + observed (x0 itself is not
    yielded). Each call returns a fresh, forward-only generator.
    """
    if transient < 0 or observed < 0:
        raise ValueError("transient and observed must be non-negative")
    x = x0
    for i in range(transient + observed):
        x = fn(r, x)
        if skip_transient and i < transient:
            continue
        yield x
