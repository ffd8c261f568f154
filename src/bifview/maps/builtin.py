# src/bifview/maps/builtin.py
"""
Built-in one-parameter maps on the unit interval.

Each function has the (r, x) -> x' signature expected by the orbit
sampler.
"""

from __future__ import annotations
import math

from .base import MapSpec

__all__ = ["logistic", "sine", "tent", "LOGISTIC", "SINE", "TENT"]


def logistic(r, x):
    return r * x * (1.0 - x)


def sine(r, x):
    return r * math.sin(math.pi * x)


def tent(r, x):
    return r * min(x, 1.0 - x)


LOGISTIC = MapSpec(
    name="logistic",
    fn=logistic,
    curated=(
        (3.8483111, 3.8983999),
        (3.1, 4.0),
        (3.61211, 3.69299),
    ),
    aliases=("quadratic",),
    description="x' = r*x*(1-x)",
)

SINE = MapSpec(
    name="sine",
    fn=sine,
    curated=(
        (0.7, 1.0),
        (0.86, 0.92),
    ),
    description="x' = r*sin(pi*x)",
)

TENT = MapSpec(
    name="tent",
    fn=tent,
    curated=(
        (1.0, 2.0),
        (1.4, 1.6),
    ),
    description="x' = r*min(x, 1-x)",
)


# Auto-register on module import
def _auto_register():
    from .registry import register
    for spec in (LOGISTIC, SINE, TENT):
        register(spec)

_auto_register()
