# src/bifview/maps/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Tuple

__all__ = ["MapFn", "MapSpec"]

# f(parameter, state) -> next state
MapFn = Callable[[float, float], float]


@dataclass(frozen=True)
class MapSpec:
    """
    One-parameter, one-dimensional map x_{n+1} = fn(r, x_n).

    `curated` lists (param_min, param_max) windows known to show
    period-doubling or chaotic structure; viewports are drawn from it.
    """
    name: str
    fn: MapFn
    curated: Tuple[Tuple[float, float], ...]
    state_range: Tuple[float, float] = (0.0, 1.0)
    aliases: Tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.curated:
            raise ValueError(f"Map '{self.name}' needs at least one curated parameter range.")
        for lo, hi in self.curated:
            if not lo < hi:
                raise ValueError(f"Map '{self.name}': curated range ({lo}, {hi}) is empty.")
        lo, hi = self.state_range
        if not lo < hi:
            raise ValueError(f"Map '{self.name}': state range ({lo}, {hi}) is empty.")
