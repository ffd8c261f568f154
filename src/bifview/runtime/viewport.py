# src/bifview/runtime/viewport.py
from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Sequence, Tuple

import numpy as np

from bifview.errors import ViewportError
from bifview.maps.base import MapSpec
from bifview.utils.scaling import scale

__all__ = ["Viewport", "derive_step", "choose_viewport", "STEP_PIXELS"]

# Parameter advance per sub-step, in raster pixels.
STEP_PIXELS = 0.5


def derive_step(width: float, param_min: float, param_max: float, *, pixels: float = STEP_PIXELS) -> float:
    """Parameter span covered by `pixels` raster pixels on a surface `width` wide."""
    if not width > 0:
        raise ViewportError(f"raster width must be positive; got {width}")
    return scale(0.0, width, 0.0, param_max - param_min, pixels)


@dataclass(frozen=True)
class Viewport:
    """Parameter/state rectangle rendered by one sweep, plus the sweep step."""
    param_min: float
    param_max: float
    state_min: float = 0.0
    state_max: float = 1.0
    step: float | None = None

    def __post_init__(self) -> None:
        bounds = (self.param_min, self.param_max, self.state_min, self.state_max)
        if not all(math.isfinite(v) for v in bounds):
            raise ViewportError(f"viewport bounds must be finite; got {bounds}")
        if not self.param_min < self.param_max:
            raise ViewportError(
                f"param_min must be < param_max; got ({self.param_min}, {self.param_max})"
            )
        if not self.state_min < self.state_max:
            raise ViewportError(
                f"state_min must be < state_max; got ({self.state_min}, {self.state_max})"
            )
        # step None marks "not yet sized"; see with_width()
        if self.step is not None and not (self.step > 0 and math.isfinite(self.step)):
            raise ViewportError(f"step must be positive and finite; got {self.step}")

    @property
    def param_range(self) -> Tuple[float, float]:
        return (self.param_min, self.param_max)

    @property
    def state_range(self) -> Tuple[float, float]:
        return (self.state_min, self.state_max)

    @property
    def sized(self) -> bool:
        return self.step is not None

    @property
    def n_steps(self) -> int:
        """Sub-steps in a full sweep: ceil((param_max - param_min) / step)."""
        if not self.sized:
            raise ViewportError("viewport step is not set; call with_width() first")
        return max(1, math.ceil((self.param_max - self.param_min) / self.step))

    def param_at(self, index: int) -> float:
        return self.param_min + index * self.step

    def with_width(self, width: float, *, pixels: float = STEP_PIXELS) -> "Viewport":
        """Copy with `step` recomputed for a raster `width` pixels wide."""
        return replace(self, step=derive_step(width, self.param_min, self.param_max, pixels=pixels))


def choose_viewport(
    spec: MapSpec,
    width: float,
    *,
    rng: np.random.Generator | None = None,
    ranges: Sequence[Tuple[float, float]] | None = None,
) -> Viewport:
    """
    Pick a (param_min, param_max) window uniformly from the map's curated
    set (or `ranges`) and size its step for `width`.
    """
    choices = tuple(ranges) if ranges is not None else spec.curated
    if not choices:
        raise ViewportError("no parameter ranges to choose from")
    rng = np.random.default_rng() if rng is None else rng
    lo, hi = choices[int(rng.integers(len(choices)))]
    s_lo, s_hi = spec.state_range
    return Viewport(float(lo), float(hi), float(s_lo), float(s_hi)).with_width(width)
