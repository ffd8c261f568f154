# src/bifview/render/raster.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Tuple

import numpy as np

from bifview.runtime.viewport import Viewport
from bifview.utils.scaling import scale, scale_array
from . import kernels as _kernels

__all__ = [
    "Scheme",
    "FILL_COLORS",
    "POINT_WIDTH",
    "ColorState",
    "PointRecorder",
    "RasterSink",
]

Scheme = Literal["dark", "light"]

# Translucent so overlapping points build up density.
FILL_COLORS: Dict[str, Tuple[float, float, float, float]] = {
    "dark": (245 / 255, 245 / 255, 245 / 255, 0.7),
    "light": (0.0, 0.0, 0.0, 0.7),
}

POINT_WIDTH = 0.8


def _resolve_scheme(scheme: str) -> str:
    key = str(scheme).lower()
    if key not in FILL_COLORS:
        raise ValueError(f"Unknown color scheme '{scheme}'. Available: {', '.join(sorted(FILL_COLORS))}.")
    return key


@dataclass
class ColorState:
    """Active fill style; replaced wholesale on a theme change."""
    scheme: str = "light"
    rgba: Tuple[float, float, float, float] = FILL_COLORS["light"]

    @classmethod
    def for_scheme(cls, scheme: str) -> "ColorState":
        key = _resolve_scheme(scheme)
        return cls(scheme=key, rgba=FILL_COLORS[key])

    def set_scheme(self, scheme: str) -> None:
        key = _resolve_scheme(scheme)
        self.scheme, self.rgba = key, FILL_COLORS[key]


@dataclass
class PointRecorder:
    """state value -> last raster point it was painted at (debug/export aid)."""
    points: Dict[float, Tuple[float, float]] = field(default_factory=dict)

    def record(self, states: np.ndarray, xs: np.ndarray, ys: np.ndarray) -> None:
        for s, x, y in zip(states.tolist(), xs.tolist(), ys.tolist()):
            self.points[s] = (x, y)

    def clear(self) -> None:
        self.points.clear()

    def __len__(self) -> int:
        return len(self.points)


class RasterSink:
    """
    Accumulates orbit points onto an (height, width, 4) RGBA float surface.

    Origin is top-left, x grows right, y grows down. One `paint` call is one
    fill: its squares are merged before compositing, separate calls stack.
    The surface is cleared only by `begin`.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        color: ColorState | None = None,
        point_width: float = POINT_WIDTH,
        recorder: PointRecorder | None = None,
    ):
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"surface size must be positive; got {width}x{height}")
        if not point_width > 0:
            raise ValueError(f"point_width must be positive; got {point_width}")
        self.width = int(width)
        self.height = int(height)
        self.color = color if color is not None else ColorState()
        self.half_width = float(point_width) / 2.0
        self.recorder = recorder
        self.surface = np.zeros((self.height, self.width, 4), dtype=np.float64)
        self._coverage = np.zeros((self.height, self.width), dtype=np.float64)
        self.viewport: Viewport | None = None
        self.fills = 0

    def set_color(self, scheme: str) -> None:
        """Theme-change hook: affects subsequent fills only."""
        self.color.set_scheme(scheme)

    def begin(self, viewport: Viewport) -> None:
        """Start a sweep over `viewport` on a cleared surface."""
        self.viewport = viewport
        self.clear()

    def clear(self) -> None:
        self.surface.fill(0.0)
        self.fills = 0
        if self.recorder is not None:
            self.recorder.clear()

    def to_pixel(self, param: float, state: float) -> Tuple[float, float]:
        vp = self._require_viewport()
        x = scale(vp.param_min, vp.param_max, 0.0, self.width, param)
        y = scale(vp.state_min, vp.state_max, self.height, 0.0, state)
        return x, y

    def paint(self, param: float, states: Iterable[float]) -> int:
        """Paint every state of one orbit at `param` as a single fill; returns pixels touched."""
        vp = self._require_viewport()
        values = np.fromiter(states, dtype=np.float64)
        ys = scale_array(vp.state_min, vp.state_max, self.height, 0.0, values)
        xs = np.full(values.shape, scale(vp.param_min, vp.param_max, 0.0, self.width, param), dtype=np.float64)
        if self.recorder is not None:
            self.recorder.record(values, xs, ys)
        rgba = np.asarray(self.color.rgba, dtype=np.float64)
        touched = _kernels.fill_squares(self.surface, self._coverage, xs, ys, self.half_width, rgba)
        self.fills += 1
        return int(touched)

    def _require_viewport(self) -> Viewport:
        if self.viewport is None:
            raise RuntimeError("RasterSink.begin(viewport) must be called before painting.")
        return self.viewport
