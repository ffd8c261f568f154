# src/bifview/render/kernels.py
from __future__ import annotations

import math
from typing import Callable
import numpy as np

from bifview.jit import jit_compile

__all__ = ["fill_squares", "configure_kernels"]


def _fill_squares_impl(surface: np.ndarray, coverage: np.ndarray, xs: np.ndarray, ys: np.ndarray,
                       half: float, rgba: np.ndarray) -> int:
    """
    Fill axis-aligned squares (centre xs[i], ys[i], half-width `half`) as one
    path: overlapping squares are covered once, then the union is composited
    over `surface` (H, W, 4 straight-alpha floats) with color `rgba`.

    `coverage` is an (H, W) zero-filled scratch buffer; it is zero again on return.
    Non-finite centres are skipped. Returns the number of pixels touched.
    """
    h = surface.shape[0]
    w = surface.shape[1]
    n = xs.size

    # pass 1: per-pixel area coverage of the union (max of overlaps)
    for i in range(n):
        cx = xs[i]
        cy = ys[i]
        if not (math.isfinite(cx) and math.isfinite(cy)):
            continue
        x0 = cx - half
        x1 = cx + half
        y0 = cy - half
        y1 = cy + half
        ix0 = max(int(math.floor(x0)), 0)
        ix1 = min(int(math.ceil(x1)), w)
        iy0 = max(int(math.floor(y0)), 0)
        iy1 = min(int(math.ceil(y1)), h)
        for iy in range(iy0, iy1):
            oy = min(y1, iy + 1.0) - max(y0, float(iy))
            if oy <= 0.0:
                continue
            for ix in range(ix0, ix1):
                ox = min(x1, ix + 1.0) - max(x0, float(ix))
                if ox <= 0.0:
                    continue
                c = ox * oy
                if c > coverage[iy, ix]:
                    coverage[iy, ix] = c

    # pass 2: composite each covered pixel once, clearing scratch as we go
    touched = 0
    alpha = rgba[3]
    for i in range(n):
        cx = xs[i]
        cy = ys[i]
        if not (math.isfinite(cx) and math.isfinite(cy)):
            continue
        ix0 = max(int(math.floor(cx - half)), 0)
        ix1 = min(int(math.ceil(cx + half)), w)
        iy0 = max(int(math.floor(cy - half)), 0)
        iy1 = min(int(math.ceil(cy + half)), h)
        for iy in range(iy0, iy1):
            for ix in range(ix0, ix1):
                c = coverage[iy, ix]
                if c <= 0.0:
                    continue
                coverage[iy, ix] = 0.0
                a = alpha * c
                dst_a = surface[iy, ix, 3]
                out_a = a + dst_a * (1.0 - a)
                if out_a > 0.0:
                    for k in range(3):
                        surface[iy, ix, k] = (rgba[k] * a + surface[iy, ix, k] * dst_a * (1.0 - a)) / out_a
                surface[iy, ix, 3] = out_a
                touched += 1
    return touched


_fill_squares_py = _fill_squares_impl
_fill_squares_jit = jit_compile(_fill_squares_impl, jit=True, cache=True).fn

# Mutable binding exported to callers; pure Python until configured.
fill_squares: Callable[..., int] = _fill_squares_py


def configure_kernels(jit_enabled: bool) -> None:
    """Select Python or numba implementation based on jit flag."""

    global fill_squares
    if jit_enabled:
        fill_squares = _fill_squares_jit
    else:
        fill_squares = _fill_squares_py
