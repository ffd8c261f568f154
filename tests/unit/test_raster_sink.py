# tests/unit/test_raster_sink.py
from __future__ import annotations

import numpy as np
import pytest

from bifview.render import kernels
from bifview.render.raster import FILL_COLORS, ColorState, PointRecorder, RasterSink
from bifview.runtime.viewport import Viewport

# 16x16 surface over the unit square: param 0.53125 -> x = 8.5,
# state 0.46875 -> y = 8.5 (both exact in binary), the centre of pixel (8, 8).
PARAM = 0.53125
STATE = 0.46875


@pytest.fixture
def sink():
    s = RasterSink(16, 16)
    s.begin(Viewport(0.0, 1.0, step=1.0 / 32))
    return s


def test_to_pixel_orientation(sink):
    assert sink.to_pixel(PARAM, STATE) == (8.5, 8.5)
    assert sink.to_pixel(0.0, 0.0) == (0.0, 16.0)   # bottom-left
    assert sink.to_pixel(1.0, 1.0) == (16.0, 0.0)   # top-right


def test_single_point_paints_one_pixel(sink):
    touched = sink.paint(PARAM, [STATE])
    assert touched == 1
    alpha = sink.surface[..., 3]
    assert np.count_nonzero(alpha) == 1
    # square of width 0.8 fully inside the pixel covers 0.64 of it
    assert alpha[8, 8] == pytest.approx(0.7 * 0.64)
    assert np.allclose(sink.surface[8, 8, :3], 0.0)


def test_one_fill_covers_overlaps_once(sink):
    sink.paint(PARAM, [STATE, STATE, STATE])
    assert sink.surface[8, 8, 3] == pytest.approx(0.7 * 0.64)
    assert sink.fills == 1


def test_separate_fills_accumulate(sink):
    sink.paint(PARAM, [STATE])
    sink.paint(PARAM, [STATE])
    a = 0.7 * 0.64
    assert sink.surface[8, 8, 3] == pytest.approx(a + a * (1 - a))
    assert sink.fills == 2


def test_point_on_pixel_corner_spreads_over_four(sink):
    # x = 8.0, y = 8.0 exactly
    touched = sink.paint(0.5, [0.5])
    assert touched == 4
    for iy, ix in [(7, 7), (7, 8), (8, 7), (8, 8)]:
        assert sink.surface[iy, ix, 3] == pytest.approx(0.7 * 0.16)


def test_non_finite_and_off_surface_points_are_dropped(sink):
    touched = sink.paint(PARAM, [float("nan"), float("inf"), float("-inf"), 5.0, -3.0])
    assert touched == 0
    assert not sink.surface.any()
    assert sink.fills == 1


def test_edge_points_are_clipped(sink):
    # state 1.0 -> y = 0: only the lower half of the square is on the surface
    sink.paint(PARAM, [1.0])
    assert sink.surface[0, 8, 3] == pytest.approx(0.7 * 0.8 * 0.4)
    assert np.count_nonzero(sink.surface[..., 3]) == 1


def test_begin_clears_surface(sink):
    sink.paint(PARAM, [STATE])
    sink.begin(Viewport(0.0, 2.0, step=0.1))
    assert not sink.surface.any()
    assert sink.fills == 0


def test_theme_change_affects_only_later_fills(sink):
    sink.paint(PARAM, [STATE])
    before = sink.surface[8, 8].copy()
    sink.set_color("dark")
    # a different pixel: state 0.71875 -> y = 4.5
    sink.paint(PARAM, [0.71875])
    assert np.array_equal(sink.surface[8, 8], before)
    assert np.allclose(sink.surface[4, 8, :3], FILL_COLORS["dark"][:3])
    assert sink.color.scheme == "dark"


def test_dark_over_light_blends_colors(sink):
    sink.paint(PARAM, [STATE])
    sink.set_color("dark")
    sink.paint(PARAM, [STATE])
    rgb = sink.surface[8, 8, :3]
    assert np.all(rgb > 0.0) and np.all(rgb < FILL_COLORS["dark"][0])


def test_color_state_rejects_unknown_scheme():
    cs = ColorState.for_scheme("dark")
    assert cs.rgba == FILL_COLORS["dark"]
    with pytest.raises(ValueError, match="Unknown color scheme"):
        cs.set_scheme("sepia")
    assert cs.scheme == "dark"


def test_paint_before_begin_raises():
    with pytest.raises(RuntimeError, match="begin"):
        RasterSink(4, 4).paint(0.5, [0.5])


@pytest.mark.parametrize("w, h, pw", [(0, 4, 0.8), (4, -1, 0.8), (4, 4, 0.0)])
def test_sink_rejects_bad_geometry(w, h, pw):
    with pytest.raises(ValueError):
        RasterSink(w, h, point_width=pw)


def test_recorder_keeps_last_point_per_state():
    rec = PointRecorder()
    s = RasterSink(16, 16, recorder=rec)
    s.begin(Viewport(0.0, 1.0, step=1.0 / 32))
    s.paint(0.25, [STATE])
    s.paint(PARAM, [STATE, 0.75])
    assert rec.points[STATE] == (8.5, 8.5)
    assert rec.points[0.75] == (8.5, 4.0)
    assert len(rec) == 2
    s.begin(Viewport(0.0, 1.0, step=1.0 / 32))
    assert len(rec) == 0


def test_jit_kernel_matches_python():
    xs = np.array([3.3, 3.7, 10.05, float("nan"), 15.9])
    ys = np.array([2.2, 2.4, 7.5, 1.0, 0.1])
    rgba = np.array([0.2, 0.4, 0.6, 0.7])

    def run(fn):
        surf = np.zeros((12, 16, 4))
        cov = np.zeros((12, 16))
        fn(surf, cov, xs, ys, 0.4, rgba)
        fn(surf, cov, xs + 0.3, ys, 0.4, rgba)
        assert not cov.any()
        return surf

    try:
        kernels.configure_kernels(True)
        jitted = run(kernels.fill_squares)
    finally:
        kernels.configure_kernels(False)
    assert np.allclose(jitted, run(kernels.fill_squares))
