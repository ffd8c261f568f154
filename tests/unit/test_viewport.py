# tests/unit/test_viewport.py
from __future__ import annotations

import math

import numpy as np
import pytest

from bifview.errors import ViewportError
from bifview.maps import LOGISTIC
from bifview.runtime.viewport import Viewport, choose_viewport, derive_step


@pytest.mark.parametrize(
    "args",
    [
        (4.0, 3.0),
        (3.0, 3.0),
        (3.0, 4.0, 1.0, 0.0),
        (3.0, 4.0, 0.0, 1.0, -0.1),
        (3.0, 4.0, 0.0, 1.0, 0.0),
        (3.0, 4.0, 0.0, 1.0, float("inf")),
        (float("nan"), 4.0),
        (3.0, float("inf")),
    ],
)
def test_degenerate_viewports_rejected(args):
    with pytest.raises(ViewportError):
        Viewport(*args)


def test_viewport_error_is_value_error():
    with pytest.raises(ValueError):
        Viewport(1.0, 0.0)


def test_with_width_recomputes_step():
    vp = Viewport(3.1, 4.0)
    assert not vp.sized
    sized = vp.with_width(1600)
    assert sized.step == pytest.approx(0.9 * 0.5 / 1600)
    assert sized.param_range == vp.param_range
    assert sized.state_range == (0.0, 1.0)
    # independent of range width: always half a pixel
    narrow = Viewport(3.61211, 3.69299).with_width(1600)
    assert (narrow.step / (narrow.param_max - narrow.param_min)) == pytest.approx(0.5 / 1600)


def test_n_steps_is_ceiling():
    vp = Viewport(0.0, 1.0, step=0.3)
    assert vp.n_steps == 4
    vp = Viewport(0.0, 1.0, step=0.25)
    assert vp.n_steps == math.ceil(1.0 / 0.25)
    vp = Viewport(3.1, 4.0).with_width(300)
    assert vp.n_steps == math.ceil((vp.param_max - vp.param_min) / vp.step)


def test_unsized_viewport_has_no_step():
    vp = Viewport(3.1, 4.0)
    assert vp.step is None
    assert not vp.sized
    assert vp.with_width(100).sized


def test_n_steps_requires_step():
    with pytest.raises(ViewportError, match="step"):
        Viewport(0.0, 1.0).n_steps


def test_param_at_advances_by_step():
    vp = Viewport(2.0, 3.0, step=0.125)
    assert vp.param_at(0) == 2.0
    assert vp.param_at(4) == 2.5


def test_derive_step_rejects_bad_width():
    with pytest.raises(ViewportError):
        derive_step(0, 3.0, 4.0)


def test_choose_viewport_from_curated_set():
    rng = np.random.default_rng(1234)
    seen = set()
    for _ in range(60):
        vp = choose_viewport(LOGISTIC, 800, rng=rng)
        assert vp.param_range in LOGISTIC.curated
        assert vp.state_range == (0.0, 1.0)
        assert vp.step == pytest.approx((vp.param_max - vp.param_min) * 0.5 / 800)
        seen.add(vp.param_range)
    assert seen == set(LOGISTIC.curated)


def test_choose_viewport_custom_ranges_and_seed_repeatable():
    ranges = [(1.0, 2.0), (5.0, 6.0)]
    a = [choose_viewport(LOGISTIC, 100, rng=np.random.default_rng(7), ranges=ranges) for _ in range(3)]
    b = [choose_viewport(LOGISTIC, 100, rng=np.random.default_rng(7), ranges=ranges) for _ in range(3)]
    assert a == b
    assert all(vp.param_range in ranges for vp in a)
    with pytest.raises(ViewportError):
        choose_viewport(LOGISTIC, 100, ranges=[])
