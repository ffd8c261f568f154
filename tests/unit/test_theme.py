# tests/unit/test_theme.py
from __future__ import annotations

import matplotlib as mpl
import pytest

from bifview.plot import theme


@pytest.fixture(autouse=True)
def _reset_theme():
    theme.use("light")
    yield
    theme.use("light")


def test_set_scheme_updates_rcparams():
    theme.set_scheme("dark")
    assert theme.scheme() == "dark"
    assert mpl.rcParams["axes.facecolor"] == "#111111"
    theme.set_scheme("LIGHT")
    assert theme.scheme() == "light"
    assert mpl.rcParams["axes.facecolor"] == "#ffffff"


def test_listeners_fire_only_on_background_change():
    seen = []
    unsubscribe = theme.subscribe(seen.append)
    try:
        theme.set_scheme("light")      # no change
        theme.update(scale=1.2)       # unrelated token
        theme.set_scheme("dark")
        theme.use("dark")             # already dark
        theme.use("light")
    finally:
        unsubscribe()
    assert seen == ["dark", "light"]
    theme.set_scheme("dark")
    assert seen == ["dark", "light"]
    # second unsubscribe is harmless
    unsubscribe()


def test_temp_restores_and_notifies():
    seen = []
    unsubscribe = theme.subscribe(seen.append)
    try:
        with theme.temp(background="dark"):
            assert theme.scheme() == "dark"
        assert theme.scheme() == "light"
    finally:
        unsubscribe()
    assert seen == ["dark", "light"]


def test_rejects_unknown_tokens_and_schemes():
    with pytest.raises(ValueError, match="Unknown theme tokens"):
        theme.update(palette="cbf")
    with pytest.raises(ValueError, match="background"):
        theme.set_scheme("sepia")
    with pytest.raises(ValueError, match="Unknown theme preset"):
        theme.use("neon")
    assert theme.scheme() == "light"


def test_colors_follow_background():
    assert theme.colors()["text"] == "#111111"
    theme.set_scheme("dark")
    assert theme.colors()["text"] == "#f2f2f2"


def test_layout_presets_keep_current_background():
    theme.set_scheme("dark")
    seen = []
    unsubscribe = theme.subscribe(seen.append)
    try:
        theme.use("talk")
        assert theme.scheme() == "dark"
        assert theme.get("scale") == pytest.approx(1.4)
        theme.use("paper")
        assert theme.scheme() == "dark"
        assert theme.get("frame") is True
    finally:
        unsubscribe()
    assert seen == []
    theme.use("light")
    assert theme.scheme() == "light"
