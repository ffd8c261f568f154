# tests/unit/test_cli.py
from __future__ import annotations

import json
from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)

import pytest

from bifview import cli
from bifview.plot import export, theme


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    cfg = tmp_path / "cfg.toml"
    cfg.write_text("[render]\nwidth = 24\nheight = 12\njit = false\n", encoding="utf-8")
    monkeypatch.setenv("BIFVIEW_CONFIG", str(cfg))
    yield cfg
    theme.use("light")


def test_maps_list(capsys):
    code = cli.main(["maps", "list"])
    out = capsys.readouterr().out
    assert code == 0
    assert "logistic: x' = r*x*(1-x) aliases=quadratic" in out
    assert "[3.1, 4.0]" in out
    assert "sine" in out and "tent" in out


def test_config_show_uses_env_file(capsys):
    code = cli.main(["config", "show"])
    out = capsys.readouterr().out
    assert code == 0
    assert "width = 24" in out
    assert "jit = False" in out
    assert "batch_size = 40" in out


def test_config_show_bad_file(tmp_path: Path, capsys):
    bad = tmp_path / "bad.toml"
    bad.write_text("[render]\nfrobnicate = 1\n", encoding="utf-8")
    code = cli.main(["config", "show", "--config", str(bad)])
    captured = capsys.readouterr()
    assert code == 1
    assert "frobnicate" in captured.err


def test_config_path(capsys, _isolated_config):
    assert cli.main(["config", "path"]) == 0
    assert capsys.readouterr().out.strip() == str(_isolated_config.resolve())


def test_run_unknown_map(capsys):
    code = cli.main(["run", "--map", "henon"])
    captured = capsys.readouterr()
    assert code == 1
    assert "Unknown map" in captured.err


def test_run_records_points(monkeypatch, tmp_path: Path, capsys):
    import matplotlib.pyplot as plt

    from bifview import plot as plot_pkg

    created = []
    real_animate = plot_pkg.bifurcation_animate

    def animate(*args, **kwargs):
        anim = real_animate(*args, **kwargs)
        created.append(anim)
        return anim

    def fake_show():
        # drive every frame the way the GUI loop would, then close
        anim = created[-1]
        for frame in anim.frames():
            anim.step(frame)
        plt.close(anim.figure)

    monkeypatch.setattr(plot_pkg, "bifurcation_animate", animate)
    monkeypatch.setattr(export, "show", fake_show)

    out_path = tmp_path / "pts.txt"
    code = cli.main(["run", "--map", "tent", "--theme", "dark", "--seed", "2", "--record", str(out_path)])
    captured = capsys.readouterr()
    assert code == 0
    assert "Wrote" in captured.out
    assert len(json.loads(out_path.read_text(encoding="utf-8"))) > 0
    anim = created[-1]
    assert anim.sink.color.scheme == "dark"
    assert anim.scheduler.halted
