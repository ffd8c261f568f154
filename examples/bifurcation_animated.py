"""
Animated bifurcation diagram of the logistic map.

The parameter sweeps left to right, 40 columns per frame. Close the window
to finish; with restart enabled a new curated range starts after each sweep.
"""

from __future__ import annotations
from bifview import Viewport
from bifview.plot import export, theme, bifurcation_animate

theme.use("paper")
anim = bifurcation_animate(
    "logistic",
    viewport=Viewport(2.8, 4.0),
    restart=True,
    scheme="dark",
    width=900,
    height=600,
    seed=7,
)

print(f"Sweeping r in [{anim.scheduler.viewport.param_min}, {anim.scheduler.viewport.param_max}]")
print(f"  columns per sweep: {anim.scheduler.viewport.n_steps}")
print(f"  columns per frame: {anim.scheduler.batch_size}")

export.show()
