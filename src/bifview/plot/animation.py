# src/bifview/plot/animation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.ticker import MaxNLocator
import numpy as np

from bifview._setup import setup
from bifview.config import RenderConfig, load_config
from bifview.maps import MapSpec
from bifview.render.scheduler import RestartFn, SweepScheduler
from bifview.runtime.viewport import Viewport

from . import _theme

__all__ = ["bifurcation_animate", "BifurcationAnimation"]


@dataclass
class BifurcationAnimation:
    figure: Any
    ax: Any
    image: Any
    animation: FuncAnimation
    scheduler: SweepScheduler
    _unsubscribe: Callable[[], None]
    _shown: Viewport | None = None
    _cid_close: int | None = None

    @property
    def sink(self):
        return self.scheduler.sink

    def frames(self):
        """Frame source: one item per tick, ends once the scheduler halts."""
        while not self.scheduler.halted:
            yield self.scheduler.ticks

    def step(self, _frame=None) -> list:
        """Frame callback: exactly one scheduler tick, then refresh the image."""
        if not self.scheduler.halted:
            self.scheduler.tick()
        self._sync_image()
        return [self.image]

    def _init(self) -> list:
        self._sync_image()
        return [self.image]

    def _sync_image(self) -> None:
        vp = self.scheduler.viewport
        if vp != self._shown:
            self.image.set_extent((vp.param_min, vp.param_max, vp.state_min, vp.state_max))
            self.ax.set_xlim(vp.param_min, vp.param_max)
            self.ax.set_ylim(vp.state_min, vp.state_max)
            self._shown = vp
        self.image.set_data(self.sink.surface)

    def on_scheme(self, scheme: str) -> None:
        """Theme listener: new fill color for later points, restyled background."""
        self.sink.set_color(scheme)
        colors = _theme.colors()
        self.figure.set_facecolor(colors["figure"])
        self.ax.set_facecolor(colors["axes"])
        for spine in self.ax.spines.values():
            spine.set_edgecolor(colors["text"])
        self.ax.tick_params(colors=colors["text"])
        self.figure.canvas.draw_idle()

    def stop(self) -> None:
        """Tear down: halt the scheduler and the frame clock."""
        self.scheduler.stop()
        self._unsubscribe()
        if self._cid_close is not None:
            self.figure.canvas.mpl_disconnect(self._cid_close)
            self._cid_close = None
        source = getattr(self.animation, "event_source", None)
        if source is not None:
            source.stop()


def bifurcation_animate(
    map: str | MapSpec | None = None,
    *,
    config: RenderConfig | None = None,
    viewport: Viewport | None = None,
    restart: bool | RestartFn | None = None,
    rng: np.random.Generator | None = None,
    scheme: str | None = None,
    interval: int | None = None,
    figsize: tuple[float, float] | None = None,
    dpi: float = 100.0,
    **overrides: Any,
) -> BifurcationAnimation:
    """
    Render a bifurcation diagram incrementally, one batch per animation frame.

    The raster surface is shown with imshow over the viewport rectangle and a
    FuncAnimation acts as the frame clock. Keep a reference to the returned
    object or the animation gets garbage collected.

    Args:
        map: Registered map name or MapSpec (default from config).
        scheme: "dark" or "light"; switches the global theme before drawing.
            Later `theme.set_scheme()` calls recolor subsequent points.
        interval: Frame period in ms (default config.interval_ms).
        figsize: Figure size in inches (default: surface size / dpi).
        Other arguments are forwarded to `bifview.setup`.
    """
    cfg = config if config is not None else load_config()
    if scheme is not None:
        overrides["theme"] = scheme
    if overrides:
        cfg = cfg.replace(**overrides)
    _theme.set_scheme(cfg.theme)

    scheduler = setup(map, config=cfg, viewport=viewport, restart=restart, rng=rng)
    sink = scheduler.sink

    if figsize is None:
        figsize = (sink.width / dpi, sink.height / dpi)
    fig, ax = plt.subplots(figsize=figsize, dpi=dpi)
    vp = scheduler.viewport
    image = ax.imshow(
        sink.surface,
        origin="upper",
        extent=(vp.param_min, vp.param_max, vp.state_min, vp.state_max),
        aspect="auto",
        interpolation="nearest",
    )
    if _theme.get("frame"):
        ax.xaxis.set_major_locator(MaxNLocator(_theme.get("tick_n")))
        ax.yaxis.set_major_locator(MaxNLocator(_theme.get("tick_n")))
    else:
        ax.set_axis_off()
        fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    handle = BifurcationAnimation(
        figure=fig,
        ax=ax,
        image=image,
        animation=None,  # type: ignore[arg-type]
        scheduler=scheduler,
        _unsubscribe=lambda: None,
    )
    handle._unsubscribe = _theme.subscribe(handle.on_scheme)

    def _on_close(_event):
        handle.stop()

    handle._cid_close = fig.canvas.mpl_connect("close_event", _on_close)
    handle.animation = FuncAnimation(
        fig,
        handle.step,
        frames=handle.frames,
        init_func=handle._init,
        interval=int(interval) if interval is not None else cfg.interval_ms,
        blit=False,
        repeat=False,
        cache_frame_data=False,
    )
    return handle
