# src/bifview/_setup.py
from __future__ import annotations

from typing import Any

import numpy as np

from bifview.config import RenderConfig, load_config
from bifview.maps import MapSpec, get_map
from bifview.render.kernels import configure_kernels
from bifview.render.raster import ColorState, PointRecorder, RasterSink
from bifview.render.scheduler import SweepScheduler, RestartFn, curated_restart
from bifview.runtime.viewport import Viewport, choose_viewport

__all__ = ["setup"]


def setup(
    map: str | MapSpec | None = None,
    *,
    config: RenderConfig | None = None,
    viewport: Viewport | None = None,
    restart: bool | RestartFn | None = None,
    rng: np.random.Generator | None = None,
    **overrides: Any,
) -> SweepScheduler:
    """Build a sink and a ready-to-tick scheduler in one call.

    Parameters:
        map: Registered map name or a MapSpec (default: config.map).
        config: RenderConfig; loaded with `load_config()` when omitted.
        viewport: Starting viewport; drawn from the map's curated ranges if None.
        restart: True for the curated random restart, False for a single
            sweep, or a callable Viewport -> Viewport | None.
            Defaults to config.restart.
        rng: numpy Generator for viewport selection (default seeded from config.seed).
        **overrides: RenderConfig field overrides (None values are ignored).

    Returns:
        A SweepScheduler whose `sink` holds the raster surface.

    Example:
        Headless single sweep::

            from bifview import setup

            sched = setup("logistic", width=400, height=300, jit=False)
            sched.run()
            surface = sched.sink.surface
    """
    cfg = config if config is not None else load_config()
    if overrides:
        cfg = cfg.replace(**overrides)
    spec = get_map(map if map is not None else cfg.map)
    rng = rng if rng is not None else np.random.default_rng(cfg.seed)

    configure_kernels(cfg.jit)
    recorder = PointRecorder() if cfg.record_points else None
    sink = RasterSink(
        cfg.width,
        cfg.height,
        color=ColorState.for_scheme(cfg.theme),
        point_width=cfg.point_width,
        recorder=recorder,
    )

    if viewport is None:
        viewport = choose_viewport(spec, sink.width, rng=rng)

    use_restart = cfg.restart if restart is None else restart
    if use_restart is True:
        restart_fn = curated_restart(spec, sink.width, rng=rng)
    elif use_restart is False:
        restart_fn = None
    else:
        restart_fn = use_restart

    return SweepScheduler(
        sink,
        viewport,
        spec.fn,
        batch_size=cfg.batch_size,
        restart=restart_fn,
        x0=cfg.initial_state,
        transient=cfg.transient_length,
        observed=cfg.observed_length,
        skip_transient=cfg.skip_transient,
    )
