# src/bifview/render/scheduler.py
"""
Frame-sliced sweep of the control parameter.

`advance` is the pure transition: it takes a SweepState, paints at most
one batch of parameter columns through the supplied callables and returns
the next SweepState. `SweepScheduler` owns the current state, the restart
policy and the halted flag; a host frame clock calls `tick()` once per
frame.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from functools import partial
from typing import Any, Callable, Iterable, Optional
import warnings

import numpy as np

from bifview.maps.base import MapFn, MapSpec
from bifview.runtime.sampler import orbit, INITIAL_STATE, TRANSIENT_LENGTH, OBSERVED_LENGTH
from bifview.runtime.viewport import Viewport, choose_viewport
from .raster import RasterSink

__all__ = [
    "SweepStatus",
    "RUNNING",
    "DONE",
    "SweepState",
    "advance",
    "batch_size_for",
    "curated_restart",
    "RestartFn",
    "SweepScheduler",
]


class SweepStatus(IntEnum):
    RUNNING = 0
    DONE = 9

RUNNING: int = int(SweepStatus.RUNNING)
DONE: int = int(SweepStatus.DONE)

BASE_BATCH = 60
DURATION = 1.5

# Receives the finished viewport, returns the next one (None halts).
RestartFn = Callable[[Viewport], Optional[Viewport]]


def batch_size_for(duration: float = DURATION, base: int = BASE_BATCH) -> int:
    """Sub-steps per tick; longer `duration` means smaller batches."""
    if not duration > 0:
        raise ValueError(f"duration must be positive; got {duration}")
    return max(1, int(round(base / duration)))


@dataclass(frozen=True)
class SweepState:
    viewport: Viewport
    index: int = 0
    batch_size: int = BASE_BATCH

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1; got {self.batch_size}")
        if not self.viewport.sized:
            raise ValueError("SweepState needs a viewport with a positive step.")

    @property
    def current_param(self) -> float:
        return self.viewport.param_at(self.index)

    @property
    def status(self) -> SweepStatus:
        # index-based so float accumulation cannot add or drop a column
        if self.index >= self.viewport.n_steps:
            return SweepStatus.DONE
        return SweepStatus.RUNNING

    @property
    def done(self) -> bool:
        return self.status is SweepStatus.DONE


def advance(
    state: SweepState,
    sample: Callable[[float], Iterable[float]],
    paint: Callable[[float, Iterable[float]], Any],
) -> SweepState:
    """
    Paint up to `state.batch_size` columns in increasing parameter order and
    return the advanced state. A finished state is returned unchanged.
    """
    stop = min(state.index + state.batch_size, state.viewport.n_steps)
    for i in range(state.index, stop):
        r = state.viewport.param_at(i)
        paint(r, sample(r))
    if stop == state.index:
        return state
    return replace(state, index=stop)


def curated_restart(spec: MapSpec, width: float, *, rng: np.random.Generator | None = None) -> RestartFn:
    """Restart policy: every finished sweep is followed by a fresh curated viewport."""
    rng = np.random.default_rng() if rng is None else rng

    def _restart(_finished: Viewport) -> Viewport:
        return choose_viewport(spec, width, rng=rng)

    return _restart


class SweepScheduler:
    """
    Drives one sweep (and optional restarts) over a RasterSink.

    States: RUNNING until the viewport's parameter range is exhausted, then
    DONE. On DONE the restart callable (if any) supplies the next viewport,
    which begins on a cleared surface; without one the scheduler halts and
    further ticks do nothing.
    """

    def __init__(
        self,
        sink: RasterSink,
        viewport: Viewport,
        map_fn: MapFn,
        *,
        batch_size: int = BASE_BATCH,
        restart: RestartFn | None = None,
        x0: float = INITIAL_STATE,
        transient: int = TRANSIENT_LENGTH,
        observed: int = OBSERVED_LENGTH,
        skip_transient: bool = False,
    ):
        self.sink = sink
        self.restart = restart
        self.batch_size = int(batch_size)
        self._sample = partial(
            orbit, map_fn, x0=x0, transient=transient, observed=observed, skip_transient=skip_transient
        )
        self.halted = False
        self.ticks = 0
        self.sweeps_completed = 0
        self.state = self._begin(viewport)

    def _begin(self, viewport: Viewport) -> SweepState:
        sized = viewport.with_width(self.sink.width)
        self.sink.begin(sized)
        return SweepState(sized, 0, self.batch_size)

    @property
    def viewport(self) -> Viewport:
        return self.state.viewport

    @property
    def status(self) -> SweepStatus:
        return self.state.status

    def tick(self) -> SweepStatus:
        """Run one frame's batch; returns the status after the batch (and any restart)."""
        if self.halted:
            return SweepStatus.DONE
        self.state = advance(self.state, self._sample, self.sink.paint)
        self.ticks += 1
        if self.state.done:
            self.sweeps_completed += 1
            self._on_done()
        return self.status

    def _on_done(self) -> None:
        if self.restart is None:
            self.halted = True
            return
        nxt = self.restart(self.state.viewport)
        if nxt is None:
            self.halted = True
            return
        if not isinstance(nxt, Viewport):
            warnings.warn(
                f"restart returned {type(nxt).__name__}, expected Viewport or None; halting.",
                RuntimeWarning,
                stacklevel=3,
            )
            self.halted = True
            return
        self.state = self._begin(nxt)

    def stop(self) -> None:
        """Tear down: no further tick paints anything."""
        self.halted = True

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until halted (headless use). Returns the number of ticks run."""
        if max_ticks is None and self.restart is not None:
            raise ValueError("max_ticks is required when a restart policy is set.")
        n = 0
        while not self.halted and (max_ticks is None or n < max_ticks):
            self.tick()
            n += 1
        return n
