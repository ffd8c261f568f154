# src/bifview/plot/_export.py
from __future__ import annotations
import json
import math
from pathlib import Path
from typing import Mapping, Tuple
import matplotlib.pyplot as plt

from bifview.render.raster import PointRecorder

DEFAULT_NAME = "download.txt"

def _as_mapping(obj) -> Mapping[float, Tuple[float, float]]:
    if isinstance(obj, PointRecorder):
        return obj.points
    if hasattr(obj, "sink"):
        rec = getattr(obj.sink, "recorder", None)
        if rec is None:
            raise ValueError("Point recording is disabled; enable record_points to export.")
        return rec.points
    return obj  # assume mapping

def points_text(recorder_or_mapping) -> str:
    """
    Serialize state value -> [x, y] as a JSON object (keys are repr'd floats).
    Non-finite coordinates are written as null.
    """
    mapping = _as_mapping(recorder_or_mapping)
    payload = {}
    for state, (x, y) in mapping.items():
        payload[repr(float(state))] = [_finite_or_none(x), _finite_or_none(y)]
    return json.dumps(payload)

def _finite_or_none(v: float) -> float | None:
    v = float(v)
    return v if math.isfinite(v) else None

def save_points(recorder_or_mapping, path: str | Path = DEFAULT_NAME) -> Path:
    """
    Write the recorded state -> raster point map to `path` (a directory
    gets DEFAULT_NAME appended). Returns the written path.
    """
    target = Path(path)
    if target.is_dir():
        target = target / DEFAULT_NAME
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(points_text(recorder_or_mapping), encoding="utf-8")
    return target

def show() -> None:
    plt.show()

__all__ = ["save_points", "points_text", "show", "DEFAULT_NAME"]
