# src/bifview/utils/scaling.py
from __future__ import annotations

import numpy as np

__all__ = ["scale", "scale_array"]


def scale(domain_low: float, domain_high: float, range_low: float, range_high: float, value: float) -> float:
    """
    Affine map of `value` from [domain_low, domain_high] onto [range_low, range_high].

    Reversed ranges are allowed (used for the inverted vertical axis).
    A degenerate domain divides by zero; callers guarantee domain_low != domain_high.
    NaN and inf pass through.
    """
    return range_low + (value - domain_low) / (domain_high - domain_low) * (range_high - range_low)


def scale_array(domain_low: float, domain_high: float, range_low: float, range_high: float, values) -> np.ndarray:
    """Vectorized `scale` over an array of values (float64 output)."""
    values = np.asarray(values, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        return range_low + (values - domain_low) / (domain_high - domain_low) * (range_high - range_low)
