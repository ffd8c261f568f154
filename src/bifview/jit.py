# src/bifview/jit.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from numba import njit

# JIT toggle applied *only here*.
# With jit=False callers get the original Python callables back.

__all__ = ["JittedCallable", "jit_compile"]


@dataclass(frozen=True)
class JittedCallable:
    fn: Callable
    py_fn: Callable
    jitted: bool


def jit_compile(fn: Callable, *, jit: bool = True, cache: bool = False) -> JittedCallable:
    """
    Centralized JIT compilation with consistent error handling.

    Behavior:
        - If jit=False: returns original Python function
        - If jit=True: compiles with numba.njit; compilation is lazy, so
          typing errors surface on the first call

    Args:
        fn: Function to compile
        jit: Whether to apply JIT compilation (default True)
        cache: Forwarded to numba (on-disk cache of compiled code)

    Returns:
        JittedCallable wrapping the compiled (or original) function

    Raises:
        RuntimeError: If numba rejects the function at decoration time
    """
    if not jit:
        return JittedCallable(fn=fn, py_fn=fn, jitted=False)

    try:
        compiled = njit(cache=cache)(fn)
    except Exception as e:
        raise RuntimeError(
            f"JIT compilation with numba failed: {type(e).__name__}: {e}"
        ) from e
    return JittedCallable(fn=compiled, py_fn=fn, jitted=True)
