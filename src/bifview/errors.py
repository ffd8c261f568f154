# src/bifview/errors.py
from __future__ import annotations
from typing import List

__all__ = [
    "BifviewError",
    "ConfigError",
    "ViewportError",
    "UnknownMapError",
]

class BifviewError(Exception):
    """Base error for the bifview package."""


class ConfigError(BifviewError):
    """Raised when configuration file is malformed or invalid."""
    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path is not None:
            message = f"{message}\nConfig file: {path}"
        super().__init__(message)


class ViewportError(BifviewError, ValueError):
    """Raised when a viewport rectangle or step is degenerate."""
    def __init__(self, message: str):
        super().__init__(message)


class UnknownMapError(BifviewError, KeyError):
    """Raised when a map name does not resolve to a registered map."""
    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = available
        msg = f"Unknown map: {name!r}\n"
        if available:
            msg += "Registered maps:\n"
            for a in available:
                msg += f"  - {a}\n"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the readable message
        return self.args[0]
