# src/bifview/plot/_theme.py
from __future__ import annotations

from contextlib import ContextDecorator
from dataclasses import dataclass
from typing import Any, Callable, Dict

import matplotlib as mpl

_BASE_TOKENS: Dict[str, Any] = {
    "scale": 1.0,
    "font": "DejaVu Sans",
    "tick_n": 5,
    "tick_len": 4.0,
    "tick_w": 0.9,
    "label_pad": 6.0,
    "title_pad": 6.0,
    "axis_w": 1.2,
    "grid": False,
    "grid_alpha": 0.3,
    "background": "light",
    "frame": False,
}

_PRESETS: Dict[str, Dict[str, Any]] = {
    "light": {
        "background": "light",
    },
    "dark": {
        "background": "dark",
        "tick_w": 1.1,
        "axis_w": 1.4,
    },
    "talk": {
        "scale": 1.4,
        "tick_len": 5.0,
        "tick_w": 1.1,
    },
    "paper": {
        "scale": 0.9,
        "frame": True,
        "tick_n": 6,
        "axis_w": 1.0,
    },
}

_BACKGROUNDS = ("light", "dark")

_FONT_SIZES = {
    "font.size": 11.0,
    "axes.labelsize": 11.0,
    "axes.titlesize": 13.0,
    "xtick.labelsize": 10.0,
    "ytick.labelsize": 10.0,
    "figure.titlesize": 14.0,
}

# Called with the new background ("dark" | "light") after it changes.
Listener = Callable[[str], None]


def _current_background() -> tuple[str, str, str, str]:
    tokens = _MANAGER.tokens
    if tokens["background"] == "dark":
        axes_face = "#111111"
        figure_face = "#0a0a0a"
        text = "#f2f2f2"
        grid_color = "#dddddd"
    else:
        axes_face = "#ffffff"
        figure_face = "#ffffff"
        text = "#111111"
        grid_color = "#444444"
    return axes_face, figure_face, text, grid_color


@dataclass
class _ThemeManager:
    tokens: Dict[str, Any]

    def __post_init__(self) -> None:
        self._stack: list[Dict[str, Any]] = []
        self._listeners: list[Listener] = []

    def use(self, preset: str = "light") -> None:
        if preset not in _PRESETS:
            raise ValueError(f"Unknown theme preset '{preset}'. Available: {', '.join(sorted(_PRESETS))}.")
        # presets without a background keep the current one
        tokens = {**_BASE_TOKENS, "background": self.tokens["background"]}
        self._set({**tokens, **_PRESETS[preset]})

    def update(self, **tokens: Any) -> None:
        unknown = sorted(set(tokens) - set(_BASE_TOKENS))
        if unknown:
            raise ValueError(f"Unknown theme tokens: {', '.join(unknown)}.")
        if "background" in tokens and tokens["background"] not in _BACKGROUNDS:
            raise ValueError(f"background must be one of {_BACKGROUNDS}; got {tokens['background']!r}.")
        self._set({**self.tokens, **tokens})

    def push(self, overrides: Dict[str, Any]) -> None:
        self._stack.append(dict(self.tokens))
        self.update(**overrides)

    def pop(self) -> None:
        if not self._stack:
            return
        self._set(self._stack.pop())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a background-change listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def _set(self, tokens: Dict[str, Any]) -> None:
        before = self.tokens.get("background")
        self.tokens = tokens
        self._apply()
        after = self.tokens["background"]
        if after != before:
            for listener in list(self._listeners):
                listener(after)

    def _apply(self) -> None:
        rc = mpl.rcParams
        tokens = self.tokens

        scale = float(tokens["scale"])
        for key, base in _FONT_SIZES.items():
            rc[key] = base * scale

        rc["font.family"] = [tokens["font"]]
        rc["axes.linewidth"] = float(tokens["axis_w"])

        rc["xtick.major.size"] = float(tokens["tick_len"])
        rc["ytick.major.size"] = float(tokens["tick_len"])
        rc["xtick.major.width"] = float(tokens["tick_w"])
        rc["ytick.major.width"] = float(tokens["tick_w"])

        rc["axes.labelpad"] = float(tokens["label_pad"])
        rc["axes.titlepad"] = float(tokens["title_pad"])

        axes_face, figure_face, text_color, grid_color = _current_background()
        rc["axes.facecolor"] = axes_face
        rc["figure.facecolor"] = figure_face
        rc["savefig.facecolor"] = figure_face
        rc["text.color"] = text_color
        rc["axes.labelcolor"] = text_color
        rc["xtick.color"] = text_color
        rc["ytick.color"] = text_color
        rc["axes.edgecolor"] = text_color

        rc["axes.grid"] = bool(tokens["grid"])
        rc["grid.alpha"] = float(tokens["grid_alpha"])
        rc["grid.color"] = grid_color

    def get(self, key: str) -> Any:
        return self.tokens[key]


class temp(ContextDecorator):
    def __init__(self, **tokens: Any):
        self._tokens = tokens

    def __enter__(self):
        _MANAGER.push(self._tokens)
        return self

    def __exit__(self, *exc):
        _MANAGER.pop()
        return False


_MANAGER = _ThemeManager(tokens=dict(_BASE_TOKENS))
_MANAGER.use("light")


def use(preset: str = "light") -> None:
    _MANAGER.use(preset)


def update(**tokens: Any) -> None:
    _MANAGER.update(**tokens)


def get(token: str) -> Any:
    return _MANAGER.get(token)


def set_scheme(scheme: str) -> None:
    """Host color-scheme signal: switch the background to "dark" or "light"."""
    _MANAGER.update(background=str(scheme).lower())


def scheme() -> str:
    return _MANAGER.get("background")


def subscribe(listener: Listener) -> Callable[[], None]:
    return _MANAGER.subscribe(listener)


def colors() -> dict[str, str]:
    """Resolved colors for the current background."""
    axes_face, figure_face, text_color, grid_color = _current_background()
    return {"axes": axes_face, "figure": figure_face, "text": text_color, "grid": grid_color}


__all__ = ["use", "update", "temp", "get", "set_scheme", "scheme", "subscribe", "colors"]
