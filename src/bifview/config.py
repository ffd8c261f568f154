# src/bifview/config.py
"""
Render configuration.

Settings come from the ``[render]`` table of a TOML file. Lookup order:
explicit path, ``BIFVIEW_CONFIG`` env var, then the platform config
directory. A missing default file means built-in defaults; a missing
explicit file is an error.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import os
from pathlib import Path
import sys
from typing import Any, Mapping

try:
    import tomllib  # type: ignore
except Exception:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from bifview.errors import ConfigError, UnknownMapError
from bifview.maps import get_map

__all__ = ["RenderConfig", "load_config", "config_from_mapping", "_get_config_path"]

ENV_VAR = "BIFVIEW_CONFIG"


@dataclass(frozen=True)
class RenderConfig:
    map: str = "logistic"
    theme: str = "light"
    width: int = 1200
    height: int = 800
    initial_state: float = 0.5
    transient_length: int = 50
    observed_length: int = 10
    skip_transient: bool = False
    point_width: float = 0.8
    duration: float = 1.5
    base_batch: int = 60
    interval_ms: int = 16
    restart: bool = False
    record_points: bool = False
    jit: bool = True
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"width and height must be positive; got {self.width}x{self.height}")
        if self.transient_length < 0 or self.observed_length < 0:
            raise ConfigError("transient_length and observed_length must be >= 0")
        if self.transient_length + self.observed_length == 0:
            raise ConfigError("orbit length (transient_length + observed_length) must be positive")
        if self.skip_transient and self.observed_length == 0:
            raise ConfigError("observed_length must be positive when skip_transient is set")
        if not self.point_width > 0:
            raise ConfigError(f"point_width must be positive; got {self.point_width}")
        if not self.duration > 0:
            raise ConfigError(f"duration must be positive; got {self.duration}")
        if self.base_batch < 1:
            raise ConfigError(f"base_batch must be >= 1; got {self.base_batch}")
        if self.interval_ms < 1:
            raise ConfigError(f"interval_ms must be >= 1; got {self.interval_ms}")
        if self.theme not in ("light", "dark"):
            raise ConfigError(f"theme must be 'light' or 'dark'; got {self.theme!r}")

    @property
    def batch_size(self) -> int:
        """Sub-steps per frame: base_batch scaled down by duration."""
        return max(1, int(round(self.base_batch / self.duration)))

    def replace(self, **overrides: Any) -> "RenderConfig":
        """Copy with overrides; None values are ignored (handy for CLI flags)."""
        clean = {k: v for k, v in overrides.items() if v is not None}
        try:
            return replace(self, **clean)
        except TypeError as e:
            raise ConfigError(str(e)) from None


_FIELD_TYPES = {
    "map": (str,),
    "theme": (str,),
    "width": (int,),
    "height": (int,),
    "initial_state": (int, float),
    "transient_length": (int,),
    "observed_length": (int,),
    "skip_transient": (bool,),
    "point_width": (int, float),
    "duration": (int, float),
    "base_batch": (int,),
    "interval_ms": (int,),
    "restart": (bool,),
    "record_points": (bool,),
    "jit": (bool,),
    "seed": (int,),
}


def _get_config_path() -> Path:
    env = os.environ.get(ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return (base / "bifview" / "config.toml").expanduser()


def config_from_mapping(data: Mapping[str, Any], *, source: str | None = None) -> RenderConfig:
    """Validate a ``[render]`` table and build a RenderConfig."""
    known = {f.name for f in fields(RenderConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown [render] keys: {', '.join(unknown)}", source)
    values: dict[str, Any] = {}
    for key, val in data.items():
        allowed = _FIELD_TYPES[key]
        # bool is an int subclass; only accept it where bool is declared
        if isinstance(val, bool) and bool not in allowed:
            raise ConfigError(f"[render].{key} must be {allowed[-1].__name__}; got bool", source)
        if not isinstance(val, allowed):
            raise ConfigError(
                f"[render].{key} must be {allowed[-1].__name__}; got {type(val).__name__}", source
            )
        values[key] = float(val) if float in allowed else val
    if "map" in values:
        try:
            get_map(values["map"])
        except UnknownMapError as e:
            raise ConfigError(f"[render].map: {e}", source) from None
    try:
        return RenderConfig(**values)
    except ConfigError as e:
        raise ConfigError(str(e), source) from None


def load_config(path: str | Path | None = None) -> RenderConfig:
    explicit = path is not None or bool(os.environ.get(ENV_VAR))
    cfg_path = Path(path).expanduser() if path is not None else _get_config_path()
    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {cfg_path}")
        return RenderConfig()
    try:
        with open(cfg_path, "rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", str(cfg_path)) from e
    table = data.get("render", {})
    if not isinstance(table, dict):
        raise ConfigError("[render] must be a table", str(cfg_path))
    return config_from_mapping(table, source=str(cfg_path))
