# src/streamavg/app/core/config.py
from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

_log = logging.getLogger("streamavg.config")


class ConfigError(ValueError):
    """Bad runtime configuration (unknown mode, window size <= 0, unreadable defaults file)."""


# --- Runtime modes ------------------------------------------------------------

class Mode(str, Enum):
    CMA = "CMA"  # cumulative moving average
    SMA = "SMA"  # simple moving average (mean of window means)


MODE_DESCRIPTIONS: Dict[Mode, str] = {
    Mode.CMA: "Cumulative Moving Average",
    Mode.SMA: "Simple Moving Average",
}

_MODES: Dict[str, Mode] = {m.value: m for m in Mode}


def lookup_mode(name: str) -> Mode:
    """
    Resolve a mode by its short name ("CMA" / "SMA").
    Case and surrounding whitespace are ignored.
    """
    key = (name or "").strip().upper()
    mode = _MODES.get(key)
    if mode is None:
        raise ConfigError(f"Unknown runtime mode: {name}")
    return mode


# --- Immutable run configuration ----------------------------------------------

class RuntimeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Mode = Mode.CMA
    window_size: int = Field(10, description="Samples per window (SMA only).")
    show_intermediates: bool = False
    data_file: Optional[Path] = None

    @model_validator(mode="after")
    def _window_for_sma(self) -> "RuntimeConfig":
        # CMA ignores the window, so only SMA checks it
        if self.mode is Mode.SMA and self.window_size < 1:
            raise ValueError(f"window_size must be a positive integer in SMA mode, got {self.window_size}")
        return self


DEFAULTS: Dict[str, Any] = {
    "mode": Mode.CMA,
    "window_size": 10,
    "show_intermediates": False,
}


def make_config(**values: Any) -> RuntimeConfig:
    """
    Build a RuntimeConfig, turning validation failures into ConfigError.
    `mode` may be given as a Mode or as its short name.
    """
    mode = values.get("mode")
    if isinstance(mode, str) and not isinstance(mode, Mode):
        values["mode"] = lookup_mode(mode)
    try:
        return RuntimeConfig(**values)
    except ValidationError as ex:
        err = ex.errors()[0]
        field = ".".join(str(p) for p in err.get("loc", ())) or "config"
        raise ConfigError(f"Invalid {field}: {err.get('msg')}") from ex


def load_defaults(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Built-in defaults overlaid with a YAML file, if one is given.

    The file comes from `path` or, failing that, AVG_CONFIG.
    Recognized keys: mode, window_size (or window-size), show_intermediates.
    """
    out = dict(DEFAULTS)
    src = path or os.getenv("AVG_CONFIG")
    if not src:
        return out

    cfg_path = Path(src)
    try:
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except OSError as ex:
        raise ConfigError(f"Cannot read config file {cfg_path}: {ex}") from ex
    except yaml.YAMLError as ex:
        raise ConfigError(f"Malformed config file {cfg_path}: {ex}") from ex

    if raw is None:
        return out
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {cfg_path} must hold a mapping")

    for key, value in raw.items():
        name = str(key).replace("-", "_")
        if name not in DEFAULTS:
            _log.warning("Ignoring unknown config key %r in %s", key, cfg_path)
            continue
        out[name] = value
    _log.debug("Loaded defaults from %s: %s", cfg_path, out)
    return out
