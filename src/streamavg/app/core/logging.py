# src/streamavg/app/core/logging.py
from __future__ import annotations
import logging
import os
import sys

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR":    logging.ERROR,
    "WARNING":  logging.WARNING,
    "INFO":     logging.INFO,
    "DEBUG":    logging.DEBUG,
}

def _level_from_env(var: str, default: str = "WARNING") -> int:
    val = (os.getenv(var, default) or "").strip().upper()
    return _LEVELS.get(val, _LEVELS[default])

def setup_logging(default_level: str = "WARNING") -> None:
    """
    Configure root logging once. Idempotent.
    LOG_LEVEL controls verbosity (default WARNING).
    Records go to stderr; stdout carries results only.
    """
    root = logging.getLogger()
    level = _level_from_env("LOG_LEVEL", default_level)
    root.setLevel(level)
    if root.handlers:
        return

    fmt = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    root.addHandler(handler)
