# src/streamavg/app/core/trace.py
from __future__ import annotations
import logging
import os
import time
from typing import Any, Mapping

_log = logging.getLogger("streamavg.trace")

def trace_enabled() -> bool:
    return (os.getenv("AVG_TRACE", "")).lower() in ("1", "true", "yes", "on")

def _fmt_kv(d: Mapping[str, Any]) -> str:
    return " ".join(f"{k}={d[k]}" for k in d)

def stream_trace(event: str, **kv: Any) -> None:
    """
    Emit a single-line structured log ONLY when AVG_TRACE=true.
    Example:
      [stream] window.complete ts=... window=3 sma=3.500000
    """
    if not trace_enabled():
        return
    kv2 = {"ts": int(time.time()), **kv}
    _log.info("[stream] %s %s", event, _fmt_kv(kv2))
