# src/streamavg/app/services/driver.py
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator

from streamavg.app.core.config import ConfigError, Mode, RuntimeConfig
from streamavg.app.core.trace import stream_trace
from streamavg.app.services.averagers import CumulativeAverager, SimpleMovingAverager

_log = logging.getLogger("streamavg.driver")


def format_result(value: float) -> str:
    """Fixed-point, six fractional digits (same as printf "%lf")."""
    return f"{value:.6f}"


class StreamDriver:
    """
    Runs one averager over a sample stream and yields the values to print.

    | mode | show_intermediates | yields                                   |
    |------|--------------------|------------------------------------------|
    | CMA  | False              | final cumulative average                 |
    | CMA  | True               | running average after every sample       |
    | SMA  | False              | final mean of completed window means     |
    | SMA  | True               | the SMA after every completed window     |
    """

    def __init__(self, config: RuntimeConfig) -> None:
        self.config = config
        self.samples_read = 0
        self._runners: Dict[Mode, Callable[[Iterable[float]], Iterator[float]]] = {
            Mode.CMA: self._run_cumulative,
            Mode.SMA: self._run_simple_moving,
        }

    def run(self, samples: Iterable[float]) -> Iterator[float]:
        """
        Returns the result iterator. An unknown mode raises ConfigError here,
        before any sample is pulled.
        """
        runner = self._runners.get(self.config.mode)
        if runner is None:
            raise ConfigError(f"Unknown runtime mode: {self.config.mode}")
        self.samples_read = 0
        stream_trace(
            "run.start",
            mode=getattr(self.config.mode, "value", self.config.mode),
            window=self.config.window_size,
            intermediates=self.config.show_intermediates,
        )
        return runner(samples)

    def run_lines(self, samples: Iterable[float]) -> Iterator[str]:
        return (format_result(v) for v in self.run(samples))

    # --- per-mode loops ---

    def _run_cumulative(self, samples: Iterable[float]) -> Iterator[float]:
        state = CumulativeAverager()
        for x in samples:
            self.samples_read += 1
            avg = state.update(x)
            if self.config.show_intermediates:
                yield avg
        if not self.config.show_intermediates:
            yield state.value()
        self._finish(state.value())

    def _run_simple_moving(self, samples: Iterable[float]) -> Iterator[float]:
        window = self.config.window_size
        state = SimpleMovingAverager(window)
        # window boundary counter for output, separate from the averager's own
        count = 0
        for x in samples:
            self.samples_read += 1
            count += 1
            state.update(x)
            if count == window:
                count = 0
                stream_trace("window.complete", samples=self.samples_read, sma=format_result(state.value()))
                if self.config.show_intermediates:
                    yield state.value()
        if count:
            _log.debug("Dropping trailing partial window of %d sample(s)", count)
        if not self.config.show_intermediates:
            yield state.value()
        self._finish(state.value())

    def _finish(self, value: float) -> None:
        _log.debug("Run finished: samples=%d value=%s", self.samples_read, format_result(value))
        stream_trace("run.end", samples=self.samples_read, value=format_result(value))
