# src/streamavg/app/services/averagers.py
from __future__ import annotations

from streamavg.app.core.config import ConfigError


class CumulativeAverager:
    """
    Running mean over every sample seen since the last reset.

    CA[i+1] = (x[i+1] + i * CA[i]) / (i + 1), kept as a running sum:
      total += x; count += 1; average = total / count
    """

    def __init__(self) -> None:
        self.total = 0.0
        self.count = 0
        self.average = 0.0

    def update(self, x: float) -> float:
        self.total += x
        self.count += 1
        self.average = self.total / self.count
        return self.average

    def value(self) -> float:
        return self.average

    def reset(self) -> None:
        self.total = 0.0
        self.count = 0
        self.average = 0.0


class SimpleMovingAverager:
    """
    Mean of window means over fixed, non-overlapping windows.

    - Samples go into `current_window` until it holds `window_size` of them.
    - The full window's mean is folded into `across_windows`, then the window resets.
    - A trailing partial window never reaches `value()`.
    """

    def __init__(self, window_size: int = 10) -> None:
        self.current_window = CumulativeAverager()
        self.across_windows = CumulativeAverager()
        self.window_size = 0
        self.configure(window_size)

    def configure(self, window_size: int) -> None:
        if window_size <= 0:
            raise ConfigError(f"Window size must be a positive integer, got {window_size}")
        self.current_window.reset()
        self.across_windows.reset()
        self.window_size = window_size

    def update(self, x: float) -> float:
        self.current_window.update(x)
        if self.current_window.count == self.window_size:
            self.across_windows.update(self.current_window.value())
            self.current_window.reset()
        return self.across_windows.value()

    def value(self) -> float:
        return self.across_windows.value()
