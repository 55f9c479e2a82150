"""Wall-clock timer used to time benchmark phases."""

from __future__ import annotations

import time


class _Clock:
    def __init__(self) -> None:
        self._start: float | None = None

    def elapsed(self) -> float:
        now = time.perf_counter()
        if self._start is None:
            self._start = now
            return 0.0
        return now - self._start


_clock = _Clock()


def mytimer() -> float:
    """Return seconds elapsed since the first call; the first call returns 0.0."""
    return _clock.elapsed()