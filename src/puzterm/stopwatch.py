import time
from typing import Callable, Optional


class Stopwatch:
    """Accumulates running time across start/stop pairs."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def elapsed(self) -> float:
        """Seconds counted so far, including the current run."""
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + self._clock() - self._started_at
