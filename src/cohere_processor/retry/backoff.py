"""
Deterministic exponential backoff.

Delay for attempt n (0-based) is min_delay * factor ** n, clamped to
[min_delay, max_delay]. No jitter: the same sequence of calls always yields
the same delays.
"""

from datetime import timedelta

DEFAULT_FACTOR = 2.0
DEFAULT_MIN_DELAY = timedelta(milliseconds=100)
DEFAULT_MAX_DELAY = timedelta(seconds=10)


class Backoff:
    """
    Backoff policy with an attempt counter.

    Non-positive factor / min / max fall back to 2 / 100ms / 10s.
    """

    def __init__(
        self,
        factor: float = DEFAULT_FACTOR,
        min_delay: timedelta = DEFAULT_MIN_DELAY,
        max_delay: timedelta = DEFAULT_MAX_DELAY,
    ):
        self.factor = factor if factor > 0 else DEFAULT_FACTOR
        self.min_delay = min_delay if min_delay > timedelta(0) else DEFAULT_MIN_DELAY
        self.max_delay = max_delay if max_delay > timedelta(0) else DEFAULT_MAX_DELAY
        self._attempt = 0

    @property
    def attempt(self) -> int:
        """Number of delays taken since the last reset."""
        return self._attempt

    def next_delay(self) -> timedelta:
        """Delay for the current attempt; advances the attempt counter."""
        delay = self.for_attempt(self._attempt)
        self._attempt += 1
        return delay

    def for_attempt(self, attempt: int) -> timedelta:
        """Delay for a given attempt number, without touching the counter."""
        if self.min_delay >= self.max_delay:
            return self.max_delay

        min_seconds = self.min_delay.total_seconds()
        try:
            seconds = min_seconds * self.factor ** attempt
        except OverflowError:
            return self.max_delay

        if seconds > self.max_delay.total_seconds():
            return self.max_delay
        if seconds < min_seconds:
            return self.min_delay
        return timedelta(seconds=seconds)

    def reset(self) -> None:
        """Restart from the first delay."""
        self._attempt = 0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"factor={self.factor}, min={self.min_delay}, max={self.max_delay}, "
            f"attempt={self._attempt})"
        )
