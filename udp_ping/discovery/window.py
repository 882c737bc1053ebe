"""Collection window timing for the Prober."""

import time
from typing import Optional


class CollectionWindow:
    """Tracks the fixed interval during which replies are accepted."""

    def __init__(self, duration: float):
        """Initialize collection window.

        Args:
            duration: Window length in seconds, counted from start().
        """
        self.duration = duration
        self._start_time: Optional[float] = None

    @property
    def started(self) -> bool:
        """Whether start() has been called."""
        return self._start_time is not None

    @property
    def elapsed(self) -> float:
        """Seconds elapsed since start."""
        if self._start_time is None:
            return 0.0
        return time.monotonic() - self._start_time

    @property
    def remaining(self) -> float:
        """Seconds remaining before the window closes."""
        return max(0.0, self.duration - self.elapsed)

    @property
    def is_closed(self) -> bool:
        """Whether the window has passed its deadline."""
        return self.started and self.elapsed > self.duration

    def start(self) -> None:
        """Start the window timer."""
        self._start_time = time.monotonic()
