"""Frame timing with a capped time step."""

import time


class FrameClock:
    """Measures the time between frames, capped at ``max_delta`` seconds."""

    def __init__(self, source=None, max_delta=0.06):
        if source is None:
            start = time.monotonic()

            def source():
                return time.monotonic() - start

        self._source = source
        self.max_delta = max_delta
        self.delta_time = 0.0
        self._last_frame = 0.0

    def tick(self):
        """Advance one frame and return the capped time step."""
        current = float(self._source())
        delta = current - self._last_frame
        self._last_frame = current
        if delta > self.max_delta:
            delta = self.max_delta
        self.delta_time = delta
        return delta

    def now(self):
        """Return the current time of the clock's source."""
        return float(self._source())