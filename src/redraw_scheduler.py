# redraw_scheduler.py
import logging
import time

logger = logging.getLogger(__name__)

# Return value that tells a GLib timeout not to repeat.
SOURCE_REMOVE = False


class RedrawScheduler:
    """
    Self-perpetuating one-shot timer chain. Each tick calls `callback` and
    schedules the next tick at the start of the following interval, which
    keeps the second hand in step with the wall clock without drift.

    `timeout_add(delay_ms, func)` and `source_remove(source_id)` are the
    host's timer functions, e.g. GLib.timeout_add and GLib.source_remove.
    A callback that returns False ends the chain.
    """

    def __init__(self, callback, timeout_add, source_remove, interval_ms=1000, clock=time.time):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._callback = callback
        self._timeout_add = timeout_add
        self._source_remove = source_remove
        self.interval_ms = int(interval_ms)
        self._clock = clock
        self._source_id = None

    @property
    def is_running(self):
        return self._source_id is not None

    def next_delay_ms(self, now=None):
        """Milliseconds from `now` (seconds since the epoch) to the next interval boundary."""
        now = self._clock() if now is None else now
        now_ms = int(round(now * 1000))
        return self.interval_ms - (now_ms % self.interval_ms)

    def start(self):
        self.stop()
        self._schedule()

    def stop(self):
        if self._source_id is not None:
            self._source_remove(self._source_id)
            self._source_id = None

    def _schedule(self):
        delay = self.next_delay_ms()
        self._source_id = self._timeout_add(delay, self._tick)

    def _tick(self):
        self._source_id = None
        if self._callback() is False:
            logger.debug("Redraw chain stopped by its callback.")
            return SOURCE_REMOVE
        self._schedule()
        return SOURCE_REMOVE
