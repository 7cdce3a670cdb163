import logging
import time

from .errors import SortCancelled
from .settings import PAUSE_POLL_INTERVAL
from .stats import Highlight

logger = logging.getLogger(__name__)


def never() -> bool:
    return False


def no_delay() -> float:
    return 0


class InstrumentationChannel:
    """
    The emit() handed to a running algorithm.

    Each call merges a counter delta, delivers a snapshot to the host
    callback, then waits out any pause and the configured step delay.
    It is the only place a run ever blocks, so callbacks arrive in exactly
    the order the algorithm performed its steps.
    """

    def __init__(self, arr, stats, callback=None,
                 get_delay=no_delay, is_paused=never, is_cancelled=never,
                 poll_interval=PAUSE_POLL_INTERVAL):
        self.arr           = arr
        self.stats         = stats
        self.callback      = callback
        self.get_delay     = get_delay
        self.is_paused     = is_paused
        self.is_cancelled  = is_cancelled
        self.poll_interval = poll_interval
        self.paused_ms     = 0.0
        self.events        = 0

    def __call__(self, highlight=None, delta=None):
        self.emit(highlight, delta)

    def _check_cancel(self):
        if self.is_cancelled():
            raise SortCancelled()

    def emit(self, highlight=None, delta=None):
        self._check_cancel()
        self.stats.update(delta)
        highlight = Highlight.coerce(highlight)
        self.events += 1
        if self.callback is not None:
            self.callback(list(self.arr), highlight, self.stats.copy())

        if self.is_paused():
            start = time.perf_counter()
            logger.debug("paused after event %d", self.events)
            while self.is_paused():
                self._check_cancel()
                time.sleep(self.poll_interval)
            self.paused_ms += (time.perf_counter() - start) * 1000.0

        delay = self.get_delay()
        if delay and delay > 0:
            time.sleep(delay / 1000.0)
        self._check_cancel()
