"""Execution driver: runs one algorithm over a private copy of an array."""

import enum
import logging
import time

from .algorithms import USER_CODE, display_name, get_step_function
from .channel import InstrumentationChannel, never, no_delay
from .errors import SortCancelled, SortError, SortRuntimeError
from .loader import load_step_function
from .stats import Highlight, SortStats

logger = logging.getLogger(__name__)


class RunState(enum.Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"
    FAILED    = "failed"
    CANCELLED = "cancelled"


class SortDriver:
    """
    Binds an algorithm key to a callback and pacing sources.

    A prebuilt step (e.g. from load_sorter_file) may stand in for the
    user source, with name as its display name.

    run(initial) copies the input, zeroes the counters and drives the
    algorithm. It returns the final SortStats on success and None when the
    run failed or was cancelled; in the failure case the error is kept on
    ``self.error`` and its message is passed to the callback.
    """

    def __init__(self, key, callback=None, get_delay=no_delay, is_paused=never,
                 is_cancelled=never, source=None, rng=None, step=None, name=None):
        if key == USER_CODE and not (source or step):
            raise ValueError("User code must be provided for 'user_code' algorithm.")
        self.key          = key
        self.name         = name or display_name(key)
        self.source       = source
        self.rng          = rng
        self.callback     = callback
        self.get_delay    = get_delay
        self.is_paused    = is_paused
        self.is_cancelled = is_cancelled
        if step is None and key != USER_CODE:
            step = get_step_function(key, rng)
        self._step        = step

        self.state = RunState.IDLE
        self.stats = SortStats()
        self.arr   = []
        self.error = None

    def _notify(self, arr, stats, error=None):
        if self.callback is None:
            return
        if error is None:
            self.callback(arr, Highlight(), stats)
        else:
            self.callback(arr, Highlight(), stats, error)

    def _fail(self, initial, error):
        self.state = RunState.FAILED
        self.error = error
        logger.error("Error in %s sort: %s", self.key, error)
        try:
            self._notify(list(initial), self.stats.copy(), str(error))
        except Exception:
            logger.exception("callback raised while reporting failure of %s", self.key)
        return None

    def run(self, initial):
        if self.state is RunState.RUNNING:
            raise RuntimeError(f"{self.name} is already running")
        initial    = list(initial)
        self.arr   = list(initial)
        self.stats = SortStats()
        self.error = None

        step = self._step
        if step is None:
            step, err = load_step_function(self.source)
            if err is not None:
                return self._fail(initial, err)

        channel = InstrumentationChannel(self.arr, self.stats, self.callback,
                                         self.get_delay, self.is_paused, self.is_cancelled)
        self.state = RunState.RUNNING
        start = time.perf_counter()

        def elapsed():
            return (time.perf_counter() - start) * 1000.0 - channel.paused_ms

        try:
            step(self.arr, channel, self.stats)
        except SortCancelled:
            self.state = RunState.CANCELLED
            logger.info("%s cancelled after %d events", self.name, channel.events)
            return None
        except SortError as e:
            self.stats.time = elapsed()
            return self._fail(initial, e)
        except Exception as e:
            self.stats.time = elapsed()
            return self._fail(initial, SortRuntimeError.from_exception(e))
        self.stats.time = elapsed()

        if self.is_cancelled():
            self.state = RunState.CANCELLED
            return None
        self.state = RunState.COMPLETED
        try:
            self._notify(list(self.arr), self.stats.copy())
        except Exception:
            logger.exception("callback raised on the final update of %s", self.key)
        return self.stats.copy()
