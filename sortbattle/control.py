import threading

from .settings import DEFAULT_DELAY


class RunControl:
    """
    Host-side knobs shared by one or more running drivers.

    The drivers only ever call get_delay(), is_paused() and is_cancelled(),
    so speed can change and pause/cancel can flip from any thread mid-run.
    """

    def __init__(self, delay_ms: float = DEFAULT_DELAY):
        self.delay_ms   = delay_ms
        self._paused    = threading.Event()
        self._cancelled = threading.Event()

    def get_delay(self) -> float:
        return self.delay_ms

    def set_delay(self, delay_ms: float):
        self.delay_ms = delay_ms

    def is_paused(self) -> bool:
        return self._paused.is_set()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def pause(self):
        self._paused.set()

    def resume(self):
        self._paused.clear()

    def toggle_pause(self) -> bool:
        if self.is_paused(): self.resume()
        else:                self.pause()
        return self.is_paused()

    def cancel(self):
        self._cancelled.set()
