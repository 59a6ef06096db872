# scheduler.py
"""
Per-frame callback scheduling.

FrameScheduler is the host's "call me on the next frame" mechanism. The
entry point calls tick() once per display frame; a callback requested while
a tick is running is deferred to the next tick, so a self-rescheduling
callback runs exactly once per frame.
"""
import itertools
from typing import Callable, Dict


class FrameScheduler:
    """
    Queues callbacks for the next frame, like a browser's animation frame
    requests.
    """
    def __init__(self):
        self._pending: Dict[int, Callable[[], None]] = {}
        self._due: Dict[int, Callable[[], None]] = {}
        self._handles = itertools.count(1)

    def request_frame(self, callback: Callable[[], None]) -> int:
        """Queues callback for the next tick and returns a cancel handle."""
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        # A callback cancelled mid-tick must not run later in the same tick.
        self._pending.pop(handle, None)
        self._due.pop(handle, None)

    def tick(self) -> int:
        """
        Runs the callbacks queued before this tick, in request order.

        Returns:
            int: The number of callbacks run.
        """
        self._due, self._pending = self._pending, {}
        ran = 0
        while self._due:
            handle = next(iter(self._due))
            callback = self._due.pop(handle)
            callback()
            ran += 1
        return ran

    def __len__(self) -> int:
        return len(self._pending)
