import threading
from typing import Optional


class CompletionTracker:
    """
    Counts jobs dispatched but not yet inserted.

    The producer calls ``add`` before each job is enqueued; the worker that
    inserted a job calls ``done`` once. ``wait`` blocks until the count is zero.
    """

    def __init__(self):
        self._pending = 0
        self._condition = threading.Condition()

    @property
    def pending(self) -> int:
        with self._condition:
            return self._pending

    def add(self, n: int = 1) -> None:
        if n < 0:
            raise ValueError("Cannot add a negative number of pending jobs")
        with self._condition:
            self._pending += n

    def done(self) -> None:
        """
        Mark one job as inserted.

        Raises:
            ValueError: If no job is pending
        """
        with self._condition:
            if self._pending == 0:
                raise ValueError("done() called with no pending jobs")
            self._pending -= 1
            if self._pending == 0:
                self._condition.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until nothing is pending. Returns False if ``timeout`` elapsed first."""
        with self._condition:
            return self._condition.wait_for(lambda: self._pending == 0, timeout=timeout)
