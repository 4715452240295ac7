import queue
import threading
from typing import Iterator, Optional

from .exceptions import ChannelClosedError
from .schemas import Job

# Marker put on the queue by close(); consumers pass it on so every one of them stops
_CLOSED = object()


class JobChannel:
    """
    Bounded handoff of jobs from the producer to the workers.

    ``put`` blocks while the channel is full. After ``close`` no more jobs are
    accepted; consumers drain what is left and then stop.
    """

    def __init__(self, maxsize: int = 100):
        if maxsize < 1:
            raise ValueError("Channel capacity must be at least 1")
        self._queue: "queue.Queue" = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def put(self, job: Job) -> None:
        if self._closed.is_set():
            raise ChannelClosedError("Cannot put a job on a closed channel")
        self._queue.put(job)

    def close(self) -> None:
        """Signal that no more jobs will be produced. Idempotent."""
        with self._lock:
            if self._closed.is_set():
                return
            self._closed.set()
        self._queue.put(_CLOSED)

    def get(self) -> Optional[Job]:
        """Next job, blocking while open and empty; ``None`` once closed and drained."""
        item = self._queue.get()
        if item is _CLOSED:
            # Hand the marker to the next consumer
            self._queue.put(_CLOSED)
            return None
        return item

    def __iter__(self) -> Iterator[Job]:
        while True:
            job = self.get()
            if job is None:
                return
            yield job

    def qsize(self) -> int:
        return self._queue.qsize()
