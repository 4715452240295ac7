import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, List

from ..setup.logging import logger
from .channel import JobChannel
from .executor import InsertExecutor
from .tracker import CompletionTracker


class WorkerPool:
    """
    Fixed number of workers pulling jobs from a channel.

    Every worker inserts its jobs one at a time through the executor and marks
    each one done on the tracker after it has been inserted. Workers stop
    once the channel is closed and drained.
    """

    def __init__(
        self,
        size: int,
        channel: JobChannel,
        executor: InsertExecutor,
        tracker: CompletionTracker,
        progress_interval: int = 100,
    ):
        if size < 1:
            raise ValueError("Worker pool needs at least one worker")
        self.size = size
        self.channel = channel
        self.executor = executor
        self.tracker = tracker
        self.progress_interval = progress_interval
        self._pool: ThreadPoolExecutor = None
        self._futures: List[Future] = []
        self._counts: Dict[int, int] = {}
        self._failures: Dict[int, int] = {}
        self._lock = threading.Lock()

    def start(self) -> None:
        if self._pool is not None:
            raise RuntimeError("Worker pool already started")
        logger.info(f"[WorkerPool] Dispatching {self.size} workers...")
        self._pool = ThreadPoolExecutor(max_workers=self.size, thread_name_prefix="worker")
        self._futures = [self._pool.submit(self._work, index) for index in range(self.size)]

    def _work(self, worker_id: int) -> int:
        logger.debug(f"[Worker #{worker_id}] started")
        counter = 0
        for job in self.channel:
            failures = self.executor.insert(job, worker_id)
            self.tracker.done()
            if counter % self.progress_interval == 0:
                logger.info(f"[Worker #{worker_id}] inserted {counter} data")
            counter += 1
            with self._lock:
                self._counts[worker_id] = counter
                self._failures[worker_id] = self._failures.get(worker_id, 0) + failures
        logger.debug(f"[Worker #{worker_id}] finished after {counter} rows")
        return counter

    def join(self) -> int:
        """
        Wait for every worker to finish.

        Returns:
            int: Total rows inserted by the pool

        Raises:
            Exception: The first fault that escaped a worker loop
        """
        if self._pool is None:
            return 0
        wait(self._futures)
        self._pool.shutdown(wait=True)
        total = 0
        for future in self._futures:
            total += future.result()
        return total

    @property
    def inserted_per_worker(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._counts)

    @property
    def failed_attempts(self) -> int:
        with self._lock:
            return sum(self._failures.values())
