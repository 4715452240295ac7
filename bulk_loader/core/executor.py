"""
Insert executor with an unbounded fixed-delay retry loop.

States::

    ATTEMPT --success--> DONE
    ATTEMPT --failure--> WAIT --delay--> ATTEMPT

There is no terminal failure state: a row is retried until it is inserted or
the process is stopped from outside.
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..setup.logging import logger
from .interfaces import RowSink
from .schemas import Header, Job


class AttemptState(str, Enum):
    ATTEMPT = "attempt"
    WAIT = "wait"
    DONE = "done"


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of one insert attempt."""

    ok: bool
    error: Optional[BaseException] = None

    @property
    def next_state(self) -> AttemptState:
        return AttemptState.DONE if self.ok else AttemptState.WAIT


class InsertExecutor:
    """
    Inserts one job per call, retrying until the sink accepts it.

    Args:
        sink: Row sink providing transactions
        header: Column order of every insert of the run
        table: Target table
        retry_delay: Seconds to wait between attempts
        sleep: Delay function, replaceable in tests
    """

    def __init__(
        self,
        sink: RowSink,
        header: Header,
        table: str,
        retry_delay: float = 1.0,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        self.sink = sink
        self.header = header
        self.table = table
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.statement = sink.prepare_insert(table, header.columns)

    def attempt(self, job: Job) -> AttemptResult:
        """One transaction: execute the insert and commit. Never raises."""
        try:
            with self.sink.transaction() as tx:
                self.sink.execute(tx, self.statement, job.values)
        except Exception as e:
            return AttemptResult(ok=False, error=e)
        return AttemptResult(ok=True)

    def insert(self, job: Job, worker_id: int = 0) -> int:
        """
        Insert ``job``, retrying after every failure.

        Returns:
            int: Number of failed attempts before the insert succeeded
        """
        failures = 0
        state = AttemptState.ATTEMPT
        while state is not AttemptState.DONE:
            if state is AttemptState.ATTEMPT:
                result = self.attempt(job)
                state = result.next_state
                if not result.ok:
                    failures += 1
                    logger.warning(
                        f"[Worker #{worker_id}] Error inserting job {job.sequence} "
                        f"(attempt {failures}): {result.error}"
                    )
            else:
                self.sleep(self.retry_delay)
                state = AttemptState.ATTEMPT
        return failures
