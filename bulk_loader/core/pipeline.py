import time
from typing import Any, Callable, Iterator, List, Optional, Sequence

from ..setup.config import LoadingConfig
from ..setup.logging import logger
from .channel import JobChannel
from .exceptions import ReorderError
from .executor import InsertExecutor
from .interfaces import RowSink, RowSource
from .reorder import FieldReorderer
from .schemas import Header, LoadResult
from .tracker import CompletionTracker
from .workers import WorkerPool


class BulkLoadPipeline:
    """
    Reads records from a source and inserts them into a sink through a fixed
    pool of workers.

    The calling thread is the producer: it captures the header, reorders each
    following record into a job, counts it as pending and enqueues it. Workers
    insert jobs with unbounded retry and mark each one done. ``run`` returns
    once every dispatched job has been inserted.
    """

    def __init__(
        self,
        source: RowSource,
        sink: RowSink,
        table: str,
        workers: int = 100,
        queue_size: int = 100,
        retry_delay: float = 1.0,
        progress_interval: int = 100,
        columns: Optional[Sequence[str]] = None,
        sleep: Callable[[float], Any] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.sink = sink
        self.table = table
        self.workers = workers
        self.queue_size = queue_size
        self.retry_delay = retry_delay
        self.progress_interval = progress_interval
        self.columns = list(columns) if columns else None
        self.sleep = sleep
        self.clock = clock
        self.tracker = CompletionTracker()

    @classmethod
    def from_config(cls, source: RowSource, sink: RowSink, config: LoadingConfig, **kwargs) -> "BulkLoadPipeline":
        return cls(
            source,
            sink,
            table=config.table_name,
            workers=config.workers,
            queue_size=config.queue_size,
            retry_delay=config.retry_delay_seconds,
            progress_interval=config.progress_interval,
            columns=config.columns,
            **kwargs,
        )

    def run(self) -> LoadResult:
        start = self.clock()
        result = LoadResult()
        records = iter(self.source)

        header = self._read_header(records, result)
        if header is None:
            result.elapsed_seconds = self.clock() - start
            return result

        reorderer = FieldReorderer(header, self.columns)
        if reorderer.missing_columns:
            logger.error(
                f"[Pipeline] Columns {reorderer.missing_columns} are not in the file header "
                f"{list(header.columns)}; affected records will be skipped"
            )

        executor = InsertExecutor(
            self.sink,
            Header(columns=reorderer.columns),
            self.table,
            retry_delay=self.retry_delay,
            sleep=self.sleep,
        )
        channel = JobChannel(maxsize=self.queue_size)
        pool = WorkerPool(
            self.workers,
            channel,
            executor,
            self.tracker,
            progress_interval=self.progress_interval,
        )

        pool.start()
        try:
            self._dispatch(records, reorderer, channel, result)
        finally:
            channel.close()

        self.tracker.wait()
        result.rows_inserted = pool.join()
        result.per_worker = pool.inserted_per_worker
        result.elapsed_seconds = self.clock() - start

        logger.info(
            f"[Pipeline] {result.rows_inserted} rows inserted into {self.table}, "
            f"{result.rows_skipped} skipped, {pool.failed_attempts} failed attempts retried"
        )
        return result

    def _read_header(self, records: Iterator[List[str]], result: LoadResult) -> Optional[Header]:
        try:
            first = next(records)
        except StopIteration:
            logger.warning("[Pipeline] Source is empty, nothing to load")
            return None
        except Exception as e:
            logger.error(f"[Pipeline] Could not read header: {e}")
            result.read_error = str(e)
            return None

        header = Header.from_record(first)
        logger.info(f"[Pipeline] Header captured: {list(header.columns)}")
        return header

    def _dispatch(
        self,
        records: Iterator[List[str]],
        reorderer: FieldReorderer,
        channel: JobChannel,
        result: LoadResult,
    ) -> None:
        logger.info("[Pipeline] Reading records...")
        sequence = 0
        while True:
            try:
                record = next(records)
            except StopIteration:
                break
            except Exception as e:
                logger.error(f"[Pipeline] Stopped reading: {e}")
                result.read_error = str(e)
                break

            sequence += 1
            result.records_read += 1
            try:
                job = reorderer.reorder(record, sequence)
            except ReorderError as e:
                logger.error(f"[Pipeline] Skipping record {sequence}: {e}")
                result.rows_skipped += 1
                continue

            # Count before enqueue so a worker never marks an uncounted job done
            self.tracker.add(1)
            channel.put(job)
            result.jobs_dispatched += 1
