import logging

import pytest

from bulk_loader.core.channel import JobChannel
from bulk_loader.core.executor import InsertExecutor
from bulk_loader.core.schemas import Header, Job
from bulk_loader.core.tracker import CompletionTracker
from bulk_loader.core.workers import WorkerPool

HEADER = Header(columns=("id", "name"))


def feed(channel, tracker, n):
    for i in range(1, n + 1):
        tracker.add(1)
        channel.put(Job(i, (str(i), f"name{i}")))
    channel.close()


def test_pool_size_must_be_positive(fake_sink):
    with pytest.raises(ValueError):
        WorkerPool(0, JobChannel(), InsertExecutor(fake_sink, HEADER, "t"), CompletionTracker())


def test_every_job_inserted_once_and_marked_done(fake_sink):
    channel = JobChannel(maxsize=4)
    tracker = CompletionTracker()
    pool = WorkerPool(3, channel, InsertExecutor(fake_sink, HEADER, "t"), tracker)

    pool.start()
    feed(channel, tracker, 25)

    assert tracker.wait(timeout=10)
    assert pool.join() == 25
    assert sorted(int(v[0]) for _, v in fake_sink.rows) == list(range(1, 26))
    assert sum(pool.inserted_per_worker.values()) == 25
    assert tracker.pending == 0


def test_tracker_not_released_until_retried_job_succeeds(sink_factory, recording_sleep):
    sink = sink_factory(faults={"2": 3})
    channel = JobChannel(maxsize=2)
    tracker = CompletionTracker()
    executor = InsertExecutor(sink, HEADER, "t", sleep=recording_sleep)
    pool = WorkerPool(2, channel, executor, tracker)

    pool.start()
    feed(channel, tracker, 3)

    assert tracker.wait(timeout=10)
    pool.join()
    assert len(sink.rows) == 3
    assert pool.failed_attempts == 3
    assert len(recording_sleep.calls) == 3


def test_concurrent_transactions_bounded_by_pool_size(sink_factory):
    sink = sink_factory(delay=0.01)
    channel = JobChannel(maxsize=10)
    tracker = CompletionTracker()
    pool = WorkerPool(4, channel, InsertExecutor(sink, HEADER, "t"), tracker)

    pool.start()
    feed(channel, tracker, 40)
    tracker.wait(timeout=10)
    pool.join()

    assert len(sink.rows) == 40
    assert 1 <= sink.max_active <= 4


def test_progress_logged_every_interval(fake_sink, caplog):
    channel = JobChannel(maxsize=10)
    tracker = CompletionTracker()
    pool = WorkerPool(1, channel, InsertExecutor(fake_sink, HEADER, "t"), tracker, progress_interval=5)

    with caplog.at_level(logging.INFO):
        pool.start()
        feed(channel, tracker, 12)
        tracker.wait(timeout=10)
        pool.join()

    progress = [r.getMessage() for r in caplog.records if "inserted" in r.getMessage() and "Worker #0" in r.getMessage()]
    assert progress == [
        "[Worker #0] inserted 0 data",
        "[Worker #0] inserted 5 data",
        "[Worker #0] inserted 10 data",
    ]


def test_start_twice_rejected(fake_sink):
    channel = JobChannel()
    pool = WorkerPool(1, channel, InsertExecutor(fake_sink, HEADER, "t"), CompletionTracker())
    pool.start()
    try:
        with pytest.raises(RuntimeError):
            pool.start()
    finally:
        channel.close()
        pool.join()


def test_join_without_start_returns_zero(fake_sink):
    pool = WorkerPool(1, JobChannel(), InsertExecutor(fake_sink, HEADER, "t"), CompletionTracker())
    assert pool.join() == 0
