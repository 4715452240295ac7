"""
Shared fixtures for the bulk loader test suite.
"""
import csv
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import List

# Keep log files out of the working tree and the console quiet
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "bulk_loader_test_logs"))
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest


def write_csv(path: str, rows: List[List[str]], delimiter: str = ",") -> str:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerows(rows)
    return path


@pytest.fixture
def csv_file_factory(tmp_path):
    """Create CSV files from lists of rows (header first)."""
    counter = {"n": 0}

    def _create(rows: List[List[str]], delimiter: str = ",") -> str:
        counter["n"] += 1
        return write_csv(str(tmp_path / f"input_{counter['n']}.csv"), rows, delimiter)

    return _create


class FakeRowSink:
    """
    In-memory row sink recording committed inserts.

    ``fail_first`` makes the first N attempts of every job raise; ``faults``
    maps a job's first value to the number of attempts that should fail.
    """

    def __init__(self, fail_first: int = 0, faults: dict = None, delay: float = 0.0):
        self.rows = []
        self.statements = []
        self.attempts = {}
        self.fail_first = fail_first
        self.faults = dict(faults or {})
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self.rollbacks = 0
        self._lock = threading.Lock()

    def prepare_insert(self, table, columns):
        statement = (table, tuple(columns))
        self.statements.append(statement)
        return statement

    @contextmanager
    def transaction(self):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        pending = []
        try:
            yield pending
            with self._lock:
                self.rows.extend(pending)
        except Exception:
            with self._lock:
                self.rollbacks += 1
            raise
        finally:
            with self._lock:
                self.active -= 1

    def execute(self, tx, statement, values):
        key = values[0] if values else None
        with self._lock:
            attempt = self.attempts.get(key, 0) + 1
            self.attempts[key] = attempt
            should_fail = attempt <= self.fail_first or attempt <= self.faults.get(key, 0)
        if self.delay:
            threading.Event().wait(self.delay)
        if should_fail:
            raise RuntimeError(f"simulated failure #{attempt} for {key}")
        tx.append((statement, tuple(values)))


@pytest.fixture
def fake_sink():
    return FakeRowSink()


@pytest.fixture
def sink_factory():
    """Build fake sinks with custom failure injection."""
    return FakeRowSink


class RecordingSleep:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self):
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, seconds):
        with self._lock:
            self.calls.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
