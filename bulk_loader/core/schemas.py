from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


# Position returned for a column name that is not part of a header
NOT_FOUND = -1


@dataclass(frozen=True)
class Header:
    """
    Canonical, ordered column names captured from the first source record.

    Built once by the producer and passed explicitly to whoever needs it;
    read-only for the rest of the run.
    """

    columns: Tuple[str, ...]

    @classmethod
    def from_record(cls, record: List[str]) -> "Header":
        return cls(columns=tuple(name.strip() for name in record))

    def index_of(self, name: str) -> int:
        """Position of ``name`` in the header, or ``NOT_FOUND``."""
        for index, value in enumerate(self.columns):
            if value == name:
                return index
        return NOT_FOUND

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)


@dataclass(frozen=True)
class Job:
    """One record's values in canonical column order, queued for insertion."""

    sequence: int
    values: Tuple[Any, ...]


@dataclass
class LoadResult:
    """Summary of a completed run."""

    records_read: int = 0
    jobs_dispatched: int = 0
    rows_inserted: int = 0
    rows_skipped: int = 0
    elapsed_seconds: float = 0.0
    read_error: Optional[str] = None
    per_worker: dict = field(default_factory=dict)
