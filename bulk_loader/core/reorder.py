"""
Maps raw records onto the canonical column order.

The target columns are resolved against the header by name, once per run.
Under well-formed input and the default target (the header itself) the
mapping is the identity; it still goes through name lookup so that column
order drift is caught instead of silently shifting values between columns.
"""
from typing import List, Optional, Sequence, Tuple

from .exceptions import ReorderError
from .schemas import NOT_FOUND, Header, Job


class FieldReorderer:
    """
    Reorders raw records into jobs.

    Args:
        header: Header captured from the first source record
        columns: Target column order; defaults to the header's own order
    """

    def __init__(self, header: Header, columns: Optional[Sequence[str]] = None):
        self.header = header
        self.columns: Tuple[str, ...] = tuple(columns) if columns else header.columns
        self.positions: Tuple[int, ...] = tuple(header.index_of(name) for name in self.columns)

    @property
    def missing_columns(self) -> List[str]:
        """Target columns absent from the header."""
        return [name for name, pos in zip(self.columns, self.positions) if pos == NOT_FOUND]

    def reorder(self, record: Sequence[str], sequence: int = 0) -> Job:
        """
        Build the job for ``record``.

        Raises:
            ReorderError: If a target column is not in the header or the
                record is too short to hold it
        """
        values = []
        for name, pos in zip(self.columns, self.positions):
            if pos == NOT_FOUND:
                raise ReorderError(
                    f"Column {name!r} not found in header", column=name, sequence=sequence
                )
            if pos >= len(record):
                raise ReorderError(
                    f"Record has {len(record)} fields, column {name!r} expects position {pos}",
                    column=name,
                    sequence=sequence,
                )
            values.append(record[pos])
        return Job(sequence=sequence, values=tuple(values))
