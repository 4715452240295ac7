from typing import Any, ContextManager, Iterator, List, Protocol, Sequence


class RowSource(Protocol):
    """Ordered stream of raw records; the first record is the header."""

    def __iter__(self) -> Iterator[List[str]]:
        """Yield raw records in file order; stop at end of input."""
        ...

    def close(self) -> None:
        """Release the underlying file."""
        ...


class RowSink(Protocol):
    """Transactional destination for single-row inserts."""

    def transaction(self) -> ContextManager[Any]:
        """Open a transaction scope; commit on clean exit, roll back otherwise."""
        ...

    def execute(self, tx: Any, statement: Any, values: Sequence[Any]) -> None:
        """Execute ``statement`` with ``values`` bound in order inside ``tx``."""
        ...

    def prepare_insert(self, table: str, columns: Sequence[str]) -> Any:
        """Build the insert statement used for every row of the run."""
        ...
