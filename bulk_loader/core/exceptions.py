"""
Exception hierarchy for the bulk loader.

Startup errors abort the run before any work begins. Row-level errors
(``RowSourceError``, ``ReorderError``) are handled by the producer and never
reach the worker pool. Insert failures are not represented here: the insert
executor reports them as failed attempts and retries.
"""


class BulkLoaderError(Exception):
    """Base class for all bulk loader errors."""


class StartupError(BulkLoaderError):
    """The run cannot start; fatal for the whole process."""


class ConfigurationError(StartupError):
    """Configuration could not be loaded or failed validation."""


class SourceUnavailableError(StartupError):
    """The row source could not be opened."""


class SinkUnavailableError(StartupError):
    """The row sink could not be reached."""


class RowSourceError(BulkLoaderError):
    """The row source failed while reading (other than end of input)."""


class ReorderError(BulkLoaderError):
    """A record could not be mapped onto the canonical column order."""

    def __init__(self, message: str, column: str = None, sequence: int = None):
        super().__init__(message)
        self.column = column
        self.sequence = sequence


class ChannelClosedError(BulkLoaderError):
    """A job was offered to a channel that has already been closed."""
