from sqlalchemy.exc import ArgumentError, NoSuchModuleError

from ..core.exceptions import SinkUnavailableError
from ..core.source import CsvRowSource
from ..database.engine import create_database_instance
from ..database.sink import SqlAlchemyRowSink
from .config import AppConfig


def init_sink(config: AppConfig) -> SqlAlchemyRowSink:
    """
    Create the connection pool and check that the database answers.

    Args:
        config: Application configuration

    Returns:
        SqlAlchemyRowSink: Sink bound to a capped connection pool

    Raises:
        SinkUnavailableError: If the engine cannot be built or the database is unreachable
    """
    loading = config.loading
    db_uri = config.database.get_connection_string()
    try:
        database = create_database_instance(
            db_uri,
            max_open_connections=loading.max_open_connections,
            max_idle_connections=loading.max_idle_connections,
            pool_timeout=loading.pool_timeout_seconds,
        )
    except (ArgumentError, NoSuchModuleError, ImportError) as e:
        raise SinkUnavailableError(f"Cannot create database engine: {e}") from e

    sink = SqlAlchemyRowSink(database)
    try:
        sink.ping()
    except SinkUnavailableError:
        database.dispose()
        raise
    return sink


def init_source(config: AppConfig) -> CsvRowSource:
    """
    Open the input file.

    Raises:
        SourceUnavailableError: If the file cannot be opened
    """
    source = CsvRowSource(
        config.source.file_path,
        delimiter=config.source.delimiter,
        encoding=config.source.encoding,
    )
    return source.open()
