"""
SQLAlchemy-backed row sink.

Each transaction checks a connection out of the engine's capped pool and
returns it on exit, so the number of concurrent transactions never exceeds
the pool's ``max_open_connections``.
"""
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from ..core.exceptions import SinkUnavailableError
from ..setup.logging import logger
from .dml import bind_values, build_insert_statement
from .engine import Database


class SqlAlchemyRowSink:
    """Row sink running single-row inserts inside engine transactions."""

    def __init__(self, database: Database):
        self.database = database

    @property
    def engine(self):
        return self.database.engine

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Commit on clean exit; roll back on any exception."""
        with self.engine.begin() as conn:
            yield conn

    def execute(self, tx: Connection, statement: TextClause, values: Sequence[Any]) -> None:
        tx.execute(statement, bind_values(values))

    def prepare_insert(self, table: str, columns: Sequence[str]) -> TextClause:
        quote = self.engine.dialect.identifier_preparer.quote
        return build_insert_statement(table, columns, quote)

    def ping(self) -> None:
        """
        Run ``SELECT 1`` against the sink.

        Raises:
            SinkUnavailableError: If no connection can be established
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise SinkUnavailableError(f"Error connecting to the database: {e}") from e
        logger.info(f'[RowSink] Connection to "{self.engine.url.database}" established!')

    def close(self) -> None:
        self.database.dispose()
        logger.info("[RowSink] Connection pool closed")
