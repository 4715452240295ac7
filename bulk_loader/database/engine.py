from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Engine

from ..setup.logging import logger


class Database:
    """
    Represents a database connection pool bounded by a hard cap on
    concurrently open connections.
    """

    def __init__(self, engine: Engine, max_open_connections: int):
        self.engine = engine
        self.max_open_connections = max_open_connections

    def dispose(self):
        """Close every pooled connection."""
        self.engine.dispose()

    def __repr__(self):
        return f"Database(engine={self.engine}, max_open_connections={self.max_open_connections})"


def create_database_instance(
    uri: str,
    max_open_connections: int = 100,
    max_idle_connections: int = 4,
    pool_timeout: float = 30.0,
) -> Database:
    """
    Create an engine whose pool never holds more than ``max_open_connections``
    connections. Checkouts beyond the cap wait up to ``pool_timeout`` seconds.
    """
    # Pooled SQLite connections move between worker threads
    connect_args = {"check_same_thread": False} if uri.startswith("sqlite") else {}
    engine = create_engine(
        uri,
        connect_args=connect_args,
        poolclass=pool.QueuePool,
        pool_size=max_idle_connections,
        max_overflow=max_open_connections - max_idle_connections,
        pool_timeout=pool_timeout,
        pool_recycle=3600,
        pool_pre_ping=True,
    )
    logger.info(
        f"[Database] Engine created (max open: {max_open_connections}, "
        f"max idle: {max_idle_connections})"
    )
    return Database(engine=engine, max_open_connections=max_open_connections)
