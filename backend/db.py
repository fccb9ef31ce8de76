# backend/db.py
# Database access layer: one process-wide SQLAlchemy engine (PostgreSQL in production, SQLite for dev/tests)

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional, Union

from sqlalchemy import create_engine, pool, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.engine.url import make_url

from backend.config import DB_MAX_OVERFLOW, DB_POOL_SIZE, get_database_url, is_postgres_url

logger = logging.getLogger(__name__)

# Global engine, created once by init_engine()
_engine: Union[Engine, None] = None


def init_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create the process-wide engine.

    Called once at startup. Passing an explicit URL replaces any existing
    engine (used by tests to point at a throwaway database).

    Raises:
        RuntimeError: If no URL is given and DATABASE_URL is not set
        ValueError: Postgres URL without a host, or an unsupported scheme
    """
    global _engine

    url = database_url or get_database_url()
    parsed = make_url(url)

    if _engine is not None:
        _engine.dispose()

    if is_postgres_url(url):
        if not parsed.host:
            raise ValueError(f"Invalid DATABASE_URL: {url[:20]}...")
        _engine = create_engine(
            url,
            poolclass=pool.QueuePool,
            pool_size=DB_POOL_SIZE,
            max_overflow=DB_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before use
            echo=False,
        )
        logger.info("[DB] Using PostgreSQL (%s)", parsed.host)
    elif parsed.get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints in a threadpool
        _engine = create_engine(url, connect_args={"check_same_thread": False}, echo=False)
        logger.info("[DB] Using SQLite (%s)", parsed.database or "memory")
    else:
        raise ValueError(f"Unsupported DATABASE_URL scheme: {parsed.drivername}")

    return _engine


def get_engine() -> Engine:
    """Return the engine, creating it from DATABASE_URL on first use."""
    if _engine is None:
        init_engine()
    return _engine


def dispose_engine() -> None:
    """Close pooled connections and forget the engine (shutdown hook)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None


def is_postgres() -> bool:
    return get_engine().dialect.name == "postgresql"


@contextmanager
def get_db_connection() -> Generator[Connection, None, None]:
    """
    Context manager for database connections.
    Checks a connection out of the pool and returns it on exit.
    Uncommitted work is rolled back when the block exits.
    """
    with get_engine().connect() as conn:
        yield conn


def execute_query(
    conn: Connection,
    query: str,
    params: Optional[Dict[str, Any]] = None,
) -> CursorResult:
    """
    Execute a raw SQL query with named parameters (``:name`` style).

    Args:
        conn: Database connection
        query: SQL query text
        params: Named parameters

    Returns:
        SQLAlchemy CursorResult
    """
    return conn.execute(text(query), params or {})


def commit(conn: Connection) -> None:
    conn.commit()
