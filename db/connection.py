"""
db/connection.py
----------------
Process-wide PostgreSQL connection pool.

Repositories borrow a connection per query with `get_connection()` and hand
it back with `release_connection()`. The pool is a psycopg2
ThreadedConnectionPool, so lookups may run from several threads at once.
Connections handed back inside an open read transaction are rolled back by
the pool before reuse.
"""

from typing import Optional

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None


def init_pool(
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
    dsn: Optional[str] = None,
) -> None:
    """
    Open the pool. Calling it again while a pool is open does nothing.

    Args:
        min_conn: Connections opened up front.
        max_conn: Upper bound on concurrently borrowed connections.
        dsn: Connection string; defaults to ``config.DATABASE_URL``.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn or DATABASE_URL)
    except psycopg2.OperationalError as e:
        logger.error(f"Could not open connection pool: {e}")
        raise
    logger.info(f"Connection pool open ({min_conn}-{max_conn} connections).")


def get_connection():
    """
    Borrow a connection.

    Raises:
        RuntimeError: If init_pool() has not been called.
        psycopg2.pool.PoolError: If every connection is already borrowed.
    """
    if _pool is None:
        raise RuntimeError("Connection pool is not open. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Hand a borrowed connection back to the pool."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close every pooled connection. Safe to call when no pool is open."""
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("Connection pool closed.")
