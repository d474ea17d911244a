"""Database connection pool helpers."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

import psycopg  # pylint: disable=import-error
from psycopg_pool import ConnectionPool, PoolTimeout

from ..core.env_utils import env_bool, env_float, env_int
from ..errors import DataUnavailable

logger = logging.getLogger(__name__)

_DB_POOL: ConnectionPool | None = None
_DB_POOL_LOCK = threading.Lock()


def _db_pool_enabled() -> bool:
    return env_bool("DB_POOL_ENABLE", True)


def _db_pool_sizes() -> tuple[int, int]:
    min_size = env_int("DB_POOL_MIN", 2, minimum=0)
    max_size = env_int("DB_POOL_MAX", 8, minimum=1)
    max_size = max(max_size, min_size)
    return min_size, max_size


def _db_pool_timeout() -> float:
    return env_float("DB_POOL_TIMEOUT", 3.0, minimum=0.1)


def get_db_pool(db_url: str | None) -> ConnectionPool | None:
    """Return the process-wide pool, creating it on first use."""
    global _DB_POOL  # pylint: disable=global-statement
    if not db_url or not _db_pool_enabled():
        return None
    pool = _DB_POOL
    if pool is not None:
        return pool
    with _DB_POOL_LOCK:
        if _DB_POOL is not None:
            return _DB_POOL
        min_size, max_size = _db_pool_sizes()
        try:
            pool = ConnectionPool(
                db_url,
                min_size=min_size,
                max_size=max_size,
                timeout=_db_pool_timeout(),
                open=True,
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning(
                "DB pool init failed; falling back to direct connections: %s",
                exc,
            )
            pool = None
        _DB_POOL = pool
    return pool


def close_db_pool() -> None:
    """Close and forget the process-wide pool."""
    global _DB_POOL  # pylint: disable=global-statement
    with _DB_POOL_LOCK:
        pool, _DB_POOL = _DB_POOL, None
    if pool is not None:
        pool.close()


@contextmanager
def _pool_connection(pool: ConnectionPool) -> Iterator[psycopg.Connection]:
    try:
        with pool.connection() as conn:
            yield conn
    except PoolTimeout as exc:
        raise DataUnavailable(
            "Database connection pool exhausted; try again shortly."
        ) from exc


@contextmanager
def _direct_connection(
    db_url: str,
    connect_timeout: int | None,
) -> Iterator[psycopg.Connection]:
    connect_kwargs: dict[str, Any] = {}
    if connect_timeout is not None:
        connect_kwargs["connect_timeout"] = connect_timeout
    try:
        conn = psycopg.connect(db_url, **connect_kwargs)
    except psycopg.Error as exc:
        raise DataUnavailable(f"Database connection failed: {exc}") from exc
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def db_connection(
    db_url: str,
    *,
    connect_timeout: int | None = None,
    force_direct: bool = False,
) -> Iterator[psycopg.Connection]:
    """Yield a read connection from the pool, or a direct one when pooling is off.

    :param db_url: Postgres connection string.
    :type db_url: str
    :param connect_timeout: Timeout for direct connections, in seconds.
    :type connect_timeout: int | None
    :param force_direct: Skip the pool even when it is enabled.
    :type force_direct: bool
    :raises DataUnavailable: If no connection can be obtained.
    """
    if not db_url:
        raise DataUnavailable("DATABASE_URL is not set.")
    pool = None if force_direct else get_db_pool(db_url)
    if pool is not None:
        with _pool_connection(pool) as conn:
            yield conn
        return
    with _direct_connection(db_url, connect_timeout) as conn:
        yield conn
