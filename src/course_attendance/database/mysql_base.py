from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector

from ..core.exceptions import UnexpectedError
from .connection import DatabaseConnection

# Connection of the transaction opened by `transaction()`, joined by nested `db_cursor()` calls.
_active_conn: ContextVar[Optional[Any]] = ContextVar("active_conn", default=None)


def _open(conn_factory: DatabaseConnection):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise UnexpectedError(f"Database unavailable: {e}") from e

    timeout_ms = conn_factory.statement_timeout_ms
    if timeout_ms > 0:
        cur = conn.cursor()
        try:
            cur.execute("SET SESSION MAX_EXECUTION_TIME=%s", (timeout_ms,))
        finally:
            cur.close()
    return conn


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[None]:
    """Run every repository call inside the block on one connection, committed once.

    Nested calls join the outer transaction.
    """

    if _active_conn.get() is not None:
        yield
        return

    conn = _open(conn_factory)
    token = _active_conn.set(conn)
    try:
        yield
        conn.commit()
    except mysql.connector.Error as e:
        conn.rollback()
        raise UnexpectedError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        _active_conn.reset(token)
        conn.close()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    with transaction(conn_factory):
        conn = _active_conn.get()
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
        finally:
            cur.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for `IN (...)` filters."""
    return ", ".join(["%s"] * len(values))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
