"""
IBM i connection pool.

Connections are ODBC handles opened through the IBM i Access driver and
pooled with SQLAlchemy's ``QueuePool``.  Every ``fetch_all`` / ``execute``
call checks one connection out, runs a single autocommitted statement and
hands the connection back, whether the statement succeeded or not.
"""

from collections.abc import Callable, Sequence
from contextlib import closing
from typing import Any

from sqlalchemy.pool import QueuePool

import config
from errors import DatabaseUnavailable, QueryError
from log import get_logger

logger = get_logger(__name__)

Row = dict[str, Any]

BIGINT_PRECISION = 19


def build_conn_str(
    driver: str = config.DB_DRIVER,
    system: str = config.DB_SYSTEM,
    user: str = config.DB_USER,
    password: str = config.DB_PASS,
) -> str:
    return f"DRIVER={{{driver}}};SYSTEM={system};UID={user};PWD={password};"


def odbc_creator(conn_str: str) -> Callable[[], Any]:
    def _connect():
        import pyodbc

        return pyodbc.connect(conn_str, autocommit=True)

    return _connect


class Database:
    """Bounded pool of DB-API connections plus the two query primitives."""

    def __init__(
        self,
        creator: Callable[[], Any],
        *,
        min_size: int = 2,
        max_size: int = 10,
        timeout: float = 30.0,
        recycle: int = -1,
    ):
        if min_size < 1 or max_size < min_size:
            raise ValueError(f"Invalid pool bounds: min={min_size} max={max_size}")
        self.min_size = min_size
        self.max_size = max_size
        # Connections beyond pool_size are "overflow" and get closed as soon
        # as they are checked back in, which shrinks the pool back to min.
        self._pool = QueuePool(
            creator,
            pool_size=min_size,
            max_overflow=max_size - min_size,
            timeout=timeout,
            recycle=recycle,
            reset_on_return=None,
        )

    def connect(self) -> None:
        """Open ``min_size`` connections up front.  Raises DatabaseUnavailable."""
        held = []
        try:
            for _ in range(self.min_size):
                held.append(self._pool.connect())
        except Exception as exc:
            logger.error("Could not open database connection: %s", exc)
            raise DatabaseUnavailable(str(exc)) from exc
        finally:
            for conn in held:
                conn.close()
        logger.info(
            "Connection pool ready (min=%d, max=%d)", self.min_size, self.max_size
        )

    def close(self) -> None:
        self._pool.dispose()
        logger.info("Connection pool closed")

    def fetch_all(
        self, sql: str, params: Sequence[Any] = (), *, bigint_as_str: bool = False
    ) -> list[Row]:
        """Run a query and return its rows as dicts.

        With ``bigint_as_str`` the values of BIGINT columns come back as
        strings, so JSON clients without 64-bit integers read them exactly.
        """
        return self._run(sql, params, fetch=True, bigint_as_str=bigint_as_str)

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the affected row count."""
        return self._run(sql, params, fetch=False)

    def _run(self, sql: str, params: Sequence[Any], fetch: bool, bigint_as_str=False):
        try:
            with closing(self._pool.connect()) as conn:
                cursor = conn.cursor()
                try:
                    cursor.execute(sql, *params)
                    if not fetch:
                        return cursor.rowcount
                    description = cursor.description or ()
                    columns = [col[0] for col in description]
                    rows = [dict(zip(columns, row)) for row in cursor.fetchall()]
                    if bigint_as_str:
                        _stringify_bigints(rows, description)
                    return rows
                finally:
                    cursor.close()
        except Exception as exc:
            # Driver and pool errors differ per backend; all of them end the
            # request the same way.
            logger.error("Query failed: %s | SQL: %s", exc, " ".join(sql.split()))
            raise QueryError() from exc


def _stringify_bigints(rows: list[Row], description) -> None:
    # pyodbc reports BIGINT as type int with precision 19 (INTEGER has 10).
    names = [
        col[0]
        for col in description
        if col[1] is int and (col[4] or 0) >= BIGINT_PRECISION
    ]
    for row in rows:
        for name in names:
            if row[name] is not None:
                row[name] = str(row[name])


def create_database() -> Database:
    """Build the pool from config.  Call ``connect()`` on the result to open it."""
    return Database(
        odbc_creator(build_conn_str()),
        min_size=config.DB_POOL_MIN,
        max_size=config.DB_POOL_MAX,
        timeout=config.DB_POOL_TIMEOUT,
        recycle=config.DB_POOL_RECYCLE,
    )
