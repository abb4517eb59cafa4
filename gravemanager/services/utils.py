from __future__ import annotations

# gravemanager/services/utils.py
import logging
import sqlite3
from contextlib import contextmanager
from sqlite3 import Connection, Row
from typing import ContextManager, Iterator, Optional, Sequence

from ..db import ConnectionProvider
from ..errors import EntityNotFoundError, ServiceFailureError

logger = logging.getLogger(__name__)


class EntityManagerBase:
    """Holds the connection provider shared by every operation of a manager.

    The provider is set once and read by each call; changing it while calls
    are in flight is not supported.
    """

    def __init__(self, conn_provider: Optional[ConnectionProvider] = None):
        self._conn_provider = conn_provider

    def set_connection_provider(self, conn_provider: ConnectionProvider) -> None:
        self._conn_provider = conn_provider

    def _check_provider(self) -> None:
        if self._conn_provider is None:
            raise RuntimeError("Connection provider is not set")

    def _connect(self) -> ContextManager[Connection]:
        return self._conn_provider()


@contextmanager
def translate_errors(msg: str, log: logging.Logger = logger) -> Iterator[None]:
    """Turn sqlite3 errors into ServiceFailureError, keeping the cause."""
    try:
        yield
    except sqlite3.Error as ex:
        log.error(msg, exc_info=True)
        raise ServiceFailureError(msg) from ex


@contextmanager
def transaction(conn: Connection) -> Iterator[Connection]:
    """Explicit BEGIN/COMMIT; anything raised inside rolls back first."""
    conn.execute("BEGIN")
    try:
        yield conn
        conn.commit()
    except BaseException:
        rollback_quietly(conn)
        raise


def rollback_quietly(conn: Connection) -> None:
    try:
        if conn.in_transaction:
            conn.rollback()
    except sqlite3.Error:
        # 回滚失败只记录，不覆盖原始异常
        logger.exception("Error when doing rollback")


def check_updates_count(count: int, entity: object, inserting: bool) -> None:
    if not inserting and count == 0:
        raise EntityNotFoundError(f"{entity} does not exist in the db")
    if count != 1:
        raise ServiceFailureError(f"Internal integrity error: unexpected rows count in database: {count}")


def single_row(rows: Sequence[Row], what: str) -> Optional[Row]:
    if not rows:
        return None
    if len(rows) > 1:
        raise ServiceFailureError(f"Internal integrity error: more {what} with the same id found!")
    return rows[0]
