"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

The pool lives on an explicitly constructed `Database` object rather than
in module state, so every repository is handed the store it talks to.
"""

import warnings
from contextlib import contextmanager
from typing import Callable, Iterator

import psycopg2
from psycopg2 import errors, extras, pool

from config import DatabaseConfig
from errors import DuplicateEmailError, ResourceReleaseWarning, StoreError, StoreNotInitializedError
from utils.logger import get_logger

logger = get_logger(__name__)

PoolFactory = Callable[[int, int, str], pool.AbstractConnectionPool]


def store_error(action: str, exc: psycopg2.Error) -> StoreError:
    """
    Translate a driver exception into the application's StoreError family.

    Args:
        action: Short description of what was being attempted (for the message).
        exc: The psycopg2 exception.
    """
    if isinstance(exc, errors.UniqueViolation):
        return DuplicateEmailError(f"Failed to {action}: email already registered", exc)
    return StoreError(f"Failed to {action}", exc)


def _report_release_failure(what: str, exc: BaseException) -> None:
    logger.warning(f"Error releasing {what}: {exc}")
    # filters set to "error" turn warn() into a raise; that must not reach the caller
    try:
        warnings.warn(f"Error releasing {what}: {exc}", ResourceReleaseWarning, stacklevel=3)
    except Exception:
        pass


@contextmanager
def dict_cursor(conn) -> Iterator[extras.RealDictCursor]:
    """
    Open a cursor whose rows are dicts keyed by column name.
    The cursor is always closed; a failing close is reported, never raised.
    """
    cur = conn.cursor(cursor_factory=extras.RealDictCursor)
    try:
        yield cur
    finally:
        try:
            cur.close()
        except Exception as e:
            _report_release_failure("cursor", e)


class Database:
    """
    Owns the connection pool for one PostgreSQL database.

    Args:
        config: Connection parameters.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        pool_factory: Callable building the pool from (min, max, dsn).
            Defaults to psycopg2's SimpleConnectionPool.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        min_conn: int = 1,
        max_conn: int = 5,
        pool_factory: PoolFactory = pool.SimpleConnectionPool,
    ):
        self.config = config
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool_factory = pool_factory
        self._pool = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> None:
        """
        Initialize the connection pool. Calling it twice is a no-op.

        Raises:
            StoreError: If the database is unreachable.
        """
        if self.is_open:
            return
        try:
            self._pool = self._pool_factory(self.min_conn, self.max_conn, self.config.dsn)
            logger.info(
                f"Database connection pool initialized ({self.config.host}:{self.config.port}/{self.config.name})."
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise StoreError("Failed to initialize database pool", e) from e

    def get_connection(self):
        """
        Get a connection from the pool.

        Raises:
            StoreNotInitializedError: If the pool has not been opened.
            StoreError: If the pool cannot hand out a connection.
        """
        if not self.is_open:
            raise StoreNotInitializedError("Database pool not initialized. Call open() first.")
        try:
            return self._pool.getconn()
        except psycopg2.Error as e:
            logger.error(f"Failed to acquire database connection: {e}")
            raise StoreError("Failed to acquire database connection", e) from e

    def release_connection(self, conn) -> None:
        """Return a connection back to the pool."""
        if self._pool is not None:
            self._pool.putconn(conn)

    @contextmanager
    def connection(self) -> Iterator:
        """
        Scoped connection: acquired on entry, rolled back if the block raises,
        and returned to the pool on every exit path. Rollback and release
        failures are reported as ResourceReleaseWarning and never replace
        the block's own result or exception.
        """
        conn = self.get_connection()
        try:
            yield conn
        except BaseException:
            try:
                conn.rollback()
            except Exception as e:
                _report_release_failure("transaction (rollback)", e)
            raise
        finally:
            try:
                self.release_connection(conn)
            except Exception as e:
                _report_release_failure("connection", e)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self.is_open:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")
