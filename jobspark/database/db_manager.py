import logging
from functools import wraps
from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from jobspark.utils.env import require_env

T = TypeVar('T')

logger = logging.getLogger(__name__)


def require_connection(func: Callable) -> Callable:
    '''Decorator to ensure DBManager is used within a context manager.'''

    @wraps(func)
    def wrapper(self: 'DBManager', *args, **kwargs) -> Any:
        if not self._connected:
            raise RuntimeError(
                'DBManager is not in a context. Use "with DBManager() as db:"'
            )
        return func(self, *args, **kwargs)

    return wrapper


class DBManager:
    '''Postgres DB manager. One transaction per `with` block.'''

    # Shared pool across the process
    _pool: ConnectionPool | None = None

    def __init__(self) -> None:
        self._connected: bool = False
        self._pg_conn: psycopg.Connection | None = None
        self._from_pool: bool = False

    @classmethod
    def init_pool(
        cls,
        db_url: Optional[str] = None,
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        '''Initialize the process-wide connection pool.'''
        if cls._pool is not None:
            return
        conninfo = db_url or require_env('DATABASE_URL')
        cls._pool = ConnectionPool(
            conninfo=conninfo,
            min_size=min_size,
            max_size=max_size,
            kwargs={'row_factory': dict_row},
        )
        logger.info('Initialized Postgres connection pool')

    @classmethod
    def close_pool(cls) -> None:
        if cls._pool is not None:
            try:
                cls._pool.close()
            finally:
                cls._pool = None

    def _open(self) -> None:
        pool = self.__class__._pool
        if pool is not None:
            self._pg_conn = pool.getconn()
            self._from_pool = True
        else:
            self._pg_conn = psycopg.connect(
                require_env('DATABASE_URL'), row_factory=dict_row
            )
            self._from_pool = False

    def _release(self) -> None:
        pool = self.__class__._pool
        try:
            if self._pg_conn is None:
                return
            if self._from_pool and pool is not None:
                # A broken connection is discarded by the pool on put
                pool.putconn(self._pg_conn)
            else:
                self._pg_conn.close()
        finally:
            self._pg_conn = None
            self._from_pool = False

    def __enter__(self) -> 'DBManager':
        self._open()
        self._connected = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self._connected:
            return
        try:
            assert self._pg_conn is not None
            if exc_type is None:
                self._pg_conn.commit()
            else:
                self._pg_conn.rollback()
        finally:
            self._release()
            self._connected = False

    def _reconnect(self) -> None:
        try:
            self._release()
        except Exception as e:
            logger.warning(f'Error while closing connection during reconnect: {e}')
        self._open()

    def _run_with_retry(self, fn: Callable[[], T]) -> T:
        '''Run a DB call; on a dropped connection reconnect and retry once.'''
        try:
            return fn()
        except (psycopg.OperationalError, psycopg.InterfaceError) as e:
            logger.warning(
                f'DB operation failed due to connection issue: {e}. '
                f'Reconnecting and retrying once...'
            )
            self._reconnect()
            return fn()

    def _exec_pg(self, query: str, params: Iterable[Any] | None) -> None:
        assert self._pg_conn is not None
        with self._pg_conn.cursor() as cur:
            cur.execute(query, tuple(params or ()))

    def _select_pg(
        self, query: str, params: Iterable[Any] | None
    ) -> Tuple[List[dict[str, Any]], List[str]]:
        assert self._pg_conn is not None
        with self._pg_conn.cursor() as cur:
            cur.execute(query, tuple(params or ()))
            rows: List[dict[str, Any]] = cur.fetchall() if cur.description else []
            cols: List[str] = (
                [d.name for d in cur.description] if cur.description else []
            )
            return rows, cols

    @require_connection
    def execute(self, query: str, params: Iterable[Any] | None = None) -> None:
        '''Execute a statement that returns no rows.'''
        try:
            self._run_with_retry(lambda: self._exec_pg(query, params))
        except Exception as e:
            logger.error(
                f'Postgres execute() error: {e}\nQuery: {query}\nParams: {params}'
            )
            raise

    @require_connection
    def fetchall(
        self, query: str, params: Iterable[Any] | None = None
    ) -> List[dict[str, Any]]:
        '''Return all rows as a list of dictionaries.'''
        try:
            rows, _ = self._run_with_retry(lambda: self._select_pg(query, params))
            return rows
        except Exception as e:
            logger.error(
                f'Postgres fetchall() error: {e}\nQuery: {query}\nParams: {params}'
            )
            raise

    @require_connection
    def fetchone(
        self, query: str, params: Iterable[Any] | None = None
    ) -> Optional[dict[str, Any]]:
        '''Return a single row as a dictionary, or None if no result.'''
        try:
            rows, _ = self._run_with_retry(lambda: self._select_pg(query, params))
            return rows[0] if rows else None
        except Exception as e:
            logger.error(
                f'Postgres fetchone() error: {e}\nQuery: {query}\nParams: {params}'
            )
            raise
