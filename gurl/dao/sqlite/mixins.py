"""SQLite mixin providing shared store initialization and connectivity checks.

Responsibilities:
    - Open (or create) the store file and its single `links` keyspace
    - Healthcheck the store file at startup
    - Hand out per-transaction connections

Classes:
    - SQLiteClientMixin: Base mixin to inject SQLite store setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class LinkSQLiteDAO(SQLiteClientMixin, LinkBaseDAO):
        ...     pass
        ...
        >>> dao = LinkSQLiteDAO(database='links.db')
        >>> dao._healthcheck()
        True
"""

import os
import logging
import sqlite3

from gurl.constants import Defaults
from gurl.dao.exceptions import DataStoreError, StoreOpenError


logger = logging.getLogger(__name__)

# One flat keyspace. WITHOUT ROWID clusters rows by key, and BLOB keys
# compare byte-wise (memcmp), which gives lexicographic key order.
CREATE_LINKS_TABLE = """
    CREATE TABLE IF NOT EXISTS links (
        key BLOB PRIMARY KEY NOT NULL,
        value BLOB NOT NULL
    ) WITHOUT ROWID
"""


class SQLiteClientMixin:
    """Mixin SQLite store setup and health check for SQLite-backed DAOs.

    Attributes:
        database (str):
            Path of the store file.

        write_timeout (float):
            Seconds a writer waits for the store-wide write lock.

        batch_size (int):
            Rows fetched per cursor page.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Open the store file and make sure the `links` keyspace exists.
            Optionally raise a StoreOpenError if the file is unusable.
    """

    def __init__(
        self,
        database: str | os.PathLike = Defaults.DATABASE,
        write_timeout: float = Defaults.WRITE_TIMEOUT,
        batch_size: int = Defaults.CURSOR_BATCH_SIZE,
    ):
        """Open the link store

        The store handle is opened once and kept for the lifetime of the DAO.
        Each transaction runs on its own short-lived connection.

        Args:
            database (str | os.PathLike):
                Path of the store file. Created when missing.

            write_timeout (float):
                Seconds to wait for the write lock. Defaults to 1 second.

            batch_size (int):
                Rows fetched per cursor page. Defaults to 64.

        Raises:
            StoreOpenError:
                If the store file can't be opened, is not a database or is corrupted.
        """
        self.database = os.fspath(database)
        self.write_timeout = write_timeout
        self.batch_size = batch_size
        self._handle: sqlite3.Connection | None = None

        self._healthcheck()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Open the store file and initialize the `links` keyspace

        Args:
            raise_error (bool):
                If True, raises StoreOpenError on failure. Defaults to True.

        Returns:
            bool:
                True if the store is usable, False otherwise (only if raise_error=False).

        Raises:
            StoreOpenError:
                If the store can't be opened and raise_error=True.
        """
        handle = None
        try:
            handle = sqlite3.connect(self.database, timeout=self.write_timeout, isolation_level=None, check_same_thread=False)
            handle.execute('PRAGMA journal_mode=WAL')
            handle.execute(CREATE_LINKS_TABLE)
        except sqlite3.Error as e:
            if handle is not None:
                handle.close()
            if raise_error:
                raise StoreOpenError(f"Can't open link store at {self.database}. Check the file path and permissions.") from e
            return False  # pragma: no cover
        else:
            if self._handle is not None:
                self._handle.close()
            self._handle = handle
            logger.debug('Opened link store.', extra={'database': self.database})
            return True

    def _connect(self) -> sqlite3.Connection:
        if self.closed:
            raise DataStoreError(f'Link store {self.database} is closed.')
        try:
            return sqlite3.connect(self.database, timeout=self.write_timeout, isolation_level=None)
        except sqlite3.Error as e:
            raise DataStoreError(f"Can't connect to link store at {self.database}.") from e

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.debug('Closed link store.', extra={'database': self.database})
