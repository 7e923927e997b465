"""Data Access Object (DAO) implementation for the ordered link store in SQLite

This module provides an SQLite-based implementation of LinkBaseDAO.

Responsibilities:
    - Run scoped read transactions over a consistent snapshot;
    - Run the single store-wide write transaction with a bounded lock wait;
    - Provide point lookups, upserts, deletes and ordered range cursors;
    - Export the whole store as a binary image;
    - Translate SQLite failures into DAO exceptions.

Concurrency model:
    The store runs in WAL journal mode. A read transaction pins its snapshot
    when it opens and never waits for the writer. A write transaction starts
    with BEGIN IMMEDIATE, so at most one writer is active store-wide; a second
    writer waits up to `write_timeout` seconds and then fails with
    DataStoreError.

Classes:
    SQLiteLinkTransaction:
        LinkTransaction bound to one SQLite connection.

    LinkSQLiteDAO:
        DAO for storing and scanning link records in an SQLite file.

Example:
    >>> dao = LinkSQLiteDAO(database='links.db')
    >>> with dao.write() as tx:
    ...     tx.put(b'2401aaa00000', b'https://example.com/a')
    ...     tx.put(b'2401bbb00000', b'https://example.com/b')
    >>> with dao.read() as tx:
    ...     [key for key, _ in tx.cursor_from(b'2401b')]
    [b'2401bbb00000']
"""

import logging
import sqlite3
from contextlib import AbstractContextManager, contextmanager
from collections.abc import Iterator

from beartype import beartype

from gurl.dao.base import LinkBaseDAO, LinkTransaction
from gurl.dao.sqlite.mixins import SQLiteClientMixin
from gurl.dao.sqlite.helpers import handle_sqlite_error
from gurl.dao.exceptions import DataStoreError, ReadOnlyTransactionError
from gurl.types import Entry


logger = logging.getLogger(__name__)


class SQLiteLinkTransaction(LinkTransaction):
    """LinkTransaction bound to one SQLite connection

    Instances are created by LinkSQLiteDAO.read() and LinkSQLiteDAO.write()
    and are released when the `with` block exits.

    Cursors page through the keyspace in batches of `batch_size` rows. Each
    page is fetched completely before its rows are yielded and the next page
    resumes after the last key seen, so keys may be deleted while a cursor is
    being consumed.
    """

    def __init__(self, connection: sqlite3.Connection, database: str, writable: bool, batch_size: int):
        self._connection = connection
        self._writable = writable
        self._released = False
        self.database = database
        self.batch_size = batch_size

    @property
    def writable(self) -> bool:
        return self._writable

    def release(self) -> None:
        self._released = True

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        if self._released:
            raise DataStoreError('Transaction has already been released.')
        return self._connection.execute(sql, params)

    def _require_writable(self) -> None:
        if not self._writable:
            raise ReadOnlyTransactionError('Transaction is read-only.')

    @handle_sqlite_error
    @beartype
    def get(self, key: bytes) -> bytes | None:
        row = self._execute('SELECT value FROM links WHERE key = ?', (key,)).fetchone()
        return None if row is None else bytes(row[0])

    @handle_sqlite_error
    @beartype
    def put(self, key: bytes, value: bytes) -> None:
        self._require_writable()
        self._execute('INSERT OR REPLACE INTO links (key, value) VALUES (?, ?)', (key, value))

    @handle_sqlite_error
    @beartype
    def delete(self, key: bytes) -> None:
        self._require_writable()
        self._execute('DELETE FROM links WHERE key = ?', (key,))

    @beartype
    def cursor_from(self, start: bytes) -> Iterator[tuple[bytes, bytes]]:
        return self._iterate(start)

    def _iterate(self, start: bytes) -> Iterator[Entry]:
        page = self._fetch_page(start, inclusive=True)
        while page:
            yield from page
            if len(page) < self.batch_size:
                return
            page = self._fetch_page(page[-1][0], inclusive=False)

    @handle_sqlite_error
    def _fetch_page(self, start: bytes, inclusive: bool) -> list[Entry]:
        operator = '>=' if inclusive else '>'
        rows = self._execute(
            f'SELECT key, value FROM links WHERE key {operator} ? ORDER BY key LIMIT ?',
            (start, self.batch_size),
        ).fetchall()
        return [(bytes(key), bytes(value)) for key, value in rows]

    @handle_sqlite_error
    def first_key(self) -> bytes | None:
        row = self._execute('SELECT key FROM links ORDER BY key LIMIT 1').fetchone()
        return None if row is None else bytes(row[0])

    @handle_sqlite_error
    def snapshot(self) -> bytes:
        if self._released:
            raise DataStoreError('Transaction has already been released.')
        return self._connection.serialize()

    @handle_sqlite_error
    def size(self) -> int:
        (page_count,) = self._execute('PRAGMA page_count').fetchone()
        (page_size,) = self._execute('PRAGMA page_size').fetchone()
        return page_count * page_size


class LinkSQLiteDAO(SQLiteClientMixin, LinkBaseDAO):
    """SQLite-based Data Access Object (DAO) for the ordered link store

    This class implements the LinkBaseDAO interface using an SQLite file as
    the data store.

    Attributes (see SQLiteClientMixin):
        database (str):
            Path of the store file.
        write_timeout (float):
            Seconds a writer waits for the store-wide write lock.
        batch_size (int):
            Rows fetched per cursor page.

    Methods:
        read() -> ContextManager[SQLiteLinkTransaction]:
            Open a read transaction pinned to the latest committed snapshot.
            Raises DataStoreError on storage failures or when the DAO is closed.

        write() -> ContextManager[SQLiteLinkTransaction]:
            Open the write transaction. Commits on normal exit, rolls back
            on any exception raised inside the block.
            Raises DataStoreError when the write lock can't be acquired in time,
            on storage failures or when the DAO is closed.

        close() -> None:
            Release the store handle.

    Example:
        >>> dao = LinkSQLiteDAO(database='links.db', write_timeout=0.5)
        >>> with dao.write() as tx:
        ...     tx.put(b'2401aaa00000', b'https://example.com/a')
        >>> with dao.read() as tx:
        ...     tx.first_key()
        b'2401aaa00000'
    """

    def read(self) -> AbstractContextManager[SQLiteLinkTransaction]:
        return self._transaction(writable=False)

    def write(self) -> AbstractContextManager[SQLiteLinkTransaction]:
        return self._transaction(writable=True)

    @contextmanager
    def _transaction(self, writable: bool) -> Iterator[SQLiteLinkTransaction]:
        connection = self._connect()
        tx = SQLiteLinkTransaction(connection, self.database, writable=writable, batch_size=self.batch_size)
        try:
            self._begin(connection, writable)
            try:
                yield tx
            except BaseException:
                self._abort(connection)
                raise
            else:
                if writable:
                    self._commit(connection)
                else:
                    self._abort(connection)
        finally:
            tx.release()
            connection.close()

    def _begin(self, connection: sqlite3.Connection, writable: bool) -> None:
        try:
            if writable:
                connection.execute('BEGIN IMMEDIATE')
            else:
                # The snapshot is pinned by the first read, not by BEGIN.
                connection.execute('BEGIN DEFERRED')
                connection.execute('SELECT 1 FROM links LIMIT 1').fetchall()
        except sqlite3.Error as e:
            kind = 'write' if writable else 'read'
            raise DataStoreError(f"Can't begin {kind} transaction on {self.database} ({e}).") from e

    def _commit(self, connection: sqlite3.Connection) -> None:
        try:
            connection.execute('COMMIT')
        except sqlite3.Error as e:
            raise DataStoreError(f"Can't commit transaction on {self.database} ({e}).") from e

    def _abort(self, connection: sqlite3.Connection) -> None:
        if not connection.in_transaction:
            return
        try:
            connection.execute('ROLLBACK')
        except sqlite3.Error:
            # Closing the connection discards the transaction anyway.
            logger.warning('Rollback failed, discarding transaction on close.', exc_info=True, extra={'database': self.database})
