"""Abstract base classes for link data access objects (DAOs).

These classes establish a consistent contract for the ordered link store,
regardless of the underlying storage engine (e.g., SQLite, LMDB, BoltDB).

Responsibilities:
    - Provide scoped read and write transactions over one flat keyspace.
    - Provide point lookups, upserts, deletes and ordered range cursors.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from gurl.dao import LinkSQLiteDAO

        >>> dao = LinkSQLiteDAO(database='links.db')

        >>> with dao.write() as tx:
        ...     tx.put(b'2401k3x9p200', b'https://example.com/a')

        >>> with dao.read() as tx:
        ...     tx.get(b'2401k3x9p200')
        b'https://example.com/a'

        >>> with dao.read() as tx:
        ...     [key for key, _ in tx.cursor_from(b'2401')]
        [b'2401k3x9p200']
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from gurl.types import EntryIterator


class LinkTransaction(ABC):
    """Interface for a single store transaction.

    A transaction is obtained from LinkBaseDAO.read() or LinkBaseDAO.write()
    and is only valid inside its `with` block.

    Methods:
        get(key: bytes) -> bytes | None:
            Return the value stored under key, None if absent.

        put(key: bytes, value: bytes) -> None:
            Insert or overwrite the value stored under key.
            Raises ReadOnlyTransactionError on read transactions.

        delete(key: bytes) -> None:
            Remove key. No-op when absent.
            Raises ReadOnlyTransactionError on read transactions.

        cursor_from(start: bytes) -> Iterator[tuple[bytes, bytes]]:
            Iterate (key, value) pairs in ascending byte order, starting at
            the first key >= start.

        first_key() -> bytes | None:
            Return the smallest key in the store, None if empty.

        snapshot() -> bytes:
            Return the binary image of the whole store as seen by this transaction.

        size() -> int:
            Return the size in bytes of that image.

    All methods raise DataStoreError on storage failures or when used after
    the transaction was released.
    """

    @property
    @abstractmethod
    def writable(self) -> bool:
        pass

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        pass

    @abstractmethod
    def put(self, key: bytes, value: bytes) -> None:
        pass

    @abstractmethod
    def delete(self, key: bytes) -> None:
        pass

    @abstractmethod
    def cursor_from(self, start: bytes) -> EntryIterator:
        """Iterate (key, value) pairs in ascending key order from the first key >= start.

        The iterator advances lazily and is finite. It is not restartable:
        open a fresh cursor to scan again.

        Args:
            start (bytes):
                Lower bound (inclusive). b'' starts at the first key.

        Returns:
            Iterator[tuple[bytes, bytes]]: (key, value) pairs.
        """
        pass

    @abstractmethod
    def first_key(self) -> bytes | None:
        pass

    @abstractmethod
    def snapshot(self) -> bytes:
        pass

    @abstractmethod
    def size(self) -> int:
        pass


class LinkBaseDAO(ABC):
    """Interface for the ordered link store.

    Methods:
        read() -> ContextManager[LinkTransaction]:
            Open a read-only transaction over a consistent snapshot.
            Readers never wait for the writer.

        write() -> ContextManager[LinkTransaction]:
            Open the store-wide write transaction. Blocks while another
            writer is active, up to the configured timeout.
            The transaction commits when the `with` block exits normally and
            is rolled back entirely when it exits with an exception.

        close() -> None:
            Release the store handle. Further transactions raise DataStoreError.

    Subclassing:
        Datastore-specific implementations (e.g., LinkSQLiteDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def read(self) -> AbstractContextManager[LinkTransaction]:
        pass

    @abstractmethod
    def write(self) -> AbstractContextManager[LinkTransaction]:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> 'LinkBaseDAO':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
