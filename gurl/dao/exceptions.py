"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., I/O failure,
        corrupted pages, writer lock timeout, closed handle).

    StoreOpenError:
        Raised when the data store file can't be opened or initialized.

    ReadOnlyTransactionError:
        Raised when a read transaction is asked to modify the data store.

Example:
    >>> from gurl.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't begin write transaction on links.db.")
    Traceback (most recent call last):
        ...
    gurl.dao.exceptions.DataStoreError: Can't begin write transaction on links.db.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. I/O failures, corrupted pages, writer lock timeouts, closed handles, etc.
    """

    pass


class StoreOpenError(DataStoreError):
    """Exception raised when the data store file can't be opened or initialized."""

    pass


class ReadOnlyTransactionError(DataStoreError):
    """Exception raised when a read transaction is asked to modify the data store."""

    pass
