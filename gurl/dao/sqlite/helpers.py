import functools
import sqlite3
from typing import TypeVar, Any
from collections.abc import Callable

from gurl.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_sqlite_error[F](method: F) -> F:
    """Wrap SQLite-interacting DAO methods to translate storage errors

    Args:
        method (Callable[..., Any]):
            DAO or transaction method performing SQLite operations which may raise sqlite3.Error.
            The instance must expose the store file path as `self.database`.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on SQLite failures.

    Example:
        >>> @handle_sqlite_error
        ... def first_key(self):
        ...     return self._execute('SELECT key FROM links ORDER BY key LIMIT 1').fetchone()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except sqlite3.Error as e:
            raise DataStoreError(f'SQLite error on {self.database} ({e}).') from e

    return wrapper
