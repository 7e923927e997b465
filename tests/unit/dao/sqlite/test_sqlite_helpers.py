"""Unit tests for handle_sqlite_error decorator.

This test suite verifies that the decorator properly translates SQLite
failures and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. SQLite error handling
       - Ensures sqlite3 errors are converted into DataStoreError.
       - Ensures non-SQLite errors pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

import sqlite3

import pytest

from gurl.dao.sqlite.helpers import handle_sqlite_error
from gurl.dao.exceptions import DataStoreError


class DummyDAO:
    database = 'dummy.db'

    @handle_sqlite_error
    def ping(self):
        return 'OK'

    @handle_sqlite_error
    def locked(self):
        raise sqlite3.OperationalError('database is locked')

    @handle_sqlite_error
    def corrupt(self):
        raise sqlite3.DatabaseError('database disk image is malformed')

    @handle_sqlite_error
    def broken(self):
        raise KeyError('not a storage failure')


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().ping() == 'OK'


# -------------------------------
# 2. SQLite error handling
# -------------------------------


@pytest.mark.parametrize('method', ['locked', 'corrupt'])
def test_decorator_transforms_sqlite_error(method):
    """Ensure sqlite3.Error is caught and re-raised as DataStoreError."""
    with pytest.raises(DataStoreError, match=r'SQLite error on dummy\.db') as exc_info:
        getattr(DummyDAO(), method)()

    assert isinstance(exc_info.value.__cause__, sqlite3.Error)


def test_decorator_ignores_other_errors():
    with pytest.raises(KeyError):
        DummyDAO().broken()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_sqlite_error
    def sample_function(self):
        """This is a sample docstring."""
        return 42

    assert sample_function.__name__ == 'sample_function'
    assert sample_function.__doc__ == 'This is a sample docstring.'
