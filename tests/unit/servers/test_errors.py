"""Unit tests for HTTP error conversion in errors.py and report rendering in report.py

Test coverage includes:

1. Error conversion
   - Ensures client errors map to 400 with their message.
   - Ensures DAO errors map to 500 'Db error'.
   - Ensures unknown errors map to 500 without leaking details.
   - Ensures error codes come from the wrapped exception.

2. Report rendering
   - Ensures rows render as CSV lines and rows with an empty first column are dropped.
"""

import pytest

from gurl.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from gurl.dao.exceptions import DataStoreError, ReadOnlyTransactionError, StoreOpenError
from gurl.exceptions import ClientError, EmptyArgumentError
from gurl.servers.errors import to_api_error
from gurl.servers.management.report import render_report


# -------------------------------
# 1. Error conversion
# -------------------------------


@pytest.mark.parametrize('exc', [ClientError('Bad request'), EmptyArgumentError("Empty 'link' argument")])
def test_client_errors(exc):
    error = to_api_error(exc)

    assert error.status_code == 400
    assert error.message == str(exc)
    assert error.error_code == exc.error_code


@pytest.mark.parametrize(
    'exc',
    [DataStoreError('SQLite error on links.db (disk I/O error).'), StoreOpenError('x'), ReadOnlyTransactionError('y')],
)
def test_dao_errors(exc):
    error = to_api_error(exc)

    assert error.status_code == 500
    assert error.message == 'Db error'
    assert error.error is exc


def test_unknown_errors():
    error = to_api_error(RuntimeError('secret internals'))

    assert error.status_code == 500
    assert 'secret' not in error.message
    assert error.error_code == UNKNOWN_INTERNAL_SERVER_ERROR


# -------------------------------
# 2. Report rendering
# -------------------------------


def test_render_report():
    # fmt: off
    report = [
        ('https://example.com/a', '2401aaa00000'),
        ('',                      'dropped'),
        ('https://example.com/b', '2401bbb00000'),
    ]
    # fmt: on
    assert render_report(report) == 'https://example.com/a,2401aaa00000\nhttps://example.com/b,2401bbb00000\n'


def test_render_single_column_report():
    assert render_report([('2401aaa00000',), ('2401bbb00000',)]) == '2401aaa00000\n2401bbb00000\n'


def test_render_empty_report():
    assert render_report([]) == ''
