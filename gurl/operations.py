"""Management operations over the ordered link store.

Each operation runs as exactly one store transaction: it either commits all
of its effects or, on a store error, none of them. Operations never retry.

Functions:
    add_links(dao, links, now=None) -> Report
        Derive keys for a batch of URLs and store them. Rows: (url, key).
    lookup_link(dao, key) -> LinkRecord | None
        Exact-match lookup by key.
    list_links(dao, start=b'', end=b'', limit=30) -> Report
        Ordered range scan. Rows: (key, url).
    remove_links(dao, keys) -> Report
        Delete a batch of keys. Rows: (key,).
    cleanup_links(dao, start, end) -> int
        Delete every key in [start, end]. Returns the number of deleted rows.
    export_backup(dao) -> Backup
        Binary image of the whole store.

Raises:
    EmptyArgumentError:
        When a required argument carries no usable value.
    DataStoreError:
        When the store fails. The transaction is rolled back.
"""

import logging
from datetime import datetime, UTC
from collections.abc import Iterable

from gurl.constants import Defaults
from gurl.dao.base import LinkBaseDAO
from gurl.exceptions import EmptyArgumentError
from gurl.models import Backup, LinkRecord
from gurl.types import Report
from gurl.utils.shortener import derive_key


logger = logging.getLogger(__name__)


def _decode(value: bytes) -> str:
    return value.decode('utf-8', errors='backslashreplace')


def split_lines(value: str | None) -> list[str]:
    """Split a newline-separated form field, dropping empty lines."""
    return [line for line in (value or '').split('\n') if line]


def add_links(dao: LinkBaseDAO, links: Iterable[str], now: datetime | None = None) -> Report:
    """Store a batch of URLs under their derived keys.

    Re-adding a URL within the same month regenerates the same key and
    overwrites the previous record.

    Args:
        dao (LinkBaseDAO):
            Link store.
        links (Iterable[str]):
            URLs to add. Empty strings are skipped.
        now (datetime | None):
            Creation time for the key bucket. Defaults to now (UTC).

    Returns:
        Report: one (url, key) row per stored URL, in input order.

    Raises:
        EmptyArgumentError:
            If there is no non-empty URL to add.
    """
    links = [link for link in links if link]
    if not links:
        raise EmptyArgumentError("Empty 'link' argument")

    # One bucket for the whole batch.
    now = now or datetime.now(UTC)
    report = []
    with dao.write() as tx:
        for link in links:
            key = derive_key(link, now)
            tx.put(key, link.encode('utf-8'))
            report.append((link, _decode(key)))

    logger.info('Added %d links.', len(report), extra={'count': len(report)})
    return report


def lookup_link(dao: LinkBaseDAO, key: bytes) -> LinkRecord | None:
    if not key:
        return None

    with dao.read() as tx:
        target = tx.get(key)

    logger.debug('Looked up link %r (found: %s).', key, target is not None)
    return None if target is None else LinkRecord(key=key, target=target)


def list_links(dao: LinkBaseDAO, start: bytes = b'', end: bytes = b'', limit: int = Defaults.LIST_LIMIT) -> Report:
    """List links in ascending key order within [start, end].

    This is a lexicographic bound, not a pagination token: to page further,
    call again with `start` set just past the last key returned.

    Args:
        dao (LinkBaseDAO):
            Link store.
        start (bytes):
            Inclusive lower bound. Defaults to the first key in the store.
        end (bytes):
            Inclusive upper bound. Unbounded when empty.
        limit (int):
            Maximum number of rows. Defaults to 30.

    Returns:
        Report: (key, url) rows in strictly ascending key order.
    """
    report = []
    with dao.read() as tx:
        if not start:
            start = tx.first_key()
            if start is None:
                return report

        for key, value in tx.cursor_from(start):
            if len(report) >= limit or (end and key > end):
                break
            report.append((_decode(key), _decode(value)))

    return report


def remove_links(dao: LinkBaseDAO, keys: Iterable[bytes]) -> Report:
    """Delete a batch of keys. Absent keys are ignored.

    Raises:
        EmptyArgumentError:
            If there is no non-empty key to remove.
    """
    keys = [key for key in keys if key]
    if not keys:
        raise EmptyArgumentError("Empty 'hash' argument")

    with dao.write() as tx:
        for key in keys:
            tx.delete(key)

    logger.info('Removed %d keys.', len(keys), extra={'count': len(keys)})
    return [(_decode(key),) for key in keys]


def cleanup_links(dao: LinkBaseDAO, start: bytes, end: bytes) -> int:
    """Delete every key in the inclusive range [start, end].

    Args:
        dao (LinkBaseDAO):
            Link store.
        start (bytes):
            Inclusive lower bound. Defaults to the first key in the store when empty.
        end (bytes):
            Inclusive upper bound. Required: an unbounded cleanup is never implied.

    Returns:
        int: number of deleted rows. Calling twice in a row returns 0 the second time.

    Raises:
        EmptyArgumentError:
            If `end` is empty.
    """
    if not start and not end:
        raise EmptyArgumentError("Both empty: 'start' 'end'")
    if not end:
        raise EmptyArgumentError("Empty 'end' argument")

    removed = 0
    with dao.write() as tx:
        if not start:
            start = tx.first_key()
            if start is None:
                return removed

        for key, _ in tx.cursor_from(start):
            if key > end:
                break
            tx.delete(key)
            removed += 1

    logger.info('Cleaned up %d keys.', removed, extra={'count': removed, 'start': _decode(start), 'end': _decode(end)})
    return removed


def export_backup(dao: LinkBaseDAO) -> Backup:
    with dao.read() as tx:
        size = tx.size()
        data = tx.snapshot()

    logger.info('Exported store backup.', extra={'size': size})
    return Backup(data=data, size=size)
