"""Read-only key resolution for the redirect surface."""

import logging

from gurl.dao.base import LinkBaseDAO


logger = logging.getLogger(__name__)


def resolve(dao: LinkBaseDAO, key: bytes) -> str | None:
    """Return the URL stored under exactly `key`, or None.

    No prefix or fuzzy matching. Lookups have no side effects.

    Example:
        >>> resolve(dao, b'2401k3x9p200')
        'https://example.com/a'
        >>> resolve(dao, b'2401nothere0')
        None
    """
    if not key:
        return None

    with dao.read() as tx:
        target = tx.get(key)

    if target is None:
        logger.debug('No redirect for key %r.', key)
        return None
    return target.decode('utf-8', errors='replace')
