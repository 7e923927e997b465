from gurl.dao.base import LinkBaseDAO, LinkTransaction
from gurl.dao.sqlite import LinkSQLiteDAO


__all__ = [
    'LinkBaseDAO',
    'LinkTransaction',
    'LinkSQLiteDAO',
]
