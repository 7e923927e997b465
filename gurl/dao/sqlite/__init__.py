from gurl.dao.sqlite.mixins import SQLiteClientMixin
from gurl.dao.sqlite.link_sqlite_dao import LinkSQLiteDAO, SQLiteLinkTransaction


__all__ = [
    'SQLiteClientMixin',
    'LinkSQLiteDAO',
    'SQLiteLinkTransaction',
]
