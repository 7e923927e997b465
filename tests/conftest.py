import logging
from datetime import datetime, UTC

import pytest

from gurl.dao import LinkSQLiteDAO


@pytest.fixture
def database(tmp_path) -> str:
    return str(tmp_path / 'links.db')


@pytest.fixture
def dao(database):
    """Provide an isolated link store backed by a fresh SQLite file."""
    _dao = LinkSQLiteDAO(database=database, write_timeout=0.2)
    yield _dao
    _dao.close()


@pytest.fixture
def seed(dao):
    """Store raw (key, url) pairs, bypassing key derivation."""

    def _seed(*entries: tuple[bytes, bytes]) -> None:
        with dao.write() as tx:
            for key, value in entries:
                tx.put(key, value)

    return _seed


@pytest.fixture
def january_2024() -> datetime:
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def restore_root_logger():
    """Undo initialize_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
