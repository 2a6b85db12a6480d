"""Pytest fixtures for flashsession tests."""
import pytest

from flashsession.core.clock import FixedClock
from flashsession.core.session import SessionEntry, SessionObject, SQLiteSessionStore

T0 = "2222-02-02T00:00:00.000Z"


@pytest.fixture
def clock():
    """Clock frozen at 2222-02-02T00:00:00.000Z."""
    return FixedClock(T0)


@pytest.fixture
def flash_record():
    """Record holding one flash entry, expiring at T0."""
    return SessionObject(
        data={'test': SessionEntry(value="this_is_session_data", flash=True)},
        expire=T0
    )


@pytest.fixture
def sqlite_store(tmp_path):
    """SQLite store in a temporary directory."""
    store = SQLiteSessionStore("test_store", tmp_path)
    yield store
    store.close()
