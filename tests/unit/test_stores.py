"""
Unit tests for session stores.

Tests MemorySessionStore and SQLiteSessionStore.
"""
import sqlite3
import threading

import pytest

from flashsession.core.clock import FixedClock
from flashsession.core.exceptions import (
    SessionDecodeError,
    SessionNotFoundError,
    SessionStoreError
)
from flashsession.core.session import (
    MemorySessionStore,
    SessionEntry,
    SessionObject,
    SessionStore,
    SQLiteSessionStore
)


def make_record():
    return SessionObject(
        data={
            'user': SessionEntry({'id': 7, 'roles': ["admin"]}),
            'notice': SessionEntry("Saved", flash=True),
        },
        expire="2222-02-02T00:01:00.000Z"
    )


class TestMemorySessionStore:
    """Tests for MemorySessionStore."""

    def test_implements_protocol(self):
        """Test that MemorySessionStore implements SessionStore."""
        assert isinstance(MemorySessionStore(), SessionStore)

    def test_save_and_load(self):
        """Test saving and loading a record."""
        store = MemorySessionStore()

        store.save("sid", make_record())

        assert store.load("sid") == make_record()

    def test_load_unknown(self):
        """Test unknown ids load as None."""
        assert MemorySessionStore().load("missing") is None

    def test_no_aliasing(self):
        """Test loaded records are independent from saved ones."""
        store = MemorySessionStore()
        record = make_record()
        store.save("sid", record)

        record.data['user'].value['roles'].append("root")
        loaded = store.load("sid")
        loaded.data.clear()

        assert store.load("sid").data['user'].value['roles'] == ["admin"]

    def test_exists_delete_ids(self):
        """Test exists, delete and ids."""
        store = MemorySessionStore()
        store.save("b", SessionObject())
        store.save("a", SessionObject())

        assert store.ids() == ["a", "b"]
        assert store.exists("a") is True

        store.delete("a")
        store.delete("unknown")

        assert store.exists("a") is False
        assert store.ids() == ["b"]

    def test_require(self):
        """Test require raises for unknown ids."""
        store = MemorySessionStore()

        with pytest.raises(SessionNotFoundError) as exc_info:
            store.require("missing")

        assert exc_info.value.session_id == "missing"

    def test_uncopyable_value(self):
        """Test values that cannot be copied are rejected on save."""
        store = MemorySessionStore()
        record = SessionObject(data={'lock': SessionEntry(threading.Lock())})

        with pytest.raises(SessionStoreError) as exc_info:
            store.save("sid", record)

        assert exc_info.value.session_id == "sid"
        assert store.exists("sid") is False

    def test_clear(self):
        """Test dropping every record."""
        with MemorySessionStore() as store:
            store.save("sid", SessionObject())
            store.clear()

            assert store.ids() == []


class TestSQLiteSessionStore:
    """Tests for SQLiteSessionStore."""

    def test_implements_protocol(self, sqlite_store):
        """Test that SQLiteSessionStore implements SessionStore."""
        assert isinstance(sqlite_store, SessionStore)

    def test_creates_store_file(self, tmp_path):
        """Test that the store file is created."""
        store = SQLiteSessionStore("web", tmp_path)

        assert (tmp_path / "web.session").exists()
        assert store.path == tmp_path / "web.session"

        store.close()

    def test_custom_extension_path(self, tmp_path):
        """Test using a full path with extension."""
        full_path = tmp_path / "nested" / "custom.session"

        with SQLiteSessionStore(str(full_path)) as store:
            assert store.path == full_path
            assert full_path.exists()

    def test_save_and_load(self, sqlite_store):
        """Test saving and loading a record."""
        sqlite_store.save("sid", make_record())

        loaded = sqlite_store.load("sid")

        assert loaded == make_record()

    def test_load_unknown(self, sqlite_store):
        """Test unknown ids load as None."""
        assert sqlite_store.load("missing") is None

    def test_overwrite(self, sqlite_store):
        """Test saving again replaces the record."""
        sqlite_store.save("sid", make_record())
        sqlite_store.save("sid", SessionObject())

        assert sqlite_store.load("sid") == SessionObject()
        assert sqlite_store.ids() == ["sid"]

    def test_exists_delete_ids(self, sqlite_store):
        """Test exists, delete and ids."""
        sqlite_store.save("b", SessionObject())
        sqlite_store.save("a", make_record())

        assert sqlite_store.ids() == ["a", "b"]
        assert sqlite_store.exists("a") is True

        sqlite_store.delete("a")
        sqlite_store.delete("unknown")

        assert sqlite_store.exists("a") is False
        assert sqlite_store.ids() == ["b"]

    def test_require(self, sqlite_store):
        """Test require raises for unknown ids."""
        with pytest.raises(SessionNotFoundError):
            sqlite_store.require("missing")

    def test_persistence(self, tmp_path):
        """Test that records persist across store instances."""
        first = SQLiteSessionStore("persistent", tmp_path)
        first.save("sid", make_record())
        first.close()

        second = SQLiteSessionStore("persistent", tmp_path)
        loaded = second.load("sid")
        second.close()

        assert loaded == make_record()

    def test_corrupted_payload(self, sqlite_store):
        """Test a corrupted row raises SessionDecodeError with the id."""
        conn = sqlite3.connect(str(sqlite_store.path))
        conn.execute(
            "INSERT INTO sessions (id, payload, expire, updated_at) VALUES (?, ?, ?, ?)",
            ("bad", "{broken", None, "2222-02-02T00:00:00")
        )
        conn.commit()
        conn.close()

        with pytest.raises(SessionDecodeError) as exc_info:
            sqlite_store.load("bad")

        assert exc_info.value.session_id == "bad"

    def test_unserializable_value(self, sqlite_store):
        """Test values that JSON cannot encode are rejected on save."""
        record = SessionObject(data={'k': SessionEntry(object())})

        with pytest.raises(SessionStoreError):
            sqlite_store.save("sid", record)

        assert sqlite_store.exists("sid") is False

    def test_delete_file(self, tmp_path):
        """Test deleting the store file completely."""
        store = SQLiteSessionStore("doomed", tmp_path)
        store.save("sid", SessionObject())

        store.delete_file()

        assert not (tmp_path / "doomed.session").exists()

    def test_updated_at_uses_clock(self, tmp_path):
        """Test the bookkeeping timestamp comes from the injected clock."""
        clock = FixedClock("2222-02-02T00:00:00.000Z")
        with SQLiteSessionStore("clocked", tmp_path, clock=clock) as store:
            store.save("sid", SessionObject())

        conn = sqlite3.connect(str(tmp_path / "clocked.session"))
        row = conn.execute("SELECT updated_at FROM sessions WHERE id = ?", ("sid",)).fetchone()
        conn.close()

        assert row[0] == "2222-02-02T00:00:00.000Z"
