"""Tests for the flashsession CLI."""
import pytest
from typer.testing import CliRunner

from flashsession.cli.main import app
from flashsession.core.session import SessionEntry, SessionObject, SQLiteSessionStore

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path):
    """Store with one live, one expired and one never-expiring session."""
    path = tmp_path / "cli.session"
    with SQLiteSessionStore(path) as store:
        store.save("live", SessionObject(
            data={
                'user': SessionEntry("alice"),
                'notice': SessionEntry("Saved", flash=True),
            },
            expire="9999-01-01T00:00:00.000Z"
        ))
        store.save("old", SessionObject(expire="2000-01-01T00:00:00.000Z"))
        store.save("forever", SessionObject())
    return path


class TestList:
    """Tests for the list command."""

    def test_lists_sessions(self, db_path):
        """Test every stored id is listed."""
        result = runner.invoke(app, ["list", "--db", str(db_path)])

        assert result.exit_code == 0
        for session_id in ("live", "old", "forever"):
            assert session_id in result.output
        assert "expired" in result.output

    def test_db_from_env(self, db_path):
        """Test the store path can come from the environment."""
        result = runner.invoke(app, ["list"], env={"FLASHSESSION_DB": str(db_path)})

        assert result.exit_code == 0
        assert "forever" in result.output

    def test_missing_store(self, tmp_path):
        """Test a missing store file is an error."""
        result = runner.invoke(app, ["list", "--db", str(tmp_path / "nope.session")])

        assert result.exit_code == 1
        assert not (tmp_path / "nope.session").exists()


class TestShow:
    """Tests for the show command."""

    def test_shows_entries(self, db_path):
        """Test entries and expiry are printed."""
        result = runner.invoke(app, ["show", "live", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "alice" in result.output
        assert "Saved" in result.output
        assert "live" in result.output

    def test_does_not_consume_flash(self, db_path):
        """Test showing a session leaves flash values in place."""
        runner.invoke(app, ["show", "live", "--db", str(db_path)])

        with SQLiteSessionStore(db_path) as store:
            assert store.load("live").data['notice'].flash is True

    def test_unknown_session(self, db_path):
        """Test an unknown id exits with 1."""
        result = runner.invoke(app, ["show", "ghost", "--db", str(db_path)])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestDeleteAndPurge:
    """Tests for the delete and purge commands."""

    def test_delete(self, db_path):
        """Test deleting one session."""
        result = runner.invoke(app, ["delete", "live", "--db", str(db_path)])

        assert result.exit_code == 0
        with SQLiteSessionStore(db_path) as store:
            assert store.exists("live") is False

    def test_delete_unknown(self, db_path):
        """Test deleting an unknown id is not an error."""
        result = runner.invoke(app, ["delete", "ghost", "--db", str(db_path)])

        assert result.exit_code == 0

    def test_purge_removes_only_expired(self, db_path):
        """Test purge deletes expired sessions and keeps the rest."""
        result = runner.invoke(app, ["purge", "--db", str(db_path)])

        assert result.exit_code == 0
        assert "Purged 1" in result.output
        with SQLiteSessionStore(db_path) as store:
            assert store.ids() == ["forever", "live"]
