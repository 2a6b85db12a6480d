"""
SQLite session store implementation.

Provides persistent session storage using a SQLite database file,
one row per session identifier.
"""
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Union
from contextlib import contextmanager

from ..clock import Clock, system_clock, format_timestamp
from ..exceptions import SessionDecodeError, SessionNotFoundError, SessionStoreError
from ..logging import get_logger
from .protocols import SessionStore
from .models import SessionObject

logger = get_logger(__name__)


class SQLiteSessionStore(SessionStore):
    """
    SQLite-based session store.

    Stores each session record as canonical JSON in a local SQLite
    database file. Connection use is serialized with a lock.

    Example:
        >>> store = SQLiteSessionStore("web")
        >>> # Creates web.session file
        >>>
        >>> store.save("abc", session.get_session_object())
        >>> loaded = store.load("abc")
    """

    EXTENSION = '.session'
    SCHEMA_VERSION = 1

    def __init__(
        self,
        name: Union[str, Path],
        base_path: Optional[Path] = None,
        *,
        clock: Clock = system_clock
    ):
        """
        Initialize SQLite session store.

        Args:
            name: Store name (without extension) or full path
            base_path: Optional base directory for store files
            clock: Source of the updated_at bookkeeping timestamp
        """
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None
        self._clock = clock

        # Determine file path
        if isinstance(name, Path) or name.endswith(self.EXTENSION):
            self._path = Path(name)
        else:
            if base_path:
                self._path = base_path / f"{name}{self.EXTENSION}"
            else:
                self._path = Path(f"{name}{self.EXTENSION}")

        # Ensure parent directory exists
        self._path.parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    @property
    def path(self) -> Path:
        """Get store file path."""
        return self._path

    @contextmanager
    def _get_connection(self):
        """Get thread-safe database connection."""
        with self._lock:
            try:
                if self._conn is None:
                    self._conn = sqlite3.connect(
                        str(self._path),
                        check_same_thread=False
                    )
                    self._conn.row_factory = sqlite3.Row
                yield self._conn
            except sqlite3.Error as e:
                raise SessionStoreError(f"SQLite error on {self._path}: {e}") from e

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS version (
                    version INTEGER PRIMARY KEY
                )
            ''')

            # expire is duplicated out of the payload for listing
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS sessions (
                    id TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    expire TEXT,
                    updated_at TEXT NOT NULL
                )
            ''')

            cursor.execute('SELECT version FROM version LIMIT 1')
            row = cursor.fetchone()
            if row is None:
                cursor.execute(
                    'INSERT INTO version (version) VALUES (?)',
                    (self.SCHEMA_VERSION,)
                )

            conn.commit()

    def load(self, session_id: str) -> Optional[SessionObject]:
        """
        Load a session record from the database.

        Returns:
            SessionObject if stored, None otherwise

        Raises:
            SessionDecodeError: If the stored payload is corrupted
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                'SELECT payload FROM sessions WHERE id = ?',
                (session_id,)
            )
            row = cursor.fetchone()

        if row is None:
            return None

        try:
            return SessionObject.from_json(row['payload'])
        except SessionDecodeError as e:
            e.session_id = session_id
            raise

    def require(self, session_id: str) -> SessionObject:
        """
        Load a session record that must exist.

        Raises:
            SessionNotFoundError: If nothing is stored for session_id
        """
        obj = self.load(session_id)
        if obj is None:
            raise SessionNotFoundError(f"No session stored for {session_id!r}", session_id)
        return obj

    def save(self, session_id: str, obj: SessionObject) -> None:
        """
        Save a session record to the database.

        Args:
            session_id: Session identifier
            obj: Record to save
        """
        try:
            payload = obj.to_json()
        except (TypeError, ValueError) as e:
            raise SessionStoreError(
                f"Session {session_id} holds values that are not JSON serializable: {e}",
                session_id
            ) from e

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT OR REPLACE INTO sessions (id, payload, expire, updated_at)
                VALUES (?, ?, ?, ?)
            ''', (
                session_id,
                payload,
                obj.expire,
                format_timestamp(self._clock()),
            ))
            conn.commit()

        logger.debug(f"Saved session {session_id} to {self._path}")

    def delete(self, session_id: str) -> None:
        """Delete a session record from the database."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM sessions WHERE id = ?', (session_id,))
            conn.commit()
            deleted = cursor.rowcount

        if deleted:
            logger.debug(f"Deleted session {session_id} from {self._path}")

    def exists(self, session_id: str) -> bool:
        """
        Check if session exists.

        Returns:
            True if a record is stored
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM sessions WHERE id = ?', (session_id,))
            count = cursor.fetchone()[0]
            return count > 0

    def ids(self) -> List[str]:
        """List stored session identifiers."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT id FROM sessions ORDER BY id')
            return [row['id'] for row in cursor.fetchall()]

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def delete_file(self) -> None:
        """Delete the store file completely."""
        self.close()
        if self._path.exists():
            self._path.unlink()

    def __enter__(self) -> 'SQLiteSessionStore':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
