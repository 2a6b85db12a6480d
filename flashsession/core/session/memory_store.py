"""
In-memory session store implementation.

Provides non-persistent session storage for testing and single-process use.
"""
import copy
from typing import Dict, List, Optional

from ..exceptions import SessionNotFoundError, SessionStoreError
from ..logging import get_logger
from .protocols import SessionStore
from .models import SessionObject

logger = get_logger(__name__)


class MemorySessionStore(SessionStore):
    """
    In-memory session store.

    Records are kept in their serialized dictionary form, so a loaded
    SessionObject never aliases the one that was saved.
    Data is lost when the object is destroyed.

    Example:
        >>> store = MemorySessionStore()
        >>> store.save("abc", SessionObject())
        >>> store.exists("abc")
        True
    """

    def __init__(self):
        """Initialize memory store."""
        self._records: Dict[str, dict] = {}

    def load(self, session_id: str) -> Optional[SessionObject]:
        """
        Load a session record from memory.

        Returns:
            SessionObject if stored, None otherwise
        """
        record = self._records.get(session_id)
        if record is None:
            return None
        return SessionObject.from_dict(copy.deepcopy(record))

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
        Save a session record to memory.

        Args:
            session_id: Session identifier
            obj: Record to save
        """
        try:
            record = copy.deepcopy(obj.to_dict())
        except (TypeError, copy.Error) as e:
            raise SessionStoreError(
                f"Session {session_id} holds values that cannot be copied: {e}",
                session_id
            ) from e
        self._records[session_id] = record
        logger.debug(f"Saved session {session_id} ({len(obj.data)} entries)")

    def delete(self, session_id: str) -> None:
        """Delete a session record from memory."""
        if self._records.pop(session_id, None) is not None:
            logger.debug(f"Deleted session {session_id}")

    def exists(self, session_id: str) -> bool:
        """
        Check if session exists.

        Returns:
            True if a record is stored
        """
        return session_id in self._records

    def ids(self) -> List[str]:
        """List stored session identifiers."""
        return sorted(self._records)

    def clear(self) -> None:
        """Drop every stored record."""
        self._records.clear()

    def close(self) -> None:
        """Close storage (no-op for memory storage)."""
        pass

    def __enter__(self) -> 'MemorySessionStore':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
