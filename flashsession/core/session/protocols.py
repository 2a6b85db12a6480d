"""
Session store protocols.

Defines the interface a persistence backend implements to save and
load session records by identifier.
"""
from typing import List, Protocol, Optional, runtime_checkable
from .models import SessionObject


@runtime_checkable
class SessionStore(Protocol):
    """
    Protocol for session store implementations.

    Implementations can use SQLite, JSON files, Redis, or any other
    backend. Stores never act on expiration by themselves.
    """

    def load(self, session_id: str) -> Optional[SessionObject]:
        """
        Load a session record.

        Args:
            session_id: Session identifier

        Returns:
            SessionObject if one is stored, None otherwise
        """
        ...

    def save(self, session_id: str, obj: SessionObject) -> None:
        """
        Save a session record, replacing any previous one.

        Args:
            session_id: Session identifier
            obj: Record to save
        """
        ...

    def delete(self, session_id: str) -> None:
        """
        Delete a session record. Unknown ids are ignored.
        """
        ...

    def exists(self, session_id: str) -> bool:
        """
        Check if a record is stored for session_id.

        Returns:
            True if a record exists
        """
        ...

    def ids(self) -> List[str]:
        """
        List stored session identifiers.

        Returns:
            Identifiers in sorted order
        """
        ...

    def close(self) -> None:
        """
        Close storage connection and release resources.
        """
        ...
