"""
Custom exceptions for session persistence.

The in-memory Session never raises; these cover decoding persisted
records and talking to a session store.
"""
from typing import Optional, Any


class SessionError(Exception):
    """Base exception for all flashsession errors."""

    def __init__(self, message: str, session_id: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            session_id: Identifier of the session involved (if known)
        """
        self.session_id = session_id
        super().__init__(message)


class SessionDecodeError(SessionError):
    """Exception raised when a persisted record is not shaped like a session."""

    def __init__(
        self,
        message: str,
        session_id: Optional[str] = None,
        payload: Any = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            session_id: Identifier of the session being decoded
            payload: Raw payload that failed to decode (if available)
        """
        self.payload = payload
        super().__init__(message, session_id)


class SessionStoreError(SessionError):
    """Exception raised when a session store operation fails."""
    pass


class SessionNotFoundError(SessionStoreError):
    """Exception raised when no record exists for a session id."""
    pass
