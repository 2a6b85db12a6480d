"""
flashsession - Session state with expiration and flash values.

Usage:
    >>> from flashsession import Session, SQLiteSessionStore
    >>>
    >>> with SQLiteSessionStore("web") as store:
    ...     session = Session.load(store, session_id)
    ...     if session.is_expired():
    ...         session.reset(3600)
    ...     session.flash("notice", "Profile saved")
    ...     session.save(store, session_id)
"""
import logging

from .core.clock import Clock, FixedClock, system_clock, format_timestamp, parse_timestamp
from .core.exceptions import (
    SessionError,
    SessionDecodeError,
    SessionStoreError,
    SessionNotFoundError
)

# Session management
from .core.session import (
    EntryState,
    SessionEntry,
    SessionObject,
    SessionStore,
    Session,
    MemorySessionStore,
    SQLiteSessionStore
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for flashsession modules.

    Sets the level on the package loggers and keeps propagation on,
    so records reach whatever handlers the application installed.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'flashsession',
        'flashsession.core.session.session',
        'flashsession.core.session.memory_store',
        'flashsession.core.session.sqlite_store',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'Session',
    'SessionEntry',
    'SessionObject',
    'EntryState',
    'SessionStore',
    'MemorySessionStore',
    'SQLiteSessionStore',
    'Clock',
    'FixedClock',
    'system_clock',
    'format_timestamp',
    'parse_timestamp',
    'SessionError',
    'SessionDecodeError',
    'SessionStoreError',
    'SessionNotFoundError',
    'setup_logging',
]
