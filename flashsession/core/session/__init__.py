"""
Session module.

Provides the in-memory Session with expiration and flash values,
its persisted record model, and reference session stores.
"""
from .models import EntryState, SessionEntry, SessionObject
from .protocols import SessionStore
from .session import Session
from .memory_store import MemorySessionStore
from .sqlite_store import SQLiteSessionStore

__all__ = [
    'EntryState',
    'SessionEntry',
    'SessionObject',
    'SessionStore',
    'Session',
    'MemorySessionStore',
    'SQLiteSessionStore',
]
