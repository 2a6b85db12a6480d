"""
Session data models.

Contains the data classes for a persisted session record and
the codec for its canonical dictionary/JSON shape.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar
import json

from ..exceptions import SessionDecodeError

T = TypeVar('T')


class EntryState(Enum):
    """State of a single key in a session."""
    ABSENT = 'absent'
    PERSISTENT = 'persistent'
    FLASH = 'flash'


@dataclass
class SessionEntry(Generic[T]):
    """
    One stored value.

    Attributes:
        value: Application payload, treated opaquely
        flash: Delete the entry right after its first read
    """
    value: T
    flash: bool = False

    @property
    def state(self) -> EntryState:
        return EntryState.FLASH if self.flash else EntryState.PERSISTENT

    def to_dict(self) -> dict:
        return {'value': self.value, 'flash': self.flash}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SessionEntry':
        if not isinstance(data, Mapping):
            raise SessionDecodeError(
                f"Session entry must be a mapping, got {type(data).__name__}",
                payload=data
            )
        if 'value' not in data:
            raise SessionDecodeError("Session entry has no 'value'", payload=data)
        flash = data.get('flash', False)
        if not isinstance(flash, bool):
            raise SessionDecodeError(
                f"Session entry 'flash' must be a bool, got {type(flash).__name__}",
                payload=data
            )
        return cls(value=data['value'], flash=flash)


@dataclass
class SessionObject(Generic[T]):
    """
    Complete session record.

    This is what a session store persists and what a Session
    hydrates from.

    Attributes:
        data: Entries keyed by name
        expire: ISO-8601 UTC deadline, or None for no expiration
    """
    data: Dict[str, SessionEntry[T]] = field(default_factory=dict)
    expire: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Convert to the canonical dictionary shape.

        Returns:
            ``{"data": {key: {"value": ..., "flash": ...}}, "expire": ...}``
        """
        return {
            'data': {key: entry.to_dict() for key, entry in self.data.items()},
            'expire': self.expire,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SessionObject':
        """
        Create from the canonical dictionary shape.

        The shape is checked; the ``expire`` string is not parsed.
        Missing ``data`` decodes as empty, missing ``expire`` as None.

        Args:
            data: Dictionary with session record

        Returns:
            SessionObject instance

        Raises:
            SessionDecodeError: If the dictionary is not a session record
        """
        if not isinstance(data, Mapping):
            raise SessionDecodeError(
                f"Session record must be a mapping, got {type(data).__name__}",
                payload=data
            )

        raw_entries = data.get('data')
        if raw_entries is None:
            raw_entries = {}
        if not isinstance(raw_entries, Mapping):
            raise SessionDecodeError("Session 'data' must be a mapping", payload=data)

        expire = data.get('expire')
        if expire is not None and not isinstance(expire, str):
            raise SessionDecodeError(
                f"Session 'expire' must be a string or null, got {type(expire).__name__}",
                payload=data
            )

        entries = {}
        for key, raw in raw_entries.items():
            if not isinstance(key, str):
                raise SessionDecodeError(f"Session key must be a string: {key!r}", payload=data)
            entries[key] = SessionEntry.from_dict(raw)

        return cls(data=entries, expire=expire)

    def to_json(self) -> str:
        """
        Serialize to JSON string.

        Returns:
            JSON string
        """
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> 'SessionObject':
        """
        Create from JSON string.

        Args:
            json_str: JSON string

        Returns:
            SessionObject instance

        Raises:
            SessionDecodeError: If the string is not JSON or not a session record
        """
        try:
            payload = json.loads(json_str)
        except (TypeError, ValueError) as e:
            raise SessionDecodeError(f"Invalid session JSON: {e}", payload=json_str) from e
        return cls.from_dict(payload)
