"""
In-memory session state.

A Session owns one SessionObject for the lifetime of a single
activation (typically one request): hydrate it, read and write
values, then hand the record back to a store.
"""
from datetime import timedelta
from typing import Generic, Optional, TypeVar

from ..clock import Clock, system_clock, format_timestamp, parse_timestamp, to_utc
from ..logging import get_logger
from .models import EntryState, SessionEntry, SessionObject
from .protocols import SessionStore

T = TypeVar('T')

logger = get_logger(__name__)


class Session(Generic[T]):
    """
    Keyed session values with expiration and flash semantics.

    Every key is in one of three states (see EntryState):

    - ``set`` moves it to PERSISTENT from any state
    - ``flash`` moves it to FLASH from any state
    - ``get`` on FLASH returns the value and moves it to ABSENT;
      on PERSISTENT or ABSENT it leaves the state unchanged

    No operation raises and none performs I/O. Instances are not
    thread-safe; use one per activation.

    Example:
        >>> session = Session()
        >>> session.flash("notice", "Saved")
        >>> session.get("notice")
        'Saved'
        >>> session.get("notice") is None
        True
    """

    def __init__(
        self,
        initial: Optional[SessionObject[T]] = None,
        *,
        clock: Clock = system_clock
    ):
        """
        Initialize session.

        Args:
            initial: Record to adopt as-is (not copied, not validated)
            clock: Source of the current time
        """
        self._object: SessionObject[T] = initial if initial is not None else SessionObject()
        self._clock = clock

    @classmethod
    def load(
        cls,
        store: SessionStore,
        session_id: str,
        *,
        clock: Clock = system_clock
    ) -> 'Session[T]':
        """
        Hydrate a session from a store.

        An unknown id yields an empty session. Expired records are
        returned as-is; check is_expired() and act on it.

        Args:
            store: Session store to read from
            session_id: Session identifier
            clock: Source of the current time

        Returns:
            Session instance
        """
        return cls(store.load(session_id), clock=clock)

    def save(self, store: SessionStore, session_id: str) -> None:
        """Persist the current record under session_id."""
        store.save(session_id, self._object)

    @property
    def clock(self) -> Clock:
        return self._clock

    def get_session_object(self) -> SessionObject[T]:
        """Return the current record, including deletions from flash reads."""
        return self._object

    def set_session_object(self, obj: SessionObject[T]) -> None:
        """Replace the whole record. Nothing is merged."""
        self._object = obj

    def _now(self):
        return to_utc(self._clock())

    def _expire_at(self, ttl: Optional[float]) -> Optional[str]:
        if ttl is None:
            return None
        return format_timestamp(self._now() + timedelta(seconds=ttl))

    def reset(self, ttl: Optional[float] = None) -> None:
        """
        Drop all values and re-arm the deadline.

        Args:
            ttl: Seconds from now until expiration; None means never
        """
        self._object.data = {}
        self._object.expire = self._expire_at(ttl)
        logger.debug(f"Session reset, expire={self._object.expire}")

    def refresh(self, ttl: Optional[float] = None) -> None:
        """
        Move the deadline, keeping stored values.

        Args:
            ttl: Seconds from now until expiration; None means never
        """
        self._object.expire = self._expire_at(ttl)
        logger.debug(f"Session refreshed, expire={self._object.expire}")

    def is_expired(self) -> bool:
        """
        Check whether the deadline has passed.

        The deadline instant itself still counts as live. A deadline
        that cannot be parsed counts as expired.

        Returns:
            True if now is strictly after expire
        """
        expire = self._object.expire
        if expire is None:
            return False
        try:
            deadline = parse_timestamp(expire)
        except ValueError:
            logger.warning(f"Unparseable session expire {expire!r}, treating as expired")
            return True
        return self._now() > deadline

    def state(self, key: str) -> EntryState:
        """Return the state of key without reading it."""
        entry = self._object.data.get(key)
        if entry is None:
            return EntryState.ABSENT
        return entry.state

    def get(self, key: str) -> Optional[T]:
        """
        Read a value.

        A flash entry is removed before this returns, so a second
        get on the same key returns None.

        Args:
            key: Entry name

        Returns:
            Stored value, or None if key is absent
        """
        entry = self._object.data.get(key)
        if entry is None:
            return None
        if entry.state is EntryState.FLASH:
            del self._object.data[key]
            logger.debug(f"Flash value {key!r} consumed")
        return entry.value

    def set(self, key: str, value: T) -> None:
        """Store a value that survives any number of reads."""
        self._object.data[key] = SessionEntry(value=value, flash=False)

    def flash(self, key: str, value: T) -> None:
        """Store a value that is deleted by its next read."""
        self._object.data[key] = SessionEntry(value=value, flash=True)

    def __repr__(self) -> str:
        return f"Session(keys={sorted(self._object.data)!r}, expire={self._object.expire!r})"
