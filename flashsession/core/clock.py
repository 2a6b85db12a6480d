"""
Clock utilities.

The session core never reads the system clock directly. Every "now" comes
from a Clock: any zero-argument callable returning an aware datetime.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Union

Clock = Callable[[], datetime]

_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def system_clock() -> datetime:
    """Return the current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert to an aware UTC datetime. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC timestamp.

    Millisecond precision with a ``Z`` suffix, e.g.
    ``2222-02-02T00:01:00.000Z``. Naive datetimes are taken as UTC.

    Args:
        dt: Datetime to format

    Returns:
        Timestamp string
    """
    dt = to_utc(dt)
    return dt.strftime('%Y-%m-%dT%H:%M:%S') + f'.{dt.microsecond // 1000:03d}Z'


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a ``Z`` suffix or an explicit offset. Strings without an
    offset are taken as UTC. Fractional seconds of any length are
    padded or truncated to microseconds.

    Args:
        value: Timestamp string

    Returns:
        Aware datetime in UTC

    Raises:
        ValueError: If the string is not an ISO-8601 timestamp
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits
    text = _FRACTION.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '00000')[:6]}", text)
    return to_utc(datetime.fromisoformat(text))


class FixedClock:
    """
    Clock frozen at a given instant.

    Only moves when told to. Intended for tests and for replaying
    sessions at a known time.

    Example:
        >>> clock = FixedClock("2222-02-02T00:00:00.000Z")
        >>> format_timestamp(clock.advance(seconds=60)())
        '2222-02-02T00:01:00.000Z'
    """

    def __init__(self, at: Union[datetime, str]):
        self._now = self._coerce(at)

    @staticmethod
    def _coerce(at: Union[datetime, str]) -> datetime:
        if isinstance(at, str):
            return parse_timestamp(at)
        return to_utc(at)

    def __call__(self) -> datetime:
        return self._now

    def set(self, at: Union[datetime, str]) -> 'FixedClock':
        """Move the clock to an absolute instant."""
        self._now = self._coerce(at)
        return self

    def advance(self, seconds: float = 0, **kwargs) -> 'FixedClock':
        """Move the clock forward by a timedelta (negative moves it back)."""
        self._now = self._now + timedelta(seconds=seconds, **kwargs)
        return self

    def __repr__(self) -> str:
        return f"FixedClock({format_timestamp(self._now)!r})"
