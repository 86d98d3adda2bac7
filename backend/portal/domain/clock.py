"""UTC timestamp source that never goes backwards."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


class UtcClock:
    """Issues ISO-8601 UTC stamps, strictly increasing within this process.

    Two mutations in the same microsecond (or a wall clock stepping back)
    still get distinct, ordered ``updatedAt`` values.
    """

    def __init__(self, now: Callable[[], datetime] | None = None):
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._last: datetime | None = None

    def stamp(self) -> str:
        current = self._now()
        if self._last is not None and current <= self._last:
            current = self._last + timedelta(microseconds=1)
        self._last = current
        return format_timestamp(current)
