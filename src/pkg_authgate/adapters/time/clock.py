from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from ...domain.ports import Clock


class SystemClock(Clock):
    """Clock backed by the system time, always in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    Clock frozen at a given instant until moved with `advance` / `set`.

    Naive datetimes are taken to be UTC.
    """

    def __init__(self, instant: datetime) -> None:
        self._instant = _as_utc(instant)
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> datetime:
        with self._lock:
            self._instant = self._instant + delta
            return self._instant

    def set(self, instant: datetime) -> None:
        with self._lock:
            self._instant = _as_utc(instant)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)
