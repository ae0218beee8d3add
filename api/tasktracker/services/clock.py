from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_naive_utc(dt: datetime) -> datetime:
    """Stored timestamps are naive UTC; aware values are converted first."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


class Clock:
    """Defines "today" for quota accounting in one configured time zone."""

    def __init__(self, tz: str = "UTC") -> None:
        try:
            self.zone = ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {tz!r}") from e
        self.tz_name = tz

    def now(self) -> datetime:
        return utcnow()

    def today(self, now: datetime | None = None) -> date:
        now = now or self.now()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.zone).date()

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        # Half-open [start, end) in naive UTC. Local midnights are computed
        # separately so 23h and 25h DST days come out right.
        start = datetime.combine(day, time.min, tzinfo=self.zone)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self.zone)
        return to_naive_utc(start), to_naive_utc(end)


class FixedClock(Clock):
    def __init__(self, now: datetime, tz: str = "UTC") -> None:
        super().__init__(tz)
        self._now = now if now.tzinfo else now.replace(tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now if now.tzinfo else now.replace(tzinfo=timezone.utc)

    def advance(self, **kwargs: float) -> None:
        self._now = self._now + timedelta(**kwargs)
