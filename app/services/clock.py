# WorkHours - Clock
# Source of "now" for approval and aggregation

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo


class Clock(ABC):
    """Interface for anything that can tell the current date and time."""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()

    def week_bounds(self) -> tuple[date, date]:
        """Monday and Sunday of the week containing today."""
        return get_week_bounds(self.today())


class SystemClock(Clock):
    """
    Wall clock, optionally pinned to an IANA timezone.

    Returned datetimes are naive so they compare with the naive
    DateTime columns in the database.
    """

    def __init__(self, timezone: Optional[str] = None):
        self.tz = ZoneInfo(timezone) if timezone else None

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now()
        return datetime.now(self.tz).replace(tzinfo=None)


class FixedClock(Clock):
    """
    Clock frozen at a given moment.

    Usage:
        clock = FixedClock(datetime(2025, 1, 15, 17, 0))
        clock.today()        # date(2025, 1, 15)
        clock.advance(days=1)
    """

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment = self.moment + timedelta(**kwargs)


def get_week_bounds(target_date: date) -> tuple[date, date]:
    """Get Monday and Sunday of the week containing target_date."""
    monday = target_date - timedelta(days=target_date.weekday())
    sunday = monday + timedelta(days=6)
    return monday, sunday
