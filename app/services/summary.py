# WorkHours - Summary Calculation
# Approved-only hour totals and dashboard counters

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from app.models.time_entry import EntryStatus, TimeEntry
from app.services.clock import Clock, SystemClock


ONE_DECIMAL = Decimal("0.1")


def round_hours(value: Decimal) -> float:
    """Round an hour total to one decimal place for display."""
    return float(value.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


@dataclass
class DashboardSummary:
    """Per-user totals. Hours stay Decimal until serialized."""

    hours_today: Decimal
    hours_this_week: Decimal
    events_this_week: int
    leave_this_week: int
    has_pending_hours: bool

    def as_dict(self) -> dict:
        return {
            "hours_today": round_hours(self.hours_today),
            "hours_this_week": round_hours(self.hours_this_week),
            "events_this_week": self.events_this_week,
            "leave_this_week": self.leave_this_week,
            "has_pending_hours": self.has_pending_hours,
        }


class SummaryCalculator:
    """
    Read-only aggregation over a user's time entries.

    Hour totals only ever select approved rows; pending rows are
    reported through has_pending_hours instead.
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or SystemClock()

    def summarize(self, user_id: int) -> DashboardSummary:
        return DashboardSummary(
            hours_today=self.hours_today(user_id),
            hours_this_week=self.hours_this_week(user_id),
            events_this_week=self.count_events_this_week(user_id),
            leave_this_week=self.count_leave_this_week(user_id),
            has_pending_hours=self.has_pending_hours(user_id),
        )

    def hours_today(self, user_id: int) -> Decimal:
        """Approved hours dated today."""
        today = self.clock.today()
        return self._approved_hours(user_id, today, today)

    def hours_this_week(self, user_id: int) -> Decimal:
        """Approved hours dated Monday through Sunday of the current week."""
        week_start, week_end = self.clock.week_bounds()
        return self._approved_hours(user_id, week_start, week_end)

    def has_pending_hours(self, user_id: int) -> bool:
        """Any pending entry at all, whatever its date or completeness."""
        return bool(self.db.execute(
            select(exists().where(
                TimeEntry.user_id == user_id,
                TimeEntry.status == EntryStatus.PENDING,
            ))
        ).scalar())

    # Informational counters. Events and leave are owned by other
    # systems; these stay at zero until one is wired in.

    def count_events_this_week(self, user_id: int) -> int:
        return 0

    def count_leave_this_week(self, user_id: int) -> int:
        return 0

    def _approved_hours(self, user_id: int, start, end) -> Decimal:
        total = self.db.execute(
            select(func.coalesce(func.sum(TimeEntry.total_hours), 0))
            .where(
                TimeEntry.user_id == user_id,
                TimeEntry.status == EntryStatus.APPROVED,
                TimeEntry.entry_date >= start,
                TimeEntry.entry_date <= end,
            )
        ).scalar()
        return Decimal(str(total or 0))
