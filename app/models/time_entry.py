# WorkHours - Time Entry Model

import enum
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import (
    Integer, DateTime, Date, Enum, Numeric, ForeignKey, Index, and_,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import Base, qualified

if TYPE_CHECKING:
    from .user import User


class EntryStatus(str, enum.Enum):
    """Approval state of a time entry. There is no rejected state."""

    PENDING = "pending"
    APPROVED = "approved"


class TimeEntry(Base):
    """
    A user's time record for a single calendar date.

    Entries are written by the time-tracking pipeline with status
    pending. They become approved only through the auto-approval rule
    (see eligible_for_approval) and are never moved back to pending.

    total_hours is stored as given. It is not derived from
    login_time/logout_time and is not checked against them.
    """

    __tablename__ = "time_entries"

    # Common query pattern: one user's entries by status in a date range
    __table_args__ = (
        Index("ix_time_entries_user_status_date", "user_id", "status", "date"),
        Index("ix_time_entries_status_date", "status", "date"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(qualified("users.user_id")),
        nullable=False,
        index=True
    )

    entry_date: Mapped[date] = mapped_column(
        "date",
        Date,
        nullable=False
    )

    login_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True
    )

    logout_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True
    )

    # Precision 5,2 allows 0.00 to 999.99 hours
    total_hours: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        default=Decimal("0.00"),
        nullable=False
    )

    status: Mapped[EntryStatus] = mapped_column(
        Enum(
            EntryStatus,
            name="entry_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=EntryStatus.PENDING,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False
    )

    approved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="time_entries"
    )

    def __repr__(self) -> str:
        status = self.status.value if self.status else "new"
        return f"<TimeEntry {self.id} {self.entry_date} {self.total_hours}h {status}>"

    @validates("status")
    def _validate_status(self, key, value):
        new_status = EntryStatus(value)
        if self.status == EntryStatus.APPROVED and new_status != EntryStatus.APPROVED:
            raise ValueError(f"Time entry {self.id} is approved and cannot return to {new_status.value}")
        return new_status

    @property
    def is_complete(self) -> bool:
        """Both login and logout have been recorded."""
        return self.login_time is not None and self.logout_time is not None

    def is_eligible_for_approval(self, today: date) -> bool:
        """In-memory counterpart of eligible_for_approval()."""
        return (
            self.status == EntryStatus.PENDING
            and self.is_complete
            and self.entry_date <= today
        )


def eligible_for_approval(today: date):
    """
    SQL criteria for entries the auto-approval rule may approve.

    Pending, both timestamps present, and not dated after today.
    """
    return and_(
        TimeEntry.status == EntryStatus.PENDING,
        TimeEntry.login_time.is_not(None),
        TimeEntry.logout_time.is_not(None),
        TimeEntry.entry_date <= today,
    )
