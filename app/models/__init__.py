# WorkHours - SQLAlchemy Models

from .base import Base, TimestampMixin
from .user import User
from .time_entry import TimeEntry, EntryStatus, eligible_for_approval
from .user_session import UserSession

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "TimeEntry",
    "EntryStatus",
    "eligible_for_approval",
    "UserSession",
]
