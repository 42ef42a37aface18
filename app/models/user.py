# WorkHours - User Model

from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .time_entry import TimeEntry


class User(TimestampMixin, Base):
    """
    A person whose working hours are tracked.

    Users own time entries and authenticate with a username/password
    to obtain a session token.
    """

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True
    )

    display_name: Mapped[str] = mapped_column(
        String(150),
        nullable=False
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )

    # Null until a password is set from the CLI
    password_hash: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False
    )

    time_entries: Mapped[List["TimeEntry"]] = relationship(
        "TimeEntry",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"<User {self.user_id} {self.username}>"
