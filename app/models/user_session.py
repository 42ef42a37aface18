# WorkHours - User Session Model
# Bearer/cookie session tokens

import secrets
from datetime import datetime, timedelta
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Boolean, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, qualified

if TYPE_CHECKING:
    from .user import User


# 32 random bytes, hex encoded to 64 characters
TOKEN_BYTES = 32


class UserSession(Base):
    """
    One issued session token.

    The same token authenticates either as "Authorization: Bearer <token>"
    or as the session cookie. A token stops working when it expires or is
    ended by logout; the row is kept either way.
    """

    __tablename__ = "user_sessions"

    __table_args__ = (
        Index("ix_user_sessions_user_active", "user_id", "is_active"),
    )

    session_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(qualified("users.user_id")), nullable=False, index=True
    )
    session_token: Mapped[str] = mapped_column(String(TOKEN_BYTES * 2), unique=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_activity_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    logged_out_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Where the login came from
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id])

    def __repr__(self) -> str:
        state = "active" if self.is_active else "ended"
        return f"<UserSession {self.session_id} ({state}) for user {self.user_id}>"

    @classmethod
    def issue(
        cls,
        user_id: int,
        lifetime: timedelta,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> "UserSession":
        """Create a fresh token for user_id valid for lifetime."""
        now = datetime.utcnow()
        return cls(
            user_id=user_id,
            session_token=secrets.token_hex(TOKEN_BYTES),
            created_at=now,
            expires_at=now + lifetime,
            is_active=True,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:500] or None,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) > self.expires_at

    def touch(self, now: Optional[datetime] = None) -> None:
        """Record use of the token."""
        self.last_activity_at = now or datetime.utcnow()

    def end(self, now: Optional[datetime] = None) -> None:
        """Invalidate the token on logout."""
        self.is_active = False
        self.logged_out_at = now or datetime.utcnow()
