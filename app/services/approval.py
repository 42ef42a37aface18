# WorkHours - Auto-Approval Service
# Moves complete, non-future pending entries to approved

import logging
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.time_entry import EntryStatus, TimeEntry, eligible_for_approval
from app.services.clock import Clock, SystemClock


logger = logging.getLogger(__name__)


class AutoApprover:
    """
    Applies the auto-approval rule to stored time entries.

    An entry is approved when it is pending, has both login_time and
    logout_time, and is not dated after today. Nothing else can approve
    an entry, and approved entries are never touched again, so running
    the approver repeatedly is harmless.

    Usage:
        approver = AutoApprover(db, clock)

        approver.run(user_id=5)   # one user (dashboard request)
        approver.run()            # every user (scheduled job)

    The caller owns the transaction: run() flushes its UPDATE but does
    not commit.
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or SystemClock()

    def run(self, user_id: Optional[int] = None) -> int:
        """
        Approve every eligible entry in scope.

        Args:
            user_id: Restrict to this user's entries; None means all users

        Returns:
            Number of entries approved (0 is a normal outcome)
        """
        now = self.clock.now()

        stmt = (
            update(TimeEntry)
            .where(eligible_for_approval(now.date()))
            .values(status=EntryStatus.APPROVED, approved_at=now)
            .execution_options(synchronize_session="fetch")
        )
        if user_id is not None:
            stmt = stmt.where(TimeEntry.user_id == user_id)

        result = self.db.execute(stmt)
        self.db.flush()
        updated = result.rowcount or 0

        if updated > 0:
            if user_id is None:
                logger.info("Auto-approved %d work hours entries", updated)
            else:
                logger.info("Auto-approved %d work hours entries for user %s", updated, user_id)

        return updated
