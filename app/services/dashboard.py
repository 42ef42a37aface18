# WorkHours - Dashboard Service
# Approve-then-summarize as a single unit of work

from typing import Optional

from sqlalchemy.orm import Session

from app.services.approval import AutoApprover
from app.services.clock import Clock, SystemClock
from app.services.summary import DashboardSummary, SummaryCalculator


class DashboardService:
    """
    Produces the dashboard summary for one user.

    Auto-approval for the user always runs first, in the same
    transaction as the reads, so the totals include entries that
    became approved during this call. Either the whole operation
    commits or nothing does.

    Usage:
        service = DashboardService(db, clock)
        summary = service.get_summary(user.user_id)
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or SystemClock()
        self.approver = AutoApprover(db, self.clock)
        self.calculator = SummaryCalculator(db, self.clock)

    def get_summary(self, user_id: int) -> DashboardSummary:
        try:
            self.approver.run(user_id=user_id)
            summary = self.calculator.summarize(user_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return summary
