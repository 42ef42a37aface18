# WorkHours - Scheduled Jobs
# Global auto-approval, run from cron or as a long-lived loop

import logging
import time
from typing import Callable, Optional

from app.config import get_settings
from app.database import get_db_context
from app.services.approval import AutoApprover
from app.services.clock import Clock, SystemClock


logger = logging.getLogger(__name__)


def default_clock() -> Clock:
    return SystemClock(get_settings().timezone)


def run_auto_approval(clock: Optional[Clock] = None) -> int:
    """
    Approve every eligible entry for all users in one transaction.

    Returns the number of entries approved.
    """
    with get_db_context() as db:
        try:
            updated = AutoApprover(db, clock or default_clock()).run()
            db.commit()
        except Exception:
            db.rollback()
            raise
    logger.info("Scheduled auto-approval finished: %d entries", updated)
    return updated


def run_auto_approval_forever(
    interval_minutes: int,
    clock_factory: Callable[[], Clock] = default_clock,
    sleep: Callable[[float], None] = time.sleep,
    max_runs: Optional[int] = None,
) -> int:
    """
    Run run_auto_approval every interval_minutes until interrupted.

    A failed run is logged and retried at the next interval.
    max_runs bounds the loop; returns the number of runs attempted.
    """
    runs = 0
    while max_runs is None or runs < max_runs:
        try:
            run_auto_approval(clock_factory())
        except Exception:
            logger.exception("Scheduled auto-approval failed")
        runs += 1
        if max_runs is None or runs < max_runs:
            sleep(interval_minutes * 60)
    return runs
