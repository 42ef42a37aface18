# WorkHours - Dashboard Routes
# Per-user hour summary with auto-approval applied first

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.dependencies import get_clock, get_current_user_optional
from app.errors import ApiError, ErrorKind
from app.schemas import DashboardSummaryResponse
from app.services.clock import Clock
from app.services.dashboard import DashboardService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummaryResponse)
def get_summary(
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Hours worked today and this week, approved entries only.

    Eligible pending entries for the caller are approved before the
    totals are read. has_pending_hours flags anything still pending.

    The session lookup sits inside the error boundary, so a failure
    there is reported like any other internal error.
    """
    try:
        user = get_current_user_optional(request, db)
        if not user:
            raise ApiError(ErrorKind.UNAUTHENTICATED, "Unauthorized")

        summary = DashboardService(db, clock).get_summary(user.user_id)
        data = summary.as_dict()
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Dashboard summary failed")
        detail = str(e) if get_settings().debug else "internal error"
        raise ApiError(
            ErrorKind.INTERNAL,
            f"Failed to fetch dashboard summary: {detail}",
        ) from e

    return {
        "status": True,
        "message": "Dashboard summary fetched successfully",
        "data": data,
    }
