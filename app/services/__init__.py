# WorkHours - Services
# Business logic layer

from .approval import AutoApprover
from .auth import AuthService, AuthenticationError
from .clock import Clock, SystemClock, FixedClock, get_week_bounds
from .dashboard import DashboardService
from .summary import DashboardSummary, SummaryCalculator, round_hours

__all__ = [
    "AutoApprover",
    "AuthService",
    "AuthenticationError",
    "Clock",
    "SystemClock",
    "FixedClock",
    "get_week_bounds",
    "DashboardService",
    "DashboardSummary",
    "SummaryCalculator",
    "round_hours",
]
