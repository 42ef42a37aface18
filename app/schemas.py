# WorkHours - API Schemas
# Pydantic request/response bodies

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class SessionData(BaseModel):
    token: str
    expires_at: datetime


class LoginResponse(BaseModel):
    status: bool = True
    message: str
    data: SessionData


class DashboardSummaryData(BaseModel):
    hours_today: float
    hours_this_week: float
    events_this_week: int
    leave_this_week: int
    has_pending_hours: bool


class DashboardSummaryResponse(BaseModel):
    status: bool = True
    message: str
    data: DashboardSummaryData


class MessageResponse(BaseModel):
    status: bool
    message: str
    error: Optional[str] = None
