# WorkHours - Request Dependencies
# Authentication and clock providers for route handlers

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.user import User
from app.services.auth import AuthService
from app.services.clock import Clock, SystemClock


# Cookie name for session token
SESSION_COOKIE_NAME = "workhours_session"


def get_session_token(request: Request) -> Optional[str]:
    """
    Extract the session token from the request.

    Accepts "Authorization: Bearer <token>" first, then the session cookie.
    Returns None if neither is present.
    """
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(SESSION_COOKIE_NAME)


def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Get the current user if logged in, None otherwise."""
    session_token = get_session_token(request)
    if not session_token:
        return None

    auth = AuthService(db)
    return auth.validate_session(session_token)


def get_clock() -> Clock:
    """Clock used for "today" and week bounds. Tests override this."""
    return SystemClock(get_settings().timezone)
