# WorkHours - Authentication Routes
# Login and logout for API clients

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.dependencies import SESSION_COOKIE_NAME, get_session_token
from app.errors import ApiError, ErrorKind
from app.schemas import LoginRequest, LoginResponse, MessageResponse
from app.services.auth import AuthService, AuthenticationError


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Exchange username/password for a session token.

    The token is returned in the body for bearer use and also set as
    the session cookie.
    """
    auth = AuthService(db)

    try:
        _, session = auth.login(
            payload.username,
            payload.password,
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    except AuthenticationError as e:
        raise ApiError(ErrorKind.UNAUTHENTICATED, str(e)) from e

    response = JSONResponse(
        content={
            "status": True,
            "message": "Logged in",
            "data": {
                "token": session.session_token,
                "expires_at": session.expires_at.isoformat(),
            },
        }
    )
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.session_token,
        httponly=True,  # Not accessible via JavaScript
        secure=not get_settings().debug,
        samesite="lax",
        max_age=get_settings().session_expire_minutes * 60,
    )
    return response


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    db: Session = Depends(get_db),
):
    """Invalidate the presented session token and clear the cookie."""
    session_token = get_session_token(request)

    if session_token:
        AuthService(db).logout(session_token)

    response = JSONResponse(content={"status": True, "message": "Logged out"})
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response
