# WorkHours - API Errors
# Error kinds and the JSON envelope they are rendered into

import enum

from fastapi import Request, status
from fastapi.responses import JSONResponse


class ErrorKind(str, enum.Enum):
    """Failure categories a client can branch on."""

    UNAUTHENTICATED = "unauthenticated"
    INTERNAL = "internal_error"

    @property
    def status_code(self) -> int:
        return {
            ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
            ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
        }[self]


class ApiError(Exception):
    """
    Raised from routes and dependencies to produce an error envelope.

    Rendered as:
        {"status": false, "message": <message>, "error": <kind>}
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """FastAPI exception handler for ApiError."""
    return JSONResponse(
        status_code=exc.kind.status_code,
        content={
            "status": False,
            "message": exc.message,
            "error": exc.kind.value,
        },
    )
