"""
API exceptions carrying a machine-readable error code.

Every exception renders as HTTPException detail
{"message": ..., "code": ..., "details": ...} so clients can branch on
the code (CHECKIN_EXISTS, PLAN_NOT_FOUND, INVALID_DATE, ...).

Example:
    from common.utils import ConflictException

    if existing:
        raise ConflictException("You have already checked in today", code="CHECKIN_EXISTS")
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """Base class; subclasses fix the status code and default code."""

    status: int = 500
    default_message: str = "Internal server error"
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        detail: Dict[str, Any] = {
            "message": message or self.default_message,
            "code": code or self.default_code,
        }
        if details is not None:
            detail["details"] = details

        super().__init__(status_code=self.status, detail=detail, headers=headers)

    @property
    def message(self) -> str:
        return self.detail["message"]

    @property
    def code(self) -> str:
        return self.detail["code"]


class UnauthorizedException(APIException):
    """401 - bearer token missing, malformed or rejected."""

    status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, code, details, headers={"WWW-Authenticate": "Bearer"})


class NotFoundException(APIException):
    """404 - check-in, plan, action or trigger date doesn't exist for this user."""

    status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictException(APIException):
    """409 - e.g. a second check-in for the same day."""

    status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class ValidationException(APIException):
    """422 - metrics, dates or labels outside their allowed ranges."""

    status = 422
    default_message = "Validation error"
    default_code = "VALIDATION_ERROR"
