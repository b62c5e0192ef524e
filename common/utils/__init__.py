"""
Response envelope and API exceptions.
"""

from common.utils.responses import success_response
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    ValidationException,
)

__all__ = [
    "success_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
]
