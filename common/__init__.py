"""
Shared infrastructure for the MentalSpace service.

- config: environment-backed settings base class
- database: Motor connection manager with index setup
- auth: bearer-token verification and the FastAPI dependency factory
- utils: success envelope and coded API exceptions
"""

from common.config import BaseAppSettings
from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.utils import success_response, APIException

__all__ = [
    "BaseAppSettings",
    "MongoDB",
    "AuthProvider",
    "JWTAuth",
    "create_auth_dependency",
    "success_response",
    "APIException",
]
