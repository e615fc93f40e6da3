"""
Domain exceptions raised by services and dependencies.

They carry no HTTP knowledge; `opencycle_admin.core.error_handlers` maps them
to status codes.
"""

from opencycle_admin.exceptions.base import AppException
from opencycle_admin.exceptions.crud import NotFoundError, ValidationError
from opencycle_admin.exceptions.auth import (
    AuthenticationError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError,
)
from opencycle_admin.exceptions.analytics import MetricUnavailableError

__all__ = [
    "AppException",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "InvalidTokenError",
    "TokenExpiredError",
    "InsufficientPermissionsError",
    "MetricUnavailableError",
]
