"""Authentication and authorization exceptions."""

from opencycle_admin.exceptions.base import AppException


class AuthenticationError(AppException):
    """The caller could not be identified."""

    pass


class InvalidTokenError(AuthenticationError):
    """Bearer token is malformed, badly signed, or names no known user."""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Bearer token is well formed but past its `exp` claim."""

    def __init__(self):
        super().__init__("Token has expired")


class InsufficientPermissionsError(AuthenticationError):
    """
    The caller is authenticated but is not an administrator.

    Mapped to 403 rather than 401 by the HTTP layer.
    """

    def __init__(self, message: str = "Administrator privileges required"):
        super().__init__(message)
