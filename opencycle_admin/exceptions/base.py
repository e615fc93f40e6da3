"""Base exception for every application-level error."""


class AppException(Exception):
    """Root of the application exception hierarchy."""

    def __init__(self, message: str = "An application error occurred"):
        self.message = message
        super().__init__(message)
