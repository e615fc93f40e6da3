"""Exceptions raised by the service layer around stored records."""

import uuid

from opencycle_admin.exceptions.base import AppException


class NotFoundError(AppException):
    """Requested record does not exist."""

    def __init__(self, resource: str, identifier: uuid.UUID | str):
        """
        Build the error for a missing record.

        Parameters:
            resource (str): Kind of record looked up, e.g. "Item" or "Setting".
            identifier (uuid.UUID | str): Primary key or natural key that was not found.
        """
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} '{identifier}' not found")


class ValidationError(AppException):
    """Input was rejected by a service-level rule."""

    def __init__(self, message: str, field: str | None = None):
        """
        Build the error for a rejected input.

        Parameters:
            message (str): What was wrong with the input.
            field (str | None): Name of the offending field or setting key, when there is one.
        """
        self.field = field
        super().__init__(message)
