"""
Application exceptions raised by the data-access layer.

Each class carries the HTTP status the API layer answers with; the
exception handler registered in main.py turns them into
{"detail": message} responses.
"""

from fastapi import status


class AppError(Exception):
    """Base exception for all application-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """The targeted company, job or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class DuplicateEntityError(BadRequestError):
    """Create called with an identifier that already exists."""


class InvalidInputError(BadRequestError):
    """Empty partial update, bad filter range or unknown field."""


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
