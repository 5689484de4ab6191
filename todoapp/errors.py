# todoapp/errors.py
"""
Domain errors raised by request handlers.

Each error carries the HTTP status and problem title it maps to, so the
exception handlers never need to look at message text.
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Invalid operation"

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation error"


class ConflictError(AppError):
    # Duplicate resources are reported as 400, like other validation failures
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation error"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Authentication failed"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Resource not found"

    @classmethod
    def for_entity(cls, entity: str, entity_id: int) -> "NotFoundError":
        return cls(f"{entity} with ID {entity_id} does not exist.")


class RateLimitExceededError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    title = "Too many requests"
