"""Custom exception classes for the application.

Every exception carries an ``ErrorKind`` tag; the HTTP layer translates the
kind into a status code in a single place (``app.api.errors``).
"""
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    MALFORMED_FILTER = "MALFORMED_FILTER"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    UNEXPECTED = "UNEXPECTED"


class AppException(Exception):
    """Base exception for the application."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(AppException):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ValidationError(AppException):
    """Data validation error."""

    kind = ErrorKind.VALIDATION


class DuplicateError(AppException):
    """Duplicate resource detected."""

    kind = ErrorKind.CONFLICT


class MalformedFilterError(AppException):
    """Model output is not a valid property filter."""

    kind = ErrorKind.MALFORMED_FILTER


class InvalidResponseError(AppException):
    """Model returned no text at all."""

    kind = ErrorKind.INVALID_RESPONSE


class AIServiceError(AppException):
    """The text-generation call itself failed (network, timeout, config)."""

    kind = ErrorKind.UNEXPECTED


class UnauthorizedError(AppException):
    """Missing, invalid or expired credentials."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(AppException):
    """Authenticated caller lacks the required role or ownership."""

    kind = ErrorKind.FORBIDDEN
