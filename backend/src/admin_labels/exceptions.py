"""Custom exception classes for the function.

This module provides domain-specific exception classes that carry
appropriate HTTP status codes and structured error information.
"""

from __future__ import annotations

from typing import Iterable
from typing import Optional


class AppError(Exception):
    """Base exception for function errors.

    All function-specific exceptions should inherit from this class.
    Each exception carries an HTTP status code and optional details.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class ValidationError(AppError):
    """Raised when request input validation fails.

    Use for missing bodies, malformed JSON, or missing required fields.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        detail = f"Field: {field}" if field else None
        super().__init__(message, status_code=400, detail=detail)
        self.field = field


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} with ID {identifier} not found.",
            status_code=404,
        )
        self.resource = resource
        self.identifier = identifier


class ConfigurationError(AppError):
    """Raised when required configuration is missing.

    Use when function variables are not properly configured.
    """

    def __init__(self, config_names: Iterable[str]):
        names = list(config_names)
        super().__init__(
            f"Missing required configuration: {', '.join(names)}",
            status_code=500,
        )
        self.config_names = names

