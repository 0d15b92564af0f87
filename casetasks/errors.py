# casetasks/errors.py
from typing import Any, Dict, List, Optional


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code.

    Services raise these; the exception handlers in
    ``casetasks.utils.responses`` turn them into the error envelope.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str = "Validation failed", details=None):
        super().__init__(message, details=details)


class AuthError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class InternalError(AppError):
    status_code = 500
