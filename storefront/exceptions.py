"""
Application error types.

Services raise these; the handlers registered in ``storefront.main`` render
them as the standard error envelope.
"""
from typing import Any, Optional


class AppError(Exception):
    """Base application error carrying an HTTP status and a machine-readable code"""

    def __init__(self, code: str, message: str, status_code: int = 500, details: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details


class ValidationError(AppError):
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__("VALIDATION_ERROR", message, 400, details)


class BadRequestError(AppError):
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__("BAD_REQUEST", message, 400, details)


class AuthenticationError(AppError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__("UNAUTHORIZED", message, 401)


class AuthorizationError(AppError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__("FORBIDDEN", message, 403)


class NotFoundError(AppError):
    def __init__(self, resource: str):
        super().__init__("NOT_FOUND", f"{resource} not found", 404)


class DatabaseError(AppError):
    def __init__(self, message: str = "Database operation failed", details: Optional[Any] = None):
        super().__init__("DATABASE_ERROR", message, 500, details)


class ExternalServiceError(AppError):
    def __init__(self, service: str, message: str = "Service unavailable"):
        super().__init__("EXTERNAL_SERVICE_ERROR", f"{service}: {message}", 502)
