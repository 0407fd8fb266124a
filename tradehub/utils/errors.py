"""
Application error taxonomy and the error envelope every endpoint returns.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base error carrying an HTTP status and a machine-readable code."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class PaymentInitializationError(AppError):
    status_code = 500
    code = "PAYMENT_INIT_ERROR"


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTH_ERROR"

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AuthorizationError(AppError):
    status_code = 403
    code = "AUTHZ_ERROR"

    def __init__(self, message: str = "Insufficient permissions", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"


def format_error_response(error: AppError) -> Dict[str, Any]:
    """
    Convert an application error into the error envelope.

    Args:
        error: Error raised while handling a request

    Returns:
        Dictionary with status, message, code and optional details
    """
    response = {
        "status": "error",
        "message": error.message,
        "code": error.code,
    }
    if error.details:
        response["details"] = error.details
    return response
