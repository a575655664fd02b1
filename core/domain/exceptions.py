"""
Domain exceptions.

Each exception carries the HTTP status the API layer renders it with, so
services can raise them without knowing about FastAPI.
"""
from typing import List, Optional


class DomainError(Exception):
    """Base class for all expected business failures."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[dict]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        param: Optional[str] = None,
        errors: Optional[List[dict]] = None,
    ):
        if errors is None and param is not None:
            errors = [{"param": param, "message": message or self.default_message}]
        super().__init__(message, errors)
        self.param = param


class AuthenticationError(DomainError):
    status_code = 401
    default_message = "Not authorized"


class InvalidSignatureError(AuthenticationError):
    """Webhook signature missing or not matching the request body."""

    default_message = "Invalid signature"


class ForbiddenError(DomainError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Resource not found"


class PaymentInitializationError(DomainError):
    """The gateway could not start a transaction; the customer cannot proceed."""

    status_code = 500
    default_message = "Failed to initialize payment"


class PaymentGatewayError(DomainError):
    """Upstream gateway failure outside initialization."""

    status_code = 500
    default_message = "Payment gateway error"
