"""
Service-layer exceptions.

Services raise these instead of building HTTP responses. The API boundary
(config/urls.py) maps each one to its status code and a JSON
``{"error": message}`` body.
"""
from decimal import Decimal


class ServiceError(Exception):
    """Base class for business-rule violations surfaced to the client."""
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class AuthError(ServiceError):
    status_code = 400
    default_message = "Invalid email or password."


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    status_code = 400
    default_message = "Resource already exists"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Not authorized."


class InsufficientFundsError(ServiceError):
    """Raised when a charge exceeds the available balance."""
    status_code = 400

    def __init__(self, required: Decimal, available: Decimal):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient funds. You need ${required:.2f} but have ${available:.2f}. "
            "Please add funds first."
        )
