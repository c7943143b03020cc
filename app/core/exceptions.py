from typing import Optional, Any, Dict


class AppError(Exception):
    """
    Base exception for NEXA domain errors.
    Carries the HTTP status and a machine-readable code for the envelope.
    """
    def __init__(self, message: str, status_code: int = 500, code: Optional[str] = None, details: Optional[Any] = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """
    Raised when input validation fails.
    `errors` maps client-facing field names to messages.
    """
    def __init__(self, message: str = "Validation error", errors: Optional[Dict[str, str]] = None):
        super().__init__(message, status_code=400, code="VALIDATION_ERROR")
        self.errors = errors


class UnauthorizedError(AppError):
    """
    Raised when authentication fails.
    """
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")


class ForbiddenError(AppError):
    """
    Raised when the caller lacks the role required for an action.
    """
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status_code=403, code="FORBIDDEN")


class NotFoundError(AppError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", status_code=404, code="NOT_FOUND")
        self.resource = resource


class ServiceUnavailableError(AppError):
    """
    Raised when a backend (document store, identity provider) is not configured or unreachable.
    """
    def __init__(self, message: str = "Service unavailable"):
        super().__init__(message, status_code=503, code="SERVICE_UNAVAILABLE")
