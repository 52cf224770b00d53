"""Custom exception hierarchy."""

from typing import Any, Optional


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class BackendError(AppError):
    """Raised when the backing store or the auth service reports a failure.

    Carries the HTTP status returned by the service (when there was one) and
    the service's own error detail so callers can surface it.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Any = None,
        original_error: Exception = None,
    ):
        super().__init__(message, original_error=original_error)
        self.status_code = status_code
        self.detail = detail


class AuthenticationRequired(AppError):
    """Raised when a request carries no active session.

    ``login_url`` is where the browser should be sent to sign in.
    """

    def __init__(self, message: str, login_url: Optional[str] = None, original_error: Exception = None):
        super().__init__(message, original_error=original_error)
        self.login_url = login_url


class PermissionDeniedError(AppError):
    """Raised when the current user lacks the role an operation needs."""
    pass


class ValidationError(AppError):
    """Raised when input validation fails."""
    pass


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass
