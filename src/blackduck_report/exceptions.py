# blackduck_report/exceptions.py

from typing import Any, Dict, Optional


class BlackDuckReportError(Exception):
    """Base exception for every error raised by the Black Duck report tool."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(BlackDuckReportError):
    """Raised when the tool is configured in a way it cannot work with."""


class ValidationError(BlackDuckReportError):
    """Raised when command line inputs are missing or invalid."""


class NetworkError(BlackDuckReportError):
    """Raised on transport level failures (connection refused, DNS, timeouts)."""


class AuthenticationError(BlackDuckReportError):
    """Raised when the server answers 401 Unauthorized."""


class NotLoggedInError(BlackDuckReportError):
    """Raised when an authenticated call is attempted without a valid bearer token."""


class OperationCancelledError(BlackDuckReportError):
    """Raised when the cancellation token is set before a network call."""


class ApiError(BlackDuckReportError):
    """Raised when the Black Duck API answers with something we cannot use."""


class MalformedResponseError(ApiError):
    """Raised on an unexpected content type or an empty/undecodable success body."""


class ServerError(ApiError):
    """
    Raised when the server answers with a non-success status.

    The decoded error payload (if any) is available as ``payload``.
    """

    def __init__(self, message: str, payload: Any = None, status_code: Optional[int] = None,
                 code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)
        self.payload = payload
        self.status_code = status_code


class NotFoundError(BlackDuckReportError):
    """Raised when a requested resource does not exist."""


class ProjectNotFoundError(NotFoundError):
    """Raised when no project matches the requested name."""


class ProjectVersionNotFoundError(NotFoundError):
    """Raised when no fetched project matches the requested version."""
