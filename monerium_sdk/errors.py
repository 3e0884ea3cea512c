from typing import Any, Dict, Optional


class MoneriumError(Exception):
    """Base class for all SDK errors."""


class ConfigError(MoneriumError):
    """Raised when the client configuration is incomplete."""


class RequestValidationError(MoneriumError, ValueError):
    """Raised when a request object is rejected before any I/O happens."""


class TransportError(MoneriumError):
    """Raised when the HTTP request could not be performed."""


class TokenAcquisitionError(MoneriumError):
    """Raised when an OAuth2 access token could not be obtained."""


class NotificationConnectionError(MoneriumError, ConnectionError):
    """Raised when the notification WebSocket could not be dialed."""


class ReadError(MoneriumError):
    """A single notification frame could not be read."""


class DecodeError(ReadError):
    """A notification frame was read but its payload is not a valid order."""


class CancellationError(MoneriumError):
    """The notification listener was stopped by the caller."""


class APIError(MoneriumError):
    """Non-success response returned by the API."""

    def __init__(
        self,
        call: str,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        status: str = "",
        correlation_id: str = "",
        errors: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.call = call
        self.status_code = status_code
        self.message = message
        self.code = code
        self.status = status
        self.correlation_id = correlation_id
        self.errors = errors
        self.details = details or {}

        text = f"{call} call failed due to: {message}"
        if correlation_id:
            text = f"{text}. CorrelationID: {correlation_id}"
        if errors:
            text = f"{text}. Details: {errors}"
        super().__init__(text)
