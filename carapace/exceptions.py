"""Exception classes raised by the Carapace client and server."""

from typing import Any, Optional


class CarapaceError(Exception):
    """Base exception for this package"""
    pass


class ConfigurationError(CarapaceError):
    """Raised when the server cannot be built, e.g. no API key"""
    pass


class CarapaceAPIError(CarapaceError):
    """The Carapace API answered with a non-success status.

    ``str(exc)`` is the message surfaced to the agent: the API's own
    ``error.message`` when present, otherwise ``"API error: <status>"``.
    The parsed error body is kept on ``body`` for logging only.
    """

    def __init__(self, message: str, status_code: int, body: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
