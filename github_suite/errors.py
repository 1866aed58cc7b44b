"""Exception types raised by the suite's building blocks."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when required configuration (credentials) is missing."""


class RemoteOperationError(RuntimeError):
    """
    Raised when a REST API call does not succeed.

    Attributes:
        status_code: HTTP status of the failed response, or None when the
            request never produced a response (DNS, connection, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StrategyExhaustedError(RuntimeError):
    """Raised after every known fallback UI interaction has failed."""
