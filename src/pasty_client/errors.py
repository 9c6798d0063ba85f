"""Exceptions raised by the pasty client.

Everything derives from PastyError so callers can catch a single type at
the client boundary. Raw httpx/pydantic exceptions are always wrapped.
"""
from __future__ import annotations

from typing import Optional


class PastyError(Exception):
    """Base class for all pasty client errors."""


class ConfigError(PastyError, ValueError):
    """Invalid client configuration, e.g. a malformed base URL."""


class ApiError(PastyError):
    """A request to the pasty API failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NetworkError(ApiError):
    """Transport-level failure (connection refused, timeout, TLS)."""


class NotFoundError(ApiError):
    """The referenced paste does not exist."""


class UnauthorizedError(ApiError):
    """The modification token was rejected for the target paste."""


class MalformedResponseError(ApiError):
    """The response body could not be parsed into the expected shape."""


class ServerError(ApiError):
    """Non-success status not covered by a more specific error."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Server error: {status_code}", status_code, body)
