"""
Cloud API Error Taxonomy

Architectural Intent:
- Provider-neutral exceptions raised by the transport and surfaced by every
  resource adapter
- Fallback policies match on ResourceNotFoundError only; everything else
  propagates to the caller unchanged

Design Decisions:
- One base class carrying the HTTP status and raw body so callers can inspect
  provider error payloads without a second parse
- from_status() centralises the status -> exception mapping used by transports
"""

from typing import Optional


class CloudApiError(Exception):
    """Base class for errors returned by a cloud provider API."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"HTTP {self.status}: {self.message}"

    @staticmethod
    def from_status(status: int, message: str, body: bytes = b"") -> "CloudApiError":
        """Return the most specific error type for an HTTP status code."""
        if status == 404:
            return ResourceNotFoundError(message, status, body)
        if status in (401, 403):
            return AuthorizationError(message, status, body)
        if 400 <= status < 500:
            return ClientRequestError(message, status, body)
        if status >= 500:
            return ServerError(message, status, body)
        return CloudApiError(message, status, body)


class ResourceNotFoundError(CloudApiError):
    """The resource or collection does not exist (HTTP 404)."""


class AuthorizationError(CloudApiError):
    """Credentials were rejected or lack the required scope (HTTP 401/403)."""


class ClientRequestError(CloudApiError):
    """The request was malformed or conflicted with server state (other 4xx)."""


class ServerError(CloudApiError):
    """The provider failed to process a valid request (5xx)."""


class TransportError(CloudApiError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""


class SequenceConsumedError(RuntimeError):
    """A PagedSequence was iterated a second time."""
