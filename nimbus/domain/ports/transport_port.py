"""
Transport and Signing Ports

Architectural Intent:
- Boundary contracts for the HTTP collaborator and the request-signing
  filter sitting in front of it
- The pagination core depends on neither; resource adapters reach them
  through the RestClient
"""

from typing import Protocol, runtime_checkable

from nimbus.domain.value_objects.http_exchange import HttpRequest, HttpResponse


@runtime_checkable
class HttpTransportPort(Protocol):
    """Sends a request and returns the response, raising CloudApiError on failure."""

    async def send(self, request: HttpRequest, base_url: str) -> HttpResponse:
        ...


@runtime_checkable
class RequestSignerPort(Protocol):
    """Adds credentials to a request. Invoked once per HTTP call."""

    def sign(self, request: HttpRequest) -> HttpRequest:
        ...
