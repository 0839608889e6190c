"""Global test configuration.

Provides an in-memory HTTP transport that replays queued responses and
records every request, so adapters can be exercised without a network.
"""

import json

import pytest

from nimbus.domain.errors import CloudApiError
from nimbus.domain.value_objects.http_exchange import HttpRequest, HttpResponse
from nimbus.infrastructure.http.rest_client import RestClient


class FakeTransport:
    """HttpTransportPort double: scripted responses in, recorded requests out."""

    def __init__(self):
        self.requests: list[HttpRequest] = []
        self.base_urls: list[str] = []
        self._replies: list = []

    def reply(self, payload=None, status: int = 200) -> "FakeTransport":
        body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self._replies.append(HttpResponse(status=status, body=body))
        return self

    def fail(self, status: int, message: str = "error") -> "FakeTransport":
        self._replies.append(CloudApiError.from_status(status, message))
        return self

    def raise_error(self, error: Exception) -> "FakeTransport":
        self._replies.append(error)
        return self

    async def send(self, request: HttpRequest, base_url: str) -> HttpResponse:
        self.requests.append(request)
        self.base_urls.append(base_url)
        if not self._replies:
            raise AssertionError(f"Unexpected request: {request.method} {request.path}")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def last(self) -> HttpRequest:
        return self.requests[-1]

    def query_of(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].query)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def gce_client(transport):
    return RestClient(
        "https://compute.example.com/compute/v1", transport, service="gce"
    )


@pytest.fixture
def neutron_client(transport):
    return RestClient("http://neutron.example.com:9696/v2.0", transport, service="neutron")
