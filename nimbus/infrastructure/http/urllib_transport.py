"""
urllib HTTP Transport

Architectural Intent:
- Implements HttpTransportPort with stdlib urllib.request (no external
  HTTP dependency)
- Blocking I/O runs in a worker thread via asyncio.to_thread so callers
  can await it and fan listings out concurrently

Design Decisions:
- HTTP error statuses become the CloudApiError taxonomy here, once, so
  adapters and fallbacks never look at raw status codes
- Connection failures and timeouts become TransportError
- No retries: a failed call fails the listing at that point
"""

import asyncio
import json
import logging
import urllib.error
import urllib.request
from typing import Optional

from nimbus.domain.errors import CloudApiError, TransportError
from nimbus.domain.value_objects.http_exchange import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def _error_message(body: bytes, fallback: str) -> str:
    """Extract the provider's error message from a JSON error body.

    GCE:     {"error": {"code": 404, "message": "..."}}
    Neutron: {"NeutronError": {"type": "...", "message": "..."}}
    """
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return fallback
    if not isinstance(data, dict):
        return fallback
    for key in ("error", "NeutronError", "itemNotFound", "badRequest"):
        detail = data.get(key)
        if isinstance(detail, dict) and detail.get("message"):
            return str(detail["message"])
        if isinstance(detail, str):
            return detail
    return fallback


class UrllibTransport:
    """HTTP transport backed by urllib.request."""

    def __init__(
        self,
        timeout_seconds: float = 30,
        user_agent: str = "nimbus",
        opener: Optional[urllib.request.OpenerDirector] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self._opener = opener or urllib.request.build_opener()

    async def send(self, request: HttpRequest, base_url: str) -> HttpResponse:
        return await asyncio.to_thread(self._send_blocking, request, base_url)

    def _send_blocking(self, request: HttpRequest, base_url: str) -> HttpResponse:
        url = request.url(base_url)
        body = request.body_bytes()
        raw = urllib.request.Request(url, data=body, method=request.method)
        for name, value in request.headers:
            raw.add_header(name, value)
        raw.add_header("User-Agent", self.user_agent)
        if body is not None:
            raw.add_header("Content-Type", "application/json")

        logger.debug("%s %s", request.method, url)
        try:
            with self._opener.open(raw, timeout=self.timeout_seconds) as response:
                return HttpResponse(
                    status=response.status,
                    body=response.read(),
                    headers=dict(response.headers.items()),
                )
        except urllib.error.HTTPError as e:
            error_body = e.read() or b""
            message = _error_message(error_body, str(e.reason))
            logger.debug("%s %s -> HTTP %d: %s", request.method, url, e.code, message)
            raise CloudApiError.from_status(e.code, message, error_body) from e
        except (urllib.error.URLError, TimeoutError, ConnectionError) as e:
            reason = getattr(e, "reason", e)
            raise TransportError(f"{request.method} {url} failed: {reason}") from e
