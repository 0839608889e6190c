"""
REST Client

Architectural Intent:
- The generic "execute and deserialize" step every resource adapter calls
  with an explicit HttpRequest and a parse function
- Stands where a dynamic proxy would synthesize calls from annotations:
  signing, sending, timing, tracing and JSON decoding live here once

Design Decisions:
- Errors from the transport are re-raised untouched after being recorded;
  fallback policy is the adapter's decision, never the client's
- parse receives the decoded JSON (None for an empty body)
"""

import logging
import time
from typing import Any, Callable, Optional, TypeVar

from nimbus.domain.errors import CloudApiError
from nimbus.domain.ports.transport_port import HttpTransportPort, RequestSignerPort
from nimbus.domain.value_objects.http_exchange import HttpRequest
from nimbus.infrastructure.http.auth import NoopSigner
from nimbus.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _identity(data: Any) -> Any:
    return data


class RestClient:
    """Signs, sends and decodes requests against one service endpoint."""

    def __init__(
        self,
        base_url: str,
        transport: HttpTransportPort,
        signer: Optional[RequestSignerPort] = None,
        telemetry: Optional[OTELExporter] = None,
        service: str = "",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.signer = signer or NoopSigner()
        self.telemetry = telemetry or OTELExporter(OTELConfig())
        self.service = service

    async def execute(
        self,
        request: HttpRequest,
        parse: Callable[[Any], T] = _identity,
    ) -> T:
        signed = self.signer.sign(request)
        span = self.telemetry.start_span(
            f"{self.service} {request.method}",
            attributes={"http.method": request.method, "http.path": request.path},
        )
        started = time.monotonic()
        try:
            response = await self.transport.send(signed, self.base_url)
        except Exception as e:
            status = e.status if isinstance(e, CloudApiError) else None
            elapsed_ms = (time.monotonic() - started) * 1000
            self.telemetry.record_request(request.method, status, elapsed_ms)
            self.telemetry.end_span(span, status)
            logger.debug(
                "%s %s failed after %.1fms: %s",
                request.method,
                request.path,
                elapsed_ms,
                e,
                extra=self._log_context(request, status, elapsed_ms),
            )
            raise

        elapsed_ms = (time.monotonic() - started) * 1000
        self.telemetry.record_request(request.method, response.status, elapsed_ms)
        self.telemetry.end_span(span, response.status)
        logger.debug(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.path,
            response.status,
            elapsed_ms,
            extra=self._log_context(request, response.status, elapsed_ms),
        )
        return parse(response.json())

    def _log_context(
        self, request: HttpRequest, status: Optional[int], elapsed_ms: float
    ) -> dict[str, Any]:
        return {
            "service": self.service,
            "method": request.method,
            "path": request.path,
            "status": status,
            "duration_ms": round(elapsed_ms, 1),
        }

    def record_page(self, resource: str, item_count: int) -> None:
        self.telemetry.record_page(resource, item_count)
