"""
OpenTelemetry Exporter for nimbus

Architectural Intent:
- Exports request and pagination telemetry to OTLP-compatible backends
- One span per HTTP call; counters for requests, failures and fetched pages
- Local buffer of recorded metrics so tests and the CLI can inspect them
  without a collector

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

logger = logging.getLogger(__name__)


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "nimbus"
    environment: str = "development"
    enable_traces: bool = True
    enable_metrics: bool = True
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry exporter for nimbus API clients.

    Metrics:
    - nimbus.http.requests       (counter; method, status)
    - nimbus.http.duration_ms    (histogram; method)
    - nimbus.pages.fetched       (counter; resource)
    - nimbus.items.fetched       (counter; resource)
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: list[dict[str, Any]] = []
        self._meter: Any = None
        self._instruments: dict[str, Any] = {}

    @property
    def enabled(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Initialize OpenTelemetry SDK and exporters."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        try:
            from opentelemetry import trace
            from opentelemetry.sdk.trace import TracerProvider
            from opentelemetry.sdk.trace.export import BatchSpanProcessor
            from opentelemetry.sdk.resources import Resource, SERVICE_NAME
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )
            from opentelemetry import metrics
            from opentelemetry.sdk.metrics import MeterProvider
            from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )

            resource = Resource(
                attributes={
                    SERVICE_NAME: self.config.service_name,
                    "environment": self.config.environment,
                }
            )

            if self.config.enable_traces:
                trace.set_tracer_provider(TracerProvider(resource=resource))
                span_processor = BatchSpanProcessor(
                    OTLPSpanExporter(
                        endpoint=self.config.endpoint, insecure=self.config.insecure
                    )
                )
                trace.get_tracer_provider().add_span_processor(span_processor)

            if self.config.enable_metrics:
                metric_reader = PeriodicExportingMetricReader(
                    OTLPMetricExporter(
                        endpoint=self.config.endpoint, insecure=self.config.insecure
                    )
                )
                provider = MeterProvider(
                    resource=resource, metric_readers=[metric_reader]
                )
                metrics.set_meter_provider(provider)
                self._meter = metrics.get_meter(__name__)

            self._initialized = True

        except ImportError:
            logger.warning("OpenTelemetry SDK not installed, telemetry disabled")
            self._initialized = False

    def _counter(self, name: str, unit: str = "") -> Any:
        if name not in self._instruments and self._meter:
            self._instruments[name] = self._meter.create_counter(name, unit=unit)
        return self._instruments.get(name)

    def _histogram(self, name: str, unit: str = "") -> Any:
        if name not in self._instruments and self._meter:
            self._instruments[name] = self._meter.create_histogram(name, unit=unit)
        return self._instruments.get(name)

    def _buffer(
        self, name: str, value: float, unit: str, attributes: dict[str, str]
    ) -> None:
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "unit": unit,
                "attributes": attributes,
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

    def record_request(
        self, method: str, status: Optional[int], duration_ms: float
    ) -> None:
        """Record one completed (or failed) HTTP call."""
        attributes = {"method": method, "status": str(status) if status else "error"}
        self._buffer("nimbus.http.requests", 1, "", attributes)
        self._buffer("nimbus.http.duration_ms", duration_ms, "ms", {"method": method})

        if self._initialized:
            counter = self._counter("nimbus.http.requests")
            if counter:
                counter.add(1, attributes=attributes)
            histogram = self._histogram("nimbus.http.duration_ms", "ms")
            if histogram:
                histogram.record(duration_ms, attributes={"method": method})

    def record_page(self, resource: str, item_count: int) -> None:
        """Record one fetched page of a listing."""
        attributes = {"resource": resource}
        self._buffer("nimbus.pages.fetched", 1, "", attributes)
        self._buffer("nimbus.items.fetched", item_count, "", attributes)

        if self._initialized:
            pages = self._counter("nimbus.pages.fetched")
            if pages:
                pages.add(1, attributes=attributes)
            items = self._counter("nimbus.items.fetched")
            if items:
                items.add(item_count, attributes=attributes)

    def metrics_named(self, name: str) -> list[dict[str, Any]]:
        return [m for m in self._metrics_buffer if m["name"] == name]

    def start_span(
        self,
        name: str,
        attributes: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """Start a tracing span, or return None when tracing is disabled."""
        if not self._initialized:
            return None

        from opentelemetry import trace

        tracer = trace.get_tracer(__name__)
        return tracer.start_span(name, attributes=attributes or {})

    def end_span(self, span: Any, status: Optional[int] = None) -> None:
        """End a tracing span."""
        if span is None:
            return
        if status is not None:
            span.set_attribute("http.status_code", status)
        span.end()

    async def export(self) -> None:
        """Flush the local metric buffer; the SDK exports on its own schedule."""
        exported_count = len(self._metrics_buffer)
        self._metrics_buffer.clear()

        if exported_count:
            logger.debug("Flushed %d buffered metrics", exported_count)


async def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "nimbus",
    insecure: bool = False,
) -> OTELExporter:
    """Factory function to create OTEL exporter."""
    config = OTELConfig(
        endpoint=endpoint or "",
        service_name=service_name,
        insecure=insecure,
    )
    exporter = OTELExporter(config)
    await exporter.initialize()
    return exporter
