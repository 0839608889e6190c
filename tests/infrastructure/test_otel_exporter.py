"""Tests for OTELExporter."""

import pytest
from unittest.mock import MagicMock

from nimbus.infrastructure.telemetry.otel_exporter import (
    OTELConfig,
    OTELExporter,
    create_exporter,
)


class TestOTELConfig:
    def test_default_empty_endpoint(self):
        assert OTELConfig().endpoint == ""

    def test_localhost_http_allowed(self):
        config = OTELConfig(endpoint="http://localhost:4317")
        assert config.endpoint == "http://localhost:4317"

    def test_remote_https_allowed(self):
        config = OTELConfig(endpoint="https://collector.example.com:4317")
        assert config.endpoint == "https://collector.example.com:4317"

    def test_remote_http_rejected(self):
        with pytest.raises(ValueError, match="insecure=True"):
            OTELConfig(endpoint="http://collector.example.com:4317")

    def test_remote_http_with_insecure(self):
        config = OTELConfig(endpoint="http://collector.example.com:4317", insecure=True)
        assert config.insecure is True


class TestOTELExporter:
    def test_record_request_buffers(self):
        exporter = OTELExporter(OTELConfig())
        exporter.record_request("GET", 200, 12.5)
        requests = exporter.metrics_named("nimbus.http.requests")
        durations = exporter.metrics_named("nimbus.http.duration_ms")
        assert requests[0]["attributes"] == {"method": "GET", "status": "200"}
        assert durations[0]["value"] == 12.5
        assert durations[0]["unit"] == "ms"

    def test_record_page_buffers(self):
        exporter = OTELExporter(OTELConfig())
        exporter.record_page("instances", 3)
        assert exporter.metrics_named("nimbus.pages.fetched")[0]["value"] == 1
        assert exporter.metrics_named("nimbus.items.fetched")[0]["value"] == 3

    def test_spans_disabled_without_initialize(self):
        exporter = OTELExporter(OTELConfig())
        span = exporter.start_span("gce GET")
        assert span is None
        exporter.end_span(span, 200)

    def test_end_span_sets_status(self):
        span = MagicMock()
        OTELExporter(OTELConfig()).end_span(span, 404)
        span.set_attribute.assert_called_once_with("http.status_code", 404)
        span.end.assert_called_once()

    def test_instruments_used_when_initialized(self):
        exporter = OTELExporter(OTELConfig())
        exporter._initialized = True
        exporter._meter = MagicMock()

        exporter.record_page("networks", 2)

        counter = exporter._meter.create_counter.return_value
        counter.add.assert_any_call(2, attributes={"resource": "networks"})

    @pytest.mark.asyncio
    async def test_export_clears_buffer(self):
        exporter = OTELExporter(OTELConfig())
        exporter.record_page("instances", 1)
        await exporter.export()
        assert exporter.metrics_named("nimbus.pages.fetched") == []

    @pytest.mark.asyncio
    async def test_initialize_without_endpoint_stays_disabled(self):
        exporter = await create_exporter()
        assert exporter.enabled is False
