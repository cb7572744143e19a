"""OpenTelemetry export for the blog service.

Nothing is exported unless ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set; tracer and
meter lookups then resolve to the API's no-op providers.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SERVICE_NAME = "blog-api"

_exporting = False
_log_provider: Any = None

# structlog keys that LogRecord already owns or that we pass separately.
_RESERVED_LOG_KEYS = frozenset(vars(logging.makeLogRecord({}))) | {
    "event",
    "level",
    "timestamp",
    "message",
    "taskName",
}


def _resource() -> Resource:
    return Resource.create(
        {
            "service.name": SERVICE_NAME,
            "service.version": os.environ.get("SERVICE_VERSION", "0.1.0"),
            "deployment.environment": os.environ.get("DEPLOYMENT_ENV", ""),
        }
    )


def _export_logs(resource: Resource) -> Any:
    from opentelemetry._logs import set_logger_provider
    from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
    from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
    from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

    provider = LoggerProvider(resource=resource)
    provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter()))
    set_logger_provider(provider)

    bridge = logging.getLogger(SERVICE_NAME)
    bridge.addHandler(LoggingHandler(logger_provider=provider))
    bridge.setLevel(logging.DEBUG)
    bridge.propagate = False
    return provider


def init_telemetry() -> None:
    """Install OTLP trace, metric and log exporters once per process."""
    global _exporting, _log_provider  # noqa: PLW0603
    if _exporting or not os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        return

    resource = _resource()
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
    trace.set_tracer_provider(tracer_provider)
    metrics.set_meter_provider(
        MeterProvider(
            metric_readers=[PeriodicExportingMetricReader(OTLPMetricExporter())],
            resource=resource,
        )
    )
    _log_provider = _export_logs(resource)
    _exporting = True


def shutdown_telemetry() -> None:
    """Flush pending spans, metrics and log records."""
    global _exporting, _log_provider  # noqa: PLW0603
    if not _exporting:
        return
    tracer_provider = trace.get_tracer_provider()
    if isinstance(tracer_provider, TracerProvider):
        tracer_provider.shutdown()
    meter_provider = metrics.get_meter_provider()
    if isinstance(meter_provider, MeterProvider):
        meter_provider.shutdown()
    if _log_provider is not None:
        _log_provider.shutdown()
    _exporting = False
    _log_provider = None


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


def add_trace_context(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Structlog processor: stamp the active span's trace and span IDs."""
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def emit_to_otel_logs(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Structlog processor: copy each event to the OTLP-exported stdlib logger."""
    if _log_provider is None:
        return event_dict
    level = logging.getLevelName(str(event_dict.get("level", "info")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    extra = {k: v for k, v in event_dict.items() if k not in _RESERVED_LOG_KEYS}
    logging.getLogger(SERVICE_NAME).log(level, event_dict.get("event", ""), extra=extra)
    return event_dict
