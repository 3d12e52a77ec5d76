"""OpenTelemetry and Cloud Trace integration with custom metrics."""

import os
from contextlib import contextmanager
from threading import Lock
from typing import Any, Generator, Optional

from opentelemetry import trace
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SERVICE_NAME = "notify-api"

# In-memory counters (process lifetime)
_metrics: dict[str, int] = {
    "registrations_total": 0,
    "notifications_sent_total": 0,
    "notification_write_failures_total": 0,
}
_metrics_lock = Lock()


def get_tracer(name: str = SERVICE_NAME) -> Any:
    """Return OpenTelemetry tracer."""
    return trace.get_tracer(name)


def init_telemetry(service_name: str = SERVICE_NAME, project_id: Optional[str] = None) -> None:
    """Initialize Cloud Trace exporter and tracer provider."""
    project = project_id or os.getenv("GCP_PROJECT_ID", "")
    if not project:
        return
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    exporter = CloudTraceSpanExporter(project_id=project)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)


def instrument_fastapi(app: Any) -> None:
    """Instrument FastAPI app for automatic tracing."""
    FastAPIInstrumentor.instrument_app(app)


def _incr(name: str) -> None:
    with _metrics_lock:
        _metrics[name] = _metrics.get(name, 0) + 1


def record_registration() -> None:
    """Increment registrations_total."""
    _incr("registrations_total")


def record_notification_sent() -> None:
    """Increment notifications_sent_total."""
    _incr("notifications_sent_total")


def record_write_failure() -> None:
    """Increment notification_write_failures_total."""
    _incr("notification_write_failures_total")


def get_metrics() -> dict[str, int]:
    """Return current metrics snapshot (for /metrics or tests)."""
    with _metrics_lock:
        return dict(_metrics)


@contextmanager
def span(name: str, attributes: Optional[dict[str, Any]] = None) -> Generator[Any, None, None]:
    """Context manager for a child span."""
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span_obj:
        if attributes:
            for key, val in attributes.items():
                if val is not None:
                    span_obj.set_attribute(key, str(val))
        yield span_obj
