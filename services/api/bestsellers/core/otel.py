from __future__ import annotations

import threading

from bestsellers.core.config import Settings
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

# The tracer provider and httpx patching are process-wide; set them up once.
_process_lock = threading.Lock()
_process_instrumented = False


def _init_process(settings: Settings) -> None:
    global _process_instrumented
    with _process_lock:
        if _process_instrumented:
            return

        resource = Resource.create(
            {
                "service.name": settings.api_name,
                "deployment.environment": settings.env,
            }
        )
        provider = TracerProvider(resource=resource)

        # OTEL_EXPORTER_OTLP_* env vars still apply when no endpoint is configured.
        endpoint = settings.otel_otlp_endpoint
        exporter = OTLPSpanExporter(endpoint=endpoint) if endpoint else OTLPSpanExporter()

        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        HTTPXClientInstrumentor().instrument()
        _process_instrumented = True


def init_otel(app, settings: Settings) -> bool:
    """Trace inbound requests and the outbound NYT call when OTEL_ENABLED is set.

    Returns whether tracing was switched on for ``app``.
    """
    if not settings.otel_enabled:
        return False

    _init_process(settings)
    FastAPIInstrumentor.instrument_app(app)
    return True
